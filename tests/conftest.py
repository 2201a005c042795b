"""Pytest configuration and shared fixtures."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import cv2
import numpy as np
import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory(prefix="test_tl_fusion_") as tmp:
        yield Path(tmp)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def textured_image(rng: np.random.Generator) -> np.ndarray:
    """Random RGB image in [0, 1] with an odd size to exercise rounding."""
    return rng.uniform(0.05, 0.95, size=(45, 61, 3))


@pytest.fixture
def textured_frames(rng: np.random.Generator) -> list[np.ndarray]:
    """Five different random RGB frames of the same size."""
    return [rng.uniform(0.05, 0.95, size=(40, 52, 3)) for _ in range(5)]


def write_ppm(path: Path, image: np.ndarray) -> None:
    """Write a float RGB image in [0, 1] as an 8-bit PPM."""
    img_u8 = np.clip(np.rint(image * 255.0), 0, 255).astype(np.uint8)
    assert cv2.imwrite(str(path), cv2.cvtColor(img_u8, cv2.COLOR_RGB2BGR))


@pytest.fixture
def source_dir(temp_dir: Path, textured_frames: list[np.ndarray]) -> Path:
    """Directory of five .ppm frames, one with an upper-case extension."""
    directory = temp_dir / "src"
    directory.mkdir()
    for i, frame in enumerate(textured_frames):
        suffix = ".PPM" if i == 2 else ".ppm"
        write_ppm(directory / f"frame_{i:03d}{suffix}", frame)
    (directory / "notes.txt").write_text("not an image")
    return directory


@pytest.fixture
def destination_dir(temp_dir: Path) -> Path:
    """Output directory that does not exist yet."""
    return temp_dir / "output"


@pytest.fixture
def default_alphas() -> dict[str, float]:
    """Default exponents for testing."""
    return {"alpha_c": 1.0, "alpha_s": 1.0, "alpha_e": 1.0}

