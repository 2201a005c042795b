"""Laplacian and Gaussian pyramids with validated level geometry.

References:
    Burt & Adelson (1983): The Laplacian Pyramid as a Compact Image Code.
"""

import logging
from collections.abc import Sequence

import numpy as np

from ...common.exceptions import (
    TimeLapseFusionGeometryException,
    TimeLapseFusionMemoryException,
)
from ..util.image import ImageUtils
from ..util.pointwise import (
    broadcast_channels,
    channel_count,
    image_scale,
    pointwise_add,
    pointwise_div,
)

logger = logging.getLogger(__name__)


def next_level_shape(height: int, width: int) -> tuple[int, int]:
    return (height + 1) // 2, (width + 1) // 2


def clamp_levels(shape: tuple[int, ...], requested: int) -> int:
    """Deepest pyramid not exceeding requested that the image can support.

    A level is added only while both dimensions of the current coarsest
    level are at least 2, so no level ever drops below one pixel.
    """
    if requested < 1:
        raise TimeLapseFusionGeometryException(
            f"Pyramid depth must be at least 1, got {requested}"
        )
    height, width = shape[:2]
    levels = 1
    while levels < requested and height >= 2 and width >= 2:
        height, width = next_level_shape(height, width)
        levels += 1
    return levels


class Pyramid:
    """Ordered pyramid levels, level 0 at full resolution.

    Geometry is checked once here: every level has the same channel count and
    each level is the previous one halved with rounding up. Level contents may
    be updated in place by accumulation, their shapes may not.
    """

    def __init__(self, levels: Sequence[np.ndarray]) -> None:
        if len(levels) == 0:
            raise TimeLapseFusionGeometryException("A pyramid needs at least one level")

        channels = channel_count(levels[0])
        for i, level in enumerate(levels):
            if level.ndim not in (2, 3):
                raise TimeLapseFusionGeometryException(
                    f"Level {i} has unsupported shape {level.shape}"
                )
            if channel_count(level) != channels:
                raise TimeLapseFusionGeometryException(
                    f"Level {i} has {channel_count(level)} channels, expected {channels}"
                )
            if i > 0:
                expected = next_level_shape(*levels[i - 1].shape[:2])
                if level.shape[:2] != expected:
                    raise TimeLapseFusionGeometryException(
                        f"Level {i} has size {level.shape[:2]}, expected {expected}"
                    )

        self._levels = list(levels)
        self._channels = channels

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, index: int) -> np.ndarray:
        return self._levels[index]

    def __iter__(self):
        return iter(self._levels)

    @property
    def depth(self) -> int:
        return len(self._levels)

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def geometry(self) -> list[tuple[int, int]]:
        """(height, width) of each level."""
        return [level.shape[:2] for level in self._levels]

    def check_compatible(self, other: "Pyramid") -> None:
        """Raise if other does not have the same depth and per-level sizes."""
        if self.depth != other.depth or self.geometry != other.geometry:
            raise TimeLapseFusionGeometryException(
                f"Pyramid geometry mismatch: {other.geometry} vs {self.geometry}"
            )

    @classmethod
    def zeros_like(cls, other: "Pyramid", channels: int) -> "Pyramid":
        """Zero-filled pyramid with other's level sizes and the given channel count."""
        try:
            levels = []
            for height, width in other.geometry:
                shape = (height, width) if channels == 1 else (height, width, channels)
                levels.append(np.zeros(shape, dtype=np.float64))
        except MemoryError as e:
            raise TimeLapseFusionMemoryException(
                f"Insufficient memory to allocate accumulator pyramid: {e}"
            ) from e
        return cls(levels)


def gaussian_pyramid(image: np.ndarray, levels: int) -> Pyramid:
    """Low-pass pyramid: each level a blurred and halved copy of the previous."""
    depth = clamp_levels(image.shape, levels)
    try:
        pyramid = [image.astype(np.float64)]
        for _level in range(depth - 1):
            pyramid.append(ImageUtils.pyramid_down(pyramid[-1]))
    except MemoryError as e:
        raise TimeLapseFusionMemoryException(
            f"Insufficient memory to build Gaussian pyramid: {e}"
        ) from e
    return Pyramid(pyramid)


def laplacian_pyramid(image: np.ndarray, levels: int) -> Pyramid:
    """Band-pass pyramid whose last level holds the low-pass remainder."""
    gaussian = gaussian_pyramid(image, levels)
    try:
        bands = []
        for i in range(gaussian.depth - 1):
            upsampled = ImageUtils.pyramid_up(gaussian[i + 1], gaussian[i].shape)
            bands.append(gaussian[i] - upsampled)
            del upsampled
        bands.append(gaussian[-1].copy())
    except MemoryError as e:
        raise TimeLapseFusionMemoryException(
            f"Insufficient memory to build Laplacian pyramid: {e}"
        ) from e
    if gaussian.depth < levels:
        logger.debug(
            f"Pyramid depth clamped from {levels} to {gaussian.depth} for size {image.shape[:2]}"
        )
    return Pyramid(bands)


def collapse_pyramid(pyramid: Pyramid) -> np.ndarray:
    """Reconstruct an image from a Laplacian pyramid, coarsest level first."""
    try:
        result = pyramid[-1].copy()
        for i in range(pyramid.depth - 2, -1, -1):
            result = ImageUtils.pyramid_up(result, pyramid[i].shape)
            pointwise_add(result, pyramid[i])
    except MemoryError as e:
        raise TimeLapseFusionMemoryException(
            f"Insufficient memory to collapse pyramid: {e}"
        ) from e
    return result


def weighted_pyramid(laplacian: Pyramid, weights: Pyramid) -> Pyramid:
    """Multiply each Laplacian level by the weight level of the same size."""
    laplacian.check_compatible(weights)
    try:
        levels = []
        for band, weight in zip(laplacian, weights):
            if band.ndim == 3:
                weight = weight[..., np.newaxis]
            levels.append(band * weight)
    except MemoryError as e:
        raise TimeLapseFusionMemoryException(
            f"Insufficient memory to weight pyramid: {e}"
        ) from e
    return Pyramid(levels)


def accumulate_pyramid(dst: Pyramid, src: Pyramid, scale: float = 1.0) -> None:
    """Add scale * src into dst level by level; src is left untouched."""
    dst.check_compatible(src)
    for dst_level, src_level in zip(dst, src):
        if scale == 1.0:
            pointwise_add(dst_level, src_level)
        else:
            scaled = src_level.copy()
            image_scale(scaled, scale)
            pointwise_add(dst_level, scaled)
            del scaled


def normalize_pyramid(f_pyr: Pyramid, w_pyr: Pyramid) -> None:
    """Divide accumulated weighted levels by accumulated weights, in place."""
    f_pyr.check_compatible(w_pyr)
    for f_level, w_level in zip(f_pyr, w_pyr):
        divisor = broadcast_channels(w_level, channel_count(f_level))
        pointwise_div(f_level, divisor)
        del divisor
