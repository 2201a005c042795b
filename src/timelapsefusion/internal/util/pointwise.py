"""In-place elementwise arithmetic used to accumulate pyramid levels."""

import numpy as np

from ...common.exceptions import TimeLapseFusionGeometryException


def _check_same_geometry(dst: np.ndarray, src: np.ndarray, operation: str) -> None:
    if dst.shape != src.shape:
        raise TimeLapseFusionGeometryException(
            f"Cannot {operation} images of shape {src.shape} and {dst.shape}"
        )


def pointwise_add(dst: np.ndarray, src: np.ndarray) -> None:
    """Add src into dst for every pixel and channel.

    Raises:
        TimeLapseFusionGeometryException: If the shapes differ
    """
    _check_same_geometry(dst, src, "add")
    np.add(dst, src, out=dst)


def pointwise_div(dst: np.ndarray, src: np.ndarray) -> None:
    """Divide dst by src for every pixel and channel.

    Pixels where src is exactly zero are set to zero, so locations no frame
    contributed any weight to come out black instead of NaN.

    Raises:
        TimeLapseFusionGeometryException: If the shapes differ
    """
    _check_same_geometry(dst, src, "divide")
    nonzero = src != 0
    np.divide(dst, src, out=dst, where=nonzero)
    dst[~nonzero] = 0.0


def image_scale(dst: np.ndarray, scalar: float) -> None:
    """Multiply every pixel and channel of dst by scalar."""
    np.multiply(dst, scalar, out=dst)


def broadcast_channels(plane: np.ndarray, channels: int) -> np.ndarray:
    """Replicate a single-channel plane into a (h, w, channels) image.

    A one-channel target returns a copy of the plane unchanged.
    """
    if plane.ndim != 2:
        raise TimeLapseFusionGeometryException(
            f"Expected a single-channel plane, got shape {plane.shape}"
        )
    if channels == 1:
        return plane.copy()
    return np.repeat(plane[..., np.newaxis], channels, axis=2)


def channel_count(image: np.ndarray) -> int:
    return 1 if image.ndim == 2 else image.shape[2]
