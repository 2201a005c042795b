"""Per-pixel fusion quality measures.

References:
    Mertens, Kautz & Van Reeth (2007): Exposure Fusion.
"""

import numpy as np

from ...common.exceptions import (
    TimeLapseFusionConfigurationException,
    TimeLapseFusionImageProcessingException,
    TimeLapseFusionMemoryException,
)
from ..util.image import ImageUtils

ALPHA_MIN = 0.0
ALPHA_MAX = 10.0
DEFAULT_EPSILON = 1e-12


def validate_alpha(name: str, value: float) -> None:
    if not ALPHA_MIN <= value <= ALPHA_MAX:
        raise TimeLapseFusionConfigurationException(
            f"{name} must be in [{ALPHA_MIN:g}, {ALPHA_MAX:g}], got {value}"
        )


def contrast_measure(image: np.ndarray) -> np.ndarray:
    """Absolute Laplacian response of the luminance."""
    gray = ImageUtils.rgb_to_luminance(image)
    return np.abs(ImageUtils.laplacian_filter(gray))


def saturation_measure(image: np.ndarray) -> np.ndarray:
    """Standard deviation across the color channels.

    Single-channel images carry no chroma, so the measure is 1 everywhere.
    """
    if image.ndim == 2:
        return np.ones(image.shape, dtype=np.float64)
    return np.std(image, axis=2)


def exposedness_measure(
    image: np.ndarray, mean: float = 0.5, sigma: float = 0.2
) -> np.ndarray:
    """Product over channels of a Gaussian centered on mid-gray."""
    per_channel = np.exp(-((image - mean) ** 2) / (2 * sigma**2))
    if image.ndim == 2:
        return per_channel
    return np.prod(per_channel, axis=2)


def compute_weight_map(
    image: np.ndarray,
    alpha_c: float,
    alpha_s: float,
    alpha_e: float,
    *,
    exposedness_mean: float = 0.5,
    exposedness_sigma: float = 0.2,
    epsilon: float = DEFAULT_EPSILON,
) -> np.ndarray:
    """Compute the fusion weight of every pixel of an image.

    The weight is contrast**alpha_c * saturation**alpha_s * exposedness**alpha_e.
    An exponent of 0 turns its factor into exactly 1, removing that measure.
    epsilon is added to the product so flat regions keep a small weight and
    still normalize to their own pixels.

    Args:
        image: Float image in [0, 1], shape (h, w) or (h, w, 3)
        alpha_c: Contrast exponent in [0, 10]
        alpha_s: Saturation exponent in [0, 10]
        alpha_e: Well-exposedness exponent in [0, 10]
        exposedness_mean: Value considered perfectly exposed
        exposedness_sigma: Spread of the well-exposedness Gaussian
        epsilon: Non-negative floor added to every weight

    Returns:
        New single-channel float64 weight map with the image's size

    Raises:
        TimeLapseFusionConfigurationException: If an exponent is out of range
        TimeLapseFusionImageProcessingException: If the image shape is unsupported
        TimeLapseFusionMemoryException: If insufficient memory
    """
    validate_alpha("alpha_c", alpha_c)
    validate_alpha("alpha_s", alpha_s)
    validate_alpha("alpha_e", alpha_e)
    if epsilon < 0:
        raise TimeLapseFusionConfigurationException(
            f"epsilon must not be negative, got {epsilon}"
        )

    if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[2] != 3):
        raise TimeLapseFusionImageProcessingException(
            f"Weight maps need a 1 or 3 channel image, got shape {image.shape}"
        )

    try:
        weights = np.ones(image.shape[:2], dtype=np.float64)
        # Skipped measures are exactly 1, so they need not be computed
        if alpha_c != 0:
            weights *= np.power(contrast_measure(image), alpha_c)
        if alpha_s != 0:
            weights *= np.power(saturation_measure(image), alpha_s)
        if alpha_e != 0:
            weights *= np.power(
                exposedness_measure(image, exposedness_mean, exposedness_sigma),
                alpha_e,
            )
        weights += epsilon
    except MemoryError as e:
        raise TimeLapseFusionMemoryException(
            f"Insufficient memory to compute weight map: {e}"
        ) from e

    return weights
