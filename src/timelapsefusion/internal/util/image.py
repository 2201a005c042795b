"""Image utility functions for the OpenCV operations used by fusion."""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ...common.exceptions import (
    TimeLapseFusionDirectoryException,
    TimeLapseFusionFileException,
    TimeLapseFusionImageProcessingException,
    TimeLapseFusionMemoryException,
)

logger = logging.getLogger(__name__)

LUMINANCE_COEFFICIENTS = (0.299, 0.587, 0.114)


class ImageUtils:
    """Utility class for image I/O and filtering using OpenCV."""

    @staticmethod
    def load_image(path: Union[str, Path]) -> np.ndarray:
        """Load image from path as float64 RGB scaled to [0, 1].

        Args:
            path: Path to the image file

        Returns:
            Image array in RGB format

        Raises:
            TimeLapseFusionFileException: If image cannot be loaded
            TimeLapseFusionImageProcessingException: If image conversion fails
            TimeLapseFusionMemoryException: If insufficient memory
        """
        path = Path(path)

        try:
            img = cv2.imread(str(path), cv2.IMREAD_COLOR)
            if img is None:
                raise TimeLapseFusionFileException(f"Could not load image from {path}")

            logger.debug(f"Loaded {path.name} ({img.shape[1]}x{img.shape[0]})")
            rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
            return rgb.astype(np.float64) / 255.0
        except MemoryError as e:
            raise TimeLapseFusionMemoryException(
                f"Insufficient memory to load image {path}: {e}"
            ) from e
        except cv2.error as e:
            raise TimeLapseFusionImageProcessingException(
                f"Image processing failed while loading {path}: {e}"
            ) from e

    @staticmethod
    def save_image(image: np.ndarray, path: Union[str, Path]) -> None:
        """Save a [0, 1] float RGB (or single-channel) image to path.

        Args:
            image: Image array in RGB format
            path: Destination path for the image

        Raises:
            TimeLapseFusionFileException: If image cannot be saved
            TimeLapseFusionImageProcessingException: If image conversion fails
            TimeLapseFusionDirectoryException: If insufficient disk space
        """
        path = Path(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise TimeLapseFusionFileException(
                f"Permission denied creating directory for {path}: {e}"
            ) from e
        except OSError as e:
            raise TimeLapseFusionFileException(
                f"Failed to create directory for {path}: {e}"
            ) from e

        # Fused values can overshoot [0, 1] near strong edges
        img_u8 = np.clip(np.rint(image * 255.0), 0, 255).astype(np.uint8)

        try:
            if img_u8.ndim == 3:
                img_u8 = cv2.cvtColor(img_u8, cv2.COLOR_RGB2BGR)
            success = cv2.imwrite(str(path), img_u8)
            if not success:
                raise TimeLapseFusionFileException(f"Failed to save image to {path}")
        except MemoryError as e:
            raise TimeLapseFusionMemoryException(
                f"Insufficient memory to save image {path}: {e}"
            ) from e
        except OSError as e:
            if "No space left" in str(e):
                raise TimeLapseFusionDirectoryException(
                    f"Insufficient disk space to save image {path}: {e}"
                ) from e
            raise TimeLapseFusionFileException(
                f"Failed to save image to {path}: {e}"
            ) from e
        except cv2.error as e:
            raise TimeLapseFusionImageProcessingException(
                f"Image processing failed while saving {path}: {e}"
            ) from e

    @staticmethod
    def rgb_to_luminance(image: np.ndarray) -> np.ndarray:
        """Convert an RGB float image to luminance.

        Single-channel images are returned as a float64 copy.
        """
        if image.ndim == 2:
            return image.astype(np.float64)
        r, g, b = LUMINANCE_COEFFICIENTS
        return r * image[..., 0] + g * image[..., 1] + b * image[..., 2]

    @staticmethod
    def laplacian_filter(image: np.ndarray) -> np.ndarray:
        """Apply the 3x3 Laplacian filter in double precision."""
        return cv2.Laplacian(image, cv2.CV_64F)

    @staticmethod
    def pyramid_down(image: np.ndarray) -> np.ndarray:
        """Blur with the 5x5 Gaussian kernel and halve, rounding sizes up."""
        return cv2.pyrDown(image)

    @staticmethod
    def pyramid_up(image: np.ndarray, shape: tuple[int, ...]) -> np.ndarray:
        """Upsample image to the (height, width) given by shape.

        Args:
            image: Coarser level
            shape: Shape of the finer level to match

        Returns:
            Upsampled image with the finer level's height and width
        """
        height, width = shape[:2]
        return cv2.pyrUp(image, dstsize=(width, height))

