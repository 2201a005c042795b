from .enums import FusionMode
from .exceptions import (
    TimeLapseFusionConfigurationException,
    TimeLapseFusionDirectoryException,
    TimeLapseFusionException,
    TimeLapseFusionFileException,
    TimeLapseFusionFusingException,
    TimeLapseFusionGeometryException,
    TimeLapseFusionImageProcessingException,
    TimeLapseFusionMemoryException,
    TimeLapseFusionValidationException,
)

__all__ = [
    "FusionMode",
    "TimeLapseFusionException",
    "TimeLapseFusionValidationException",
    "TimeLapseFusionConfigurationException",
    "TimeLapseFusionFusingException",
    "TimeLapseFusionFileException",
    "TimeLapseFusionMemoryException",
    "TimeLapseFusionGeometryException",
    "TimeLapseFusionImageProcessingException",
    "TimeLapseFusionDirectoryException",
]
