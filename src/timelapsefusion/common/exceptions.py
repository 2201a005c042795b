class TimeLapseFusionException(Exception):
    """Base exception for time-lapse fusion."""

    pass


class TimeLapseFusionValidationException(TimeLapseFusionException):
    """Exception raised when a validation error occurs."""

    pass


class TimeLapseFusionConfigurationException(TimeLapseFusionException):
    """Exception raised when configuration parameters are invalid."""

    pass


class TimeLapseFusionFusingException(TimeLapseFusionException):
    """Exception raised when fusing a sequence fails."""

    pass


class TimeLapseFusionFileException(TimeLapseFusionException):
    """Exception raised when an image cannot be read or written."""

    pass


class TimeLapseFusionMemoryException(TimeLapseFusionException):
    """Exception raised when memory or resource limits are exceeded."""

    pass


class TimeLapseFusionGeometryException(TimeLapseFusionException):
    """Exception raised when images or pyramids of different geometry are combined."""

    pass


class TimeLapseFusionImageProcessingException(TimeLapseFusionException):
    """Exception raised when image processing operations fail."""

    pass


class TimeLapseFusionDirectoryException(TimeLapseFusionException):
    """Exception raised when directory operations fail."""

    pass
