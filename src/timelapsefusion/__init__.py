"""Time-Lapse Fusion - exposure fusion of image sequences using Laplacian pyramid blending."""

from .fuse import fuse_images, fuse_sequence

__version__ = "0.1.0"
__all__ = ["fuse_images", "fuse_sequence"]
