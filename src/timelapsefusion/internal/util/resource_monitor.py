"""Resource monitoring utilities for memory and disk space management."""

import gc
import logging
import shutil
from pathlib import Path
from typing import Optional, Union

import psutil

from ...common.exceptions import (
    TimeLapseFusionDirectoryException,
    TimeLapseFusionMemoryException,
)

logger = logging.getLogger(__name__)

FLOAT64_BYTES = 8


class ResourceMonitor:
    """Monitor system resources and fail early when a run cannot fit."""

    # Default thresholds (can be overridden)
    MEMORY_WARNING_THRESHOLD = 0.85  # 85% memory usage
    MEMORY_CRITICAL_THRESHOLD = 0.95  # 95% memory usage
    DISK_WARNING_THRESHOLD = 0.90  # 90% disk usage
    MIN_FREE_DISK_GB = 0.1

    @staticmethod
    def get_memory_info() -> dict:
        """Get detailed memory information."""
        memory = psutil.virtual_memory()
        return {
            "total_gb": memory.total / (1024**3),
            "available_gb": memory.available / (1024**3),
            "used_gb": memory.used / (1024**3),
            "percent": memory.percent,
        }

    @staticmethod
    def get_disk_usage(path: Union[str, Path]) -> dict:
        """Get disk usage information for a specific path."""
        usage = shutil.disk_usage(Path(path))
        return {
            "total_gb": usage.total / (1024**3),
            "used_gb": usage.used / (1024**3),
            "free_gb": usage.free / (1024**3),
            "percent": (usage.used / usage.total) * 100,
        }

    @classmethod
    def check_memory_availability(
        cls,
        estimated_usage_gb: Optional[float] = None,
        warning_threshold: Optional[float] = None,
        critical_threshold: Optional[float] = None,
    ) -> None:
        """Check if sufficient memory is available.

        Args:
            estimated_usage_gb: Estimated additional memory needed in GB
            warning_threshold: Memory usage threshold for warnings (0.0-1.0)
            critical_threshold: Memory usage threshold for critical errors (0.0-1.0)

        Raises:
            TimeLapseFusionMemoryException: If memory is critically low
        """
        warning_threshold = warning_threshold or cls.MEMORY_WARNING_THRESHOLD
        critical_threshold = critical_threshold or cls.MEMORY_CRITICAL_THRESHOLD

        memory_info = cls.get_memory_info()
        current_usage = memory_info["percent"] / 100.0

        if estimated_usage_gb:
            projected_usage = current_usage + estimated_usage_gb / memory_info["total_gb"]
            if projected_usage > critical_threshold:
                raise TimeLapseFusionMemoryException(
                    f"Projected memory usage ({projected_usage:.1%}) would exceed "
                    f"critical threshold ({critical_threshold:.1%}). "
                    f"Available: {memory_info['available_gb']:.1f}GB, "
                    f"Estimated needed: {estimated_usage_gb:.1f}GB"
                )

        if current_usage > critical_threshold:
            raise TimeLapseFusionMemoryException(
                f"Memory usage ({current_usage:.1%}) exceeds critical threshold "
                f"({critical_threshold:.1%}). Available: {memory_info['available_gb']:.1f}GB"
            )
        elif current_usage > warning_threshold:
            logger.warning(
                f"Memory usage ({current_usage:.1%}) is high. Available: {memory_info['available_gb']:.1f}GB"
            )

    @classmethod
    def check_disk_space(
        cls,
        path: Union[str, Path],
        estimated_usage_gb: Optional[float] = None,
        min_free_gb: Optional[float] = None,
    ) -> None:
        """Check if the destination can hold the fused output.

        Args:
            path: Existing path on the destination file system
            estimated_usage_gb: Estimated disk space needed in GB
            min_free_gb: Minimum free space required in GB

        Raises:
            TimeLapseFusionDirectoryException: If disk space is insufficient
        """
        min_free_gb = min_free_gb or cls.MIN_FREE_DISK_GB

        disk_info = cls.get_disk_usage(path)
        free_gb = disk_info["free_gb"]
        required_gb = max(min_free_gb, estimated_usage_gb or 0.0)

        if free_gb < required_gb:
            raise TimeLapseFusionDirectoryException(
                f"Insufficient free disk space: {free_gb:.1f}GB available, "
                f"required: {required_gb:.1f}GB"
            )

        if disk_info["percent"] / 100.0 > cls.DISK_WARNING_THRESHOLD:
            logger.warning(
                f"Disk usage ({disk_info['percent']:.1f}%) is high. Free space: {free_gb:.1f}GB"
            )

    @staticmethod
    def estimate_pyramid_bytes(
        height: int, width: int, channels: int = 3, levels: int = 5
    ) -> int:
        """Estimate the size of a float64 pyramid of an image.

        Args:
            height: Image height in pixels
            width: Image width in pixels
            channels: Number of color channels
            levels: Number of pyramid levels

        Returns:
            Estimated size in bytes
        """
        total = 0
        for _ in range(levels):
            total += height * width * channels * FLOAT64_BYTES
            height, width = (height + 1) // 2, (width + 1) // 2
        return total

    @classmethod
    def estimate_fusion_memory_gb(
        cls, height: int, width: int, channels: int, levels: int, window_frames: int
    ) -> float:
        """Estimate peak memory of a fusion run in GB.

        Every frame kept alive holds a weighted Laplacian pyramid and a
        single-channel weight pyramid; one more frame's worth covers the
        accumulators, and the full-resolution working images add a few planes.
        """
        frame_bytes = cls.estimate_pyramid_bytes(
            height, width, channels, levels
        ) + cls.estimate_pyramid_bytes(height, width, 1, levels)
        working_bytes = height * width * (channels + 4) * FLOAT64_BYTES
        total_bytes = frame_bytes * (window_frames + 1) + working_bytes
        return total_bytes / (1024**3)

    @classmethod
    def force_garbage_collection(cls) -> dict:
        """Force garbage collection and return memory info."""
        gc.collect()
        return cls.get_memory_info()

    @classmethod
    def log_resource_status(cls, context: str = "") -> None:
        """Log current resource status.

        Args:
            context: Context description for the log message
        """
        memory_info = cls.get_memory_info()
        logger.info(
            f"{context} - Memory: {memory_info['used_gb']:.1f}GB/{memory_info['total_gb']:.1f}GB "
            f"({memory_info['percent']:.1f}%), Available: {memory_info['available_gb']:.1f}GB"
        )


def check_resources_before_fusing(
    frame_shape: tuple[int, ...],
    levels: int,
    window_frames: int,
    destination_directory: Union[str, Path],
) -> None:
    """Resource check run once the first frame's geometry is known.

    Args:
        frame_shape: Shape of the first frame
        levels: Requested pyramid depth
        window_frames: Number of frames held at once (1 for static fusion)
        destination_directory: Directory the outputs are written to

    Raises:
        TimeLapseFusionMemoryException: If memory is insufficient
        TimeLapseFusionDirectoryException: If disk space is insufficient
    """
    logger.info("Performing resource availability checks...")

    height, width = frame_shape[:2]
    channels = 1 if len(frame_shape) == 2 else frame_shape[2]

    memory_gb = ResourceMonitor.estimate_fusion_memory_gb(
        height, width, channels, levels, window_frames
    )
    logger.info(f"Estimated peak memory for fusion: {memory_gb:.2f}GB")
    ResourceMonitor.check_memory_availability(memory_gb)

    # One uncompressed 8-bit output frame
    output_gb = height * width * channels / (1024**3)
    ResourceMonitor.check_disk_space(destination_directory, output_gb)

    ResourceMonitor.log_resource_status("Before fusing")
    logger.info("Resource checks completed successfully")
