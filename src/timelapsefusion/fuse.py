import itertools
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Union

import numpy as np

from .common.enums import FusionMode
from .common.exceptions import (
    TimeLapseFusionDirectoryException,
    TimeLapseFusionException,
    TimeLapseFusionFusingException,
)
from .internal.config.base import WeightMapConfig
from .internal.models.factory import FusionConfigFactory
from .internal.models.validation import FusionInputValidation
from .internal.util.image import ImageUtils
from .internal.util.resource_monitor import (
    ResourceMonitor,
    check_resources_before_fusing,
)
from .internal.util.sequence import iter_source_images, list_source_images

logger = logging.getLogger(__name__)


def fuse_images(
    images: Iterable[np.ndarray],
    *,
    alpha_c: float = 1.0,
    alpha_s: float = 1.0,
    alpha_e: float = 1.0,
    tau: float = -1.0,
    levels: int = 5,
) -> Iterator[np.ndarray]:
    """Fuse in-memory float images in [0, 1].

    Returns an iterator with one image for a negative tau, otherwise one image
    per input frame. Configuration errors are raised immediately, processing
    errors while iterating.
    """
    mode = FusionMode.from_tau(tau)
    config = FusionConfigFactory.create(
        mode=mode,
        weight_map=WeightMapConfig(alpha_c=alpha_c, alpha_s=alpha_s, alpha_e=alpha_e),
        levels=levels,
        tau=tau,
    )
    return config.fuser.fuse(images)


def fuse_sequence(
    source_directory: Union[str, Path],
    destination_directory: Union[str, Path],
    *,
    alpha_c: float = 1.0,
    alpha_s: float = 1.0,
    alpha_e: float = 1.0,
    tau: float = -1.0,
    levels: int = 5,
) -> list[Path]:
    """Fuse the .ppm frames of a directory and write the results.

    Returns:
        Paths of the written images, in output order
    """
    logger.info("Time-Lapse Fusion called with")
    logger.info(f"Source image directory: {source_directory}")
    logger.info(f"Output image directory: {destination_directory}")
    logger.info(f"Alphas [C,S,E]=[{alpha_c},{alpha_s},{alpha_e}]")
    logger.info(f"Tau: {tau}")
    logger.info(f"Levels: {levels}")

    # Validate all inputs using Pydantic (handles str -> Path conversion)
    validated_input = FusionInputValidation(
        source_directory=source_directory,
        destination_directory=destination_directory,
        alpha_c=alpha_c,
        alpha_s=alpha_s,
        alpha_e=alpha_e,
        tau=tau,
        levels=levels,
    )

    source_directory = Path(validated_input.source_directory)
    destination_directory = Path(validated_input.destination_directory)

    image_paths = list_source_images(source_directory)
    if not image_paths:
        raise TimeLapseFusionDirectoryException(
            f"No source images found in {source_directory}"
        )
    logger.info(f"Found {len(image_paths)} source images")

    mode = FusionMode.from_tau(validated_input.tau)
    config = FusionConfigFactory.create(
        mode=mode,
        weight_map=WeightMapConfig(
            alpha_c=validated_input.alpha_c,
            alpha_s=validated_input.alpha_s,
            alpha_e=validated_input.alpha_e,
        ),
        levels=validated_input.levels,
        tau=validated_input.tau,
    )
    fuser = config.fuser
    logger.info(f"Mode: {mode.value}, frames per output: {fuser.window_frames}")

    try:
        destination_directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TimeLapseFusionDirectoryException(
            f"Failed to create destination directory {destination_directory}: {e}"
        ) from e

    # The first frame is read up front so its size can drive the resource check
    frames = iter_source_images(image_paths)
    first_frame = next(frames)
    # The window never holds more frames than the sequence has
    window_frames = min(fuser.window_frames, len(image_paths))
    check_resources_before_fusing(
        first_frame.shape,
        validated_input.levels,
        window_frames,
        destination_directory,
    )

    written = []
    try:
        outputs = fuser.fuse(itertools.chain([first_frame], frames))
        del first_frame
        for index, fused in enumerate(outputs):
            output_path = destination_directory / fuser.output_name(index)
            ImageUtils.save_image(fused, output_path)
            logger.info(f"Wrote {output_path}")
            written.append(output_path)
            del fused
    except TimeLapseFusionException:
        raise
    except Exception as e:
        raise TimeLapseFusionFusingException(f"Fusion failed: {e}") from e
    finally:
        ResourceMonitor.log_resource_status("After fusing")
        ResourceMonitor.force_garbage_collection()

    logger.info(f"Fusion finished, {len(written)} image(s) written")
    return written
