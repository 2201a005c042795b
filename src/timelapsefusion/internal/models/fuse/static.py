import logging
from collections.abc import Iterable, Iterator

import numpy as np

from ....common.enums import FusionMode
from ....common.exceptions import TimeLapseFusionFusingException
from ...config.fuser import StaticFuseConfig
from ...models.decorators import Fuser
from ..pyramid import Pyramid, accumulate_pyramid
from .base import Fuser as FuserBase

logger = logging.getLogger(__name__)


@Fuser(FusionMode.STATIC)
class StaticFuser(FuserBase):
    """Exposure fusion of a whole sequence into one image.

    Frames are accumulated incrementally, so only one frame's pyramids and the
    two accumulators are alive at any time regardless of sequence length.
    """

    def __init__(self, *, config: StaticFuseConfig) -> None:
        super().__init__(config=config)

    def output_name(self, index: int) -> str:
        return self.config.output_name

    def fuse(self, frames: Iterable[np.ndarray]) -> Iterator[np.ndarray]:
        f_pyr = None
        w_pyr = None
        count = 0

        for image in frames:
            t_pyr, pyr_w = self.decompose(image)
            del image

            if f_pyr is None:
                # First frame fixes the accumulator geometry
                f_pyr = Pyramid.zeros_like(t_pyr, t_pyr.channels)
                w_pyr = Pyramid.zeros_like(pyr_w, 1)
                logger.info(
                    f"Accumulating into {f_pyr.depth}-level pyramids of size {f_pyr.geometry[0]}"
                )

            accumulate_pyramid(f_pyr, t_pyr)
            accumulate_pyramid(w_pyr, pyr_w)
            del t_pyr, pyr_w
            count += 1

        if f_pyr is None:
            msg = "No input frames to fuse"
            logger.error(msg)
            raise TimeLapseFusionFusingException(msg)

        logger.info(f"Normalizing and collapsing {count} accumulated frames")
        result = self.reconstruct(f_pyr, w_pyr)
        del f_pyr, w_pyr

        yield result
