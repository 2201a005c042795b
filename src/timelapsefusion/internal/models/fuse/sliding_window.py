import logging
from collections.abc import Iterable, Iterator

import numpy as np

from ....common.enums import FusionMode
from ...config.fuser import SlidingWindowFuseConfig
from ...models.decorators import Fuser
from ..pyramid import Pyramid, accumulate_pyramid
from .base import Fuser as FuserBase
from .window import FrameWindow, temporal_decay_weight

logger = logging.getLogger(__name__)


@Fuser(FusionMode.SLIDING_WINDOW)
class SlidingWindowFuser(FuserBase):
    """Time-lapse fusion: one output per input frame.

    Each output blends the frames in the current window, each weighted by its
    temporal decay coefficient on top of its per-pixel weight map.
    """

    def __init__(self, *, config: SlidingWindowFuseConfig) -> None:
        super().__init__(config=config)

    @property
    def window_frames(self) -> int:
        return self.config.max_frames

    def output_name(self, index: int) -> str:
        return self.config.output_pattern.format(index=index)

    def fuse(self, frames: Iterable[np.ndarray]) -> Iterator[np.ndarray]:
        sigma = self.config.sigma
        window = FrameWindow(self.config.max_frames)
        # Coefficients of the slots occupied so far, grown as the window fills
        decay: list[float] = []
        logger.info(
            f"Blending up to {window.capacity} frames per output, sigma={sigma:.3f}"
        )

        try:
            for frame_no, image in enumerate(frames):
                window.make_room()
                t_pyr, pyr_w = self.decompose(image)
                del image
                window.insert(t_pyr, pyr_w)
                decay.extend(
                    temporal_decay_weight(age, sigma)
                    for age in range(len(decay), len(window))
                )

                # Fresh accumulators for every output frame
                f_pyr = Pyramid.zeros_like(t_pyr, t_pyr.channels)
                w_pyr = Pyramid.zeros_like(pyr_w, 1)
                del t_pyr, pyr_w

                for coefficient, (slot_f, slot_w) in zip(decay, window):
                    accumulate_pyramid(f_pyr, slot_f, scale=coefficient)
                    accumulate_pyramid(w_pyr, slot_w, scale=coefficient)

                result = self.reconstruct(f_pyr, w_pyr)
                del f_pyr, w_pyr

                logger.debug(f"Blended frame {frame_no} from {len(window)} frames")
                yield result
                del result
        finally:
            window.clear()
