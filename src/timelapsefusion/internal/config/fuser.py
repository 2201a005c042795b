import math
from dataclasses import dataclass

from ...common.enums import FusionMode
from ...common.exceptions import TimeLapseFusionConfigurationException
from ..models.decorators import FuserConfigDecorator
from .base import FuserConfig


@FuserConfigDecorator(FusionMode.STATIC)
@dataclass(frozen=True)
class StaticFuseConfig(FuserConfig):
    """Whole-sequence exposure fusion parameters."""

    output_name: str = "ExpFusionOutput.ppm"


@FuserConfigDecorator(FusionMode.SLIDING_WINDOW)
@dataclass(frozen=True)
class SlidingWindowFuseConfig(FuserConfig):
    """Time-lapse fusion parameters.

    tau sets both the window length, round(tau) frames, and the temporal decay
    spread, tau / 3.
    """

    tau: float = 0.0
    output_pattern: str = "TLF_{index:09d}.ppm"

    def __post_init__(self) -> None:
        super().__post_init__()
        if not math.isfinite(self.tau) or self.tau < 0:
            raise TimeLapseFusionConfigurationException(
                f"tau must be a finite non-negative number, got {self.tau}"
            )

    @property
    def max_frames(self) -> int:
        # Half-up rounding; a window always holds at least the current frame
        return max(1, math.floor(self.tau + 0.5))

    @property
    def sigma(self) -> float:
        return self.tau / 3
