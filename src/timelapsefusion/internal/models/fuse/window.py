"""Frame window and temporal decay for time-lapse fusion."""

import math
from collections import deque
from collections.abc import Iterator

from ....common.exceptions import TimeLapseFusionConfigurationException
from ..pyramid import Pyramid


def temporal_decay_weight(age: int, sigma: float) -> float:
    """Gaussian weight of a frame by its age, 0 for the newest frame.

    w = exp(-age**2 / (2 * sigma**2)); the newest frame always has weight 1.
    With sigma == 0 only the newest frame contributes.
    """
    if age < 0:
        raise TimeLapseFusionConfigurationException(
            f"Frame age must not be negative, got {age}"
        )
    if sigma < 0:
        raise TimeLapseFusionConfigurationException(
            f"sigma must not be negative, got {sigma}"
        )
    if sigma == 0:
        return 1.0 if age == 0 else 0.0
    return math.exp(-(age * age) / (2 * sigma * sigma))


class FrameWindow:
    """Newest-first ring of (weighted Laplacian, weight Gaussian) pyramid pairs."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise TimeLapseFusionConfigurationException(
                f"Window capacity must be at least 1, got {capacity}"
            )
        self.capacity = capacity
        self._slots: deque[tuple[Pyramid, Pyramid]] = deque()

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[tuple[Pyramid, Pyramid]]:
        return iter(self._slots)

    def make_room(self) -> None:
        """Evict the oldest pair when the window is full."""
        if len(self._slots) >= self.capacity:
            self._slots.pop()

    def insert(self, weighted: Pyramid, weights: Pyramid) -> None:
        """Insert a new frame's pyramids at slot 0, shifting older ones by one."""
        self.make_room()
        self._slots.appendleft((weighted, weights))

    def clear(self) -> None:
        self._slots.clear()
