from enum import Enum


class FusionMode(Enum):
    STATIC = "static"
    SLIDING_WINDOW = "sliding_window"

    @classmethod
    def from_tau(cls, tau: float) -> "FusionMode":
        """Negative tau fuses the whole sequence, otherwise a sliding window is used."""
        if tau < 0:
            return cls.STATIC
        return cls.SLIDING_WINDOW
