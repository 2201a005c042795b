"""Base configuration classes for fusers."""

from dataclasses import dataclass, field

from ...common.exceptions import TimeLapseFusionConfigurationException
from ..models.fuse.base import Fuser
from ..models.weight_map import DEFAULT_EPSILON, validate_alpha


@dataclass(frozen=True)
class FusionConfig:
    """Complete fusion configuration."""

    fuser: Fuser


@dataclass(frozen=True)
class WeightMapConfig:
    """Exponents and constants of the per-pixel quality measures."""

    alpha_c: float = 1.0
    alpha_s: float = 1.0
    alpha_e: float = 1.0
    exposedness_mean: float = 0.5
    exposedness_sigma: float = 0.2
    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self) -> None:
        validate_alpha("alpha_c", self.alpha_c)
        validate_alpha("alpha_s", self.alpha_s)
        validate_alpha("alpha_e", self.alpha_e)
        if self.exposedness_sigma <= 0:
            raise TimeLapseFusionConfigurationException(
                f"exposedness_sigma must be positive, got {self.exposedness_sigma}"
            )
        if self.epsilon < 0:
            raise TimeLapseFusionConfigurationException(
                f"epsilon must not be negative, got {self.epsilon}"
            )


@dataclass(frozen=True)
class FuserConfig:
    """Base config class for fusers."""

    weight_map: WeightMapConfig = field(default_factory=WeightMapConfig)
    levels: int = 5

    def __post_init__(self) -> None:
        if self.levels < 1:
            raise TimeLapseFusionConfigurationException(
                f"levels must be at least 1, got {self.levels}"
            )
