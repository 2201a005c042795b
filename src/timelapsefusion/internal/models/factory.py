# type: ignore[unknown-argument]

from typing import Optional

from ...common.enums import FusionMode
from ..config.base import FusionConfig, WeightMapConfig

# Import modules to trigger decorator registration
from .fuse import (
    sliding_window,  # noqa: F401
    static,  # noqa: F401
)
from .registry import _fuser_config_map, _fusers_map


class FusionConfigFactory:
    """Factory that dispatches to appropriate config class based on enum."""

    @classmethod
    def create(
        cls,
        mode: FusionMode,
        weight_map: Optional[WeightMapConfig] = None,
        levels: int = 5,
        tau: Optional[float] = None,
    ) -> FusionConfig:
        options = {"weight_map": weight_map or WeightMapConfig(), "levels": levels}
        if mode is FusionMode.SLIDING_WINDOW and tau is not None:
            options["tau"] = tau

        fuser_instance = _fusers_map[mode](config=_fuser_config_map[mode](**options))

        return FusionConfig(fuser=fuser_instance)
