"""Registry for auto-discovered fusers."""

from ...common.enums import FusionMode
from ..config.base import FuserConfig
from .fuse.base import Fuser as FuserBase

# Registry dictionaries for auto-discovered components
_fusers_map: dict[FusionMode, type[FuserBase]] = {}
_fuser_config_map: dict[FusionMode, type[FuserConfig]] = {}


def register_fuser(mode: FusionMode, cls: type[FuserBase]) -> type[FuserBase]:
    """Register a fuser class with its fusion mode."""
    _fusers_map[mode] = cls
    return cls


def register_fuser_config(
    mode: FusionMode, cls: type[FuserConfig]
) -> type[FuserConfig]:
    """Register a fuser config class with its fusion mode."""
    _fuser_config_map[mode] = cls
    return cls
