from typing import Callable

from ...common.enums import FusionMode
from ..config.base import FuserConfig
from .fuse.base import Fuser as FuserBase
from .registry import register_fuser, register_fuser_config


def Fuser(mode: FusionMode) -> Callable[[type[FuserBase]], type[FuserBase]]:
    """Decorator to register a fuser class with its fusion mode."""

    def decorator(cls: type[FuserBase]) -> type[FuserBase]:
        return register_fuser(mode, cls)

    return decorator


def FuserConfigDecorator(
    mode: FusionMode,
) -> Callable[[type[FuserConfig]], type[FuserConfig]]:
    """Decorator to register a fuser config class with its fusion mode."""

    def decorator(cls: type[FuserConfig]) -> type[FuserConfig]:
        return register_fuser_config(mode, cls)

    return decorator
