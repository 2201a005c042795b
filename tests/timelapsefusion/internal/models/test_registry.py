"""Unit tests for registry module."""

from typing import cast
from unittest.mock import Mock, patch

from timelapsefusion.common.enums import FusionMode
from timelapsefusion.internal.config.base import FuserConfig
from timelapsefusion.internal.config.fuser import (
    SlidingWindowFuseConfig,
    StaticFuseConfig,
)
from timelapsefusion.internal.models.fuse.base import Fuser as FuserBase
from timelapsefusion.internal.models.fuse.sliding_window import SlidingWindowFuser
from timelapsefusion.internal.models.fuse.static import StaticFuser
from timelapsefusion.internal.models.registry import (
    _fuser_config_map,
    _fusers_map,
    register_fuser,
    register_fuser_config,
)


class TestRegistryFunctions:
    """Test registry registration functions."""

    @patch("timelapsefusion.internal.models.registry._fusers_map")
    def test_register_fuser(self, mock_fusers_map: Mock) -> None:
        mock_fuser_class = Mock()
        mock_fuser_class.__name__ = "MockFuser"

        result = register_fuser(
            FusionMode.STATIC, cast("type[FuserBase]", mock_fuser_class)
        )

        assert result is mock_fuser_class
        mock_fusers_map.__setitem__.assert_called_once_with(
            FusionMode.STATIC, mock_fuser_class
        )

    @patch("timelapsefusion.internal.models.registry._fuser_config_map")
    def test_register_fuser_config(self, mock_fuser_config_map: Mock) -> None:
        mock_config_class = Mock()
        mock_config_class.__name__ = "MockFuserConfig"

        result = register_fuser_config(
            FusionMode.SLIDING_WINDOW, cast("type[FuserConfig]", mock_config_class)
        )

        assert result is mock_config_class
        mock_fuser_config_map.__setitem__.assert_called_once_with(
            FusionMode.SLIDING_WINDOW, mock_config_class
        )

    @patch("timelapsefusion.internal.models.registry._fuser_config_map")
    @patch("timelapsefusion.internal.models.registry._fusers_map")
    def test_registry_isolation(
        self, mock_fusers_map: Mock, mock_fuser_config_map: Mock
    ) -> None:
        """Test that fusers and configs are kept in separate maps."""
        mock_fuser = Mock()
        mock_config = Mock()

        register_fuser(FusionMode.STATIC, cast("type[FuserBase]", mock_fuser))
        register_fuser_config(FusionMode.STATIC, cast("type[FuserConfig]", mock_config))

        mock_fusers_map.__setitem__.assert_called_once_with(
            FusionMode.STATIC, mock_fuser
        )
        mock_fuser_config_map.__setitem__.assert_called_once_with(
            FusionMode.STATIC, mock_config
        )


class TestDecoratorRegistration:
    """Test that the decorated classes are registered on import."""

    def test_every_mode_has_a_fuser_and_config(self) -> None:
        assert _fusers_map[FusionMode.STATIC] is StaticFuser
        assert _fusers_map[FusionMode.SLIDING_WINDOW] is SlidingWindowFuser
        assert _fuser_config_map[FusionMode.STATIC] is StaticFuseConfig
        assert _fuser_config_map[FusionMode.SLIDING_WINDOW] is SlidingWindowFuseConfig
