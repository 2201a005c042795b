"""Unit tests for pointwise module."""

import numpy as np
import pytest

from timelapsefusion.common.exceptions import TimeLapseFusionGeometryException
from timelapsefusion.internal.util.pointwise import (
    broadcast_channels,
    image_scale,
    pointwise_add,
    pointwise_div,
)


class TestPointwiseAdd:
    def test_adds_in_place(self) -> None:
        dst = np.ones((3, 4, 3))
        src = np.full((3, 4, 3), 2.5)

        pointwise_add(dst, src)

        np.testing.assert_array_equal(dst, 3.5)
        np.testing.assert_array_equal(src, 2.5)

    def test_shape_mismatch_raises(self) -> None:
        with pytest.raises(TimeLapseFusionGeometryException):
            pointwise_add(np.ones((3, 4, 3)), np.ones((3, 4)))


class TestPointwiseDiv:
    def test_divides_in_place(self) -> None:
        dst = np.full((2, 2), 9.0)

        pointwise_div(dst, np.full((2, 2), 3.0))

        np.testing.assert_array_equal(dst, 3.0)

    def test_zero_divisor_gives_zero(self) -> None:
        dst = np.array([[1.0, -2.0], [0.0, 4.0]])
        src = np.array([[0.0, 0.0], [0.0, 2.0]])

        pointwise_div(dst, src)

        np.testing.assert_array_equal(dst, [[0.0, 0.0], [0.0, 2.0]])
        assert np.all(np.isfinite(dst))

    def test_shape_mismatch_raises(self) -> None:
        with pytest.raises(TimeLapseFusionGeometryException):
            pointwise_div(np.ones((3, 4)), np.ones((4, 3)))


class TestImageScale:
    def test_scales_in_place(self) -> None:
        dst = np.full((2, 3, 3), 4.0)

        image_scale(dst, 0.25)

        np.testing.assert_array_equal(dst, 1.0)


class TestBroadcastChannels:
    def test_replicates_plane(self) -> None:
        plane = np.arange(6, dtype=np.float64).reshape(2, 3)

        result = broadcast_channels(plane, 3)

        assert result.shape == (2, 3, 3)
        for c in range(3):
            np.testing.assert_array_equal(result[..., c], plane)

    def test_single_channel_is_a_copy(self) -> None:
        plane = np.ones((2, 2))

        result = broadcast_channels(plane, 1)
        result[0, 0] = 5.0

        assert plane[0, 0] == 1.0

    def test_rejects_multi_channel_input(self) -> None:
        with pytest.raises(TimeLapseFusionGeometryException):
            broadcast_channels(np.ones((2, 2, 3)), 3)
