"""Unit tests for weight_map module."""

import numpy as np
import pytest

from timelapsefusion.common.exceptions import (
    TimeLapseFusionConfigurationException,
    TimeLapseFusionImageProcessingException,
)
from timelapsefusion.internal.models.weight_map import (
    DEFAULT_EPSILON,
    compute_weight_map,
    contrast_measure,
    exposedness_measure,
    saturation_measure,
)


class TestMeasures:
    """Test the individual quality measures."""

    def test_contrast_zero_on_flat_image(self) -> None:
        image = np.full((16, 16, 3), 0.3)

        np.testing.assert_allclose(contrast_measure(image), 0.0, atol=1e-12)

    def test_contrast_peaks_on_isolated_pixel(self) -> None:
        image = np.zeros((9, 9))
        image[4, 4] = 1.0

        contrast = contrast_measure(image)

        assert contrast[4, 4] == pytest.approx(4.0)
        assert contrast[4, 4] == contrast.max()

    def test_saturation_zero_for_gray_pixels(self) -> None:
        image = np.full((8, 8, 3), 0.6)

        np.testing.assert_allclose(saturation_measure(image), 0.0, atol=1e-12)

    def test_saturation_is_channel_std(self) -> None:
        image = np.zeros((2, 2, 3))
        image[..., 0] = 1.0

        np.testing.assert_allclose(saturation_measure(image), np.std([1.0, 0.0, 0.0]))

    def test_saturation_is_one_for_single_channel(self) -> None:
        np.testing.assert_array_equal(saturation_measure(np.zeros((4, 5))), 1.0)

    def test_exposedness_best_at_mid_gray(self) -> None:
        image = np.stack(
            [np.full((2, 2, 3), 0.5), np.full((2, 2, 3), 0.0), np.full((2, 2, 3), 1.0)]
        )

        mid, dark, bright = (exposedness_measure(img) for img in image)

        np.testing.assert_allclose(mid, 1.0)
        assert np.all(dark < mid)
        assert np.all(bright < mid)
        np.testing.assert_allclose(dark, bright)

    def test_exposedness_multiplies_channels(self) -> None:
        image = np.zeros((1, 1, 3))
        image[..., 0] = 0.5

        expected = np.exp(-(0.25) / (2 * 0.04)) ** 2

        np.testing.assert_allclose(exposedness_measure(image), expected)


class TestComputeWeightMap:
    """Test the combined weight map."""

    def test_shape_and_non_negative(self, textured_image: np.ndarray) -> None:
        weights = compute_weight_map(textured_image, 1.0, 1.0, 1.0)

        assert weights.shape == textured_image.shape[:2]
        assert weights.dtype == np.float64
        assert np.all(weights >= 0)

    def test_all_exponents_zero_gives_ones(self, textured_image: np.ndarray) -> None:
        weights = compute_weight_map(textured_image, 0.0, 0.0, 0.0, epsilon=0.0)

        np.testing.assert_array_equal(weights, 1.0)

    def test_zero_exponent_removes_factor_even_where_measure_is_zero(self) -> None:
        # Flat gray image: contrast and saturation are both exactly zero
        image = np.full((8, 8, 3), 0.5)

        weights = compute_weight_map(image, 0.0, 0.0, 1.0)

        np.testing.assert_allclose(weights, 1.0)

    def test_product_of_measures(self, textured_image: np.ndarray) -> None:
        expected = (
            contrast_measure(textured_image) ** 2.0
            * saturation_measure(textured_image) ** 0.5
            * exposedness_measure(textured_image) ** 1.5
        )

        weights = compute_weight_map(textured_image, 2.0, 0.5, 1.5)

        np.testing.assert_allclose(weights, expected)

    def test_input_not_mutated(self, textured_image: np.ndarray) -> None:
        original = textured_image.copy()

        compute_weight_map(textured_image, 1.0, 1.0, 1.0)

        np.testing.assert_array_equal(textured_image, original)

    def test_single_channel_image(self, rng: np.random.Generator) -> None:
        image = rng.uniform(size=(20, 24))

        weights = compute_weight_map(image, 1.0, 1.0, 1.0)

        np.testing.assert_allclose(
            weights, contrast_measure(image) * exposedness_measure(image)
        )

    @pytest.mark.parametrize(
        "alphas", [(-0.1, 1.0, 1.0), (1.0, 10.5, 1.0), (1.0, 1.0, 11.0)]
    )
    def test_out_of_range_exponent_raises(
        self, textured_image: np.ndarray, alphas: tuple[float, float, float]
    ) -> None:
        with pytest.raises(TimeLapseFusionConfigurationException):
            compute_weight_map(textured_image, *alphas)

    def test_boundary_exponents_accepted(self, textured_image: np.ndarray) -> None:
        weights = compute_weight_map(textured_image, 0.0, 10.0, 10.0)

        assert np.all(np.isfinite(weights))

    def test_flat_region_keeps_epsilon_weight(self) -> None:
        # Flat gray image: contrast and saturation are both exactly zero
        image = np.full((8, 8, 3), 0.5)

        weights = compute_weight_map(image, 1.0, 1.0, 1.0)

        assert np.all(weights > 0)
        np.testing.assert_allclose(weights, DEFAULT_EPSILON, rtol=1e-6)

    def test_epsilon_is_added_after_the_product(
        self, textured_image: np.ndarray
    ) -> None:
        bare = compute_weight_map(textured_image, 1.0, 1.0, 1.0, epsilon=0.0)

        weights = compute_weight_map(textured_image, 1.0, 1.0, 1.0, epsilon=0.25)

        np.testing.assert_allclose(weights, bare + 0.25)

    def test_negative_epsilon_raises(self, textured_image: np.ndarray) -> None:
        with pytest.raises(TimeLapseFusionConfigurationException):
            compute_weight_map(textured_image, 1.0, 1.0, 1.0, epsilon=-1e-3)

    def test_unsupported_channel_count_raises(self) -> None:
        with pytest.raises(TimeLapseFusionImageProcessingException):
            compute_weight_map(np.zeros((4, 4, 4)), 1.0, 1.0, 1.0)
