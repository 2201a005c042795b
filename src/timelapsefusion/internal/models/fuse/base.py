import abc
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

import numpy as np

from ..pyramid import (
    Pyramid,
    collapse_pyramid,
    gaussian_pyramid,
    laplacian_pyramid,
    normalize_pyramid,
    weighted_pyramid,
)
from ..weight_map import compute_weight_map

if TYPE_CHECKING:
    from ...config.base import FuserConfig


class Fuser(abc.ABC):
    def __init__(self, *, config: "FuserConfig") -> None:
        self.config = config

    @abc.abstractmethod
    def fuse(self, frames: Iterable[np.ndarray]) -> Iterator[np.ndarray]:
        """Fuse a sequence of frames.

        Args:
            frames: Single-pass iterable of float images sharing one size

        Returns:
            Iterator over the fused output images, produced as they are ready
        """
        raise NotImplementedError

    @abc.abstractmethod
    def output_name(self, index: int) -> str:
        """File name of the index-th output image."""
        raise NotImplementedError

    @property
    def window_frames(self) -> int:
        """Number of per-frame pyramid pairs held at once."""
        return 1

    def decompose(self, image: np.ndarray) -> tuple[Pyramid, Pyramid]:
        """Weighted Laplacian pyramid and weight Gaussian pyramid of one frame.

        The weight map and the plain Laplacian pyramid are released before
        returning.
        """
        weight_config = self.config.weight_map
        weights = compute_weight_map(
            image,
            weight_config.alpha_c,
            weight_config.alpha_s,
            weight_config.alpha_e,
            exposedness_mean=weight_config.exposedness_mean,
            exposedness_sigma=weight_config.exposedness_sigma,
            epsilon=weight_config.epsilon,
        )
        pyr_i = laplacian_pyramid(image, self.config.levels)
        pyr_w = gaussian_pyramid(weights, self.config.levels)
        del weights

        t_pyr = weighted_pyramid(pyr_i, pyr_w)
        del pyr_i

        return t_pyr, pyr_w

    @staticmethod
    def reconstruct(f_pyr: Pyramid, w_pyr: Pyramid) -> np.ndarray:
        """Normalize accumulated pyramids in place and collapse them."""
        normalize_pyramid(f_pyr, w_pyr)
        return collapse_pyramid(f_pyr)
