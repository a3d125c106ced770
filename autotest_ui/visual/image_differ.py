"""
================================================================================
Image Differ
================================================================================

Pixel-level screenshot comparison.

Two pixels are considered different when their perceptual distance in YIQ
colour space (alpha blended over white) exceeds `35215 * threshold ** 2`,
35215 being the largest possible distance. Pixels that only differ because of
anti-aliasing are detected from their 3x3 neighbourhood and are not counted.

The diff artifact is a faded grayscale copy of the first image with
differing pixels painted red and anti-aliased pixels painted yellow.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from loguru import logger
from PIL import Image

from autotest_ui.common import get_config


MAX_YIQ_DELTA = 35215.0

PathLike = Union[str, Path]


class ImageDimensionMismatchError(Exception):
    """Raised when the two compared images do not have the same size."""

    def __init__(self, image_a: PathLike, size_a: Tuple[int, int], image_b: PathLike, size_b: Tuple[int, int]):
        self.size_a = size_a
        self.size_b = size_b
        super().__init__(
            f"Image sizes do not match: {image_a} is {size_a[0]}x{size_a[1]}, "
            f"{image_b} is {size_b[0]}x{size_b[1]}"
        )


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of one comparison."""
    differing_pixel_count: int
    diff_artifact_path: Path
    total_pixels: int = 0
    anti_aliased_pixel_count: int = 0

    @property
    def identical(self) -> bool:
        return self.differing_pixel_count == 0

    @property
    def mismatch_ratio(self) -> float:
        if not self.total_pixels:
            return 0.0
        return self.differing_pixel_count / self.total_pixels


def _blend(channel: np.ndarray, alpha: np.ndarray) -> np.ndarray:
    """Blend a colour channel over white."""
    return 255.0 + (channel - 255.0) * alpha


def _rgb2y(r, g, b):
    return r * 0.29889531 + g * 0.58662247 + b * 0.11448223


def _rgb2i(r, g, b):
    return r * 0.59597799 - g * 0.27417610 - b * 0.32180189


def _rgb2q(r, g, b):
    return r * 0.21147017 - g * 0.52261711 + b * 0.31114694


def _blended_rgb(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    rgba = pixels.astype(np.float64)
    alpha = rgba[..., 3] / 255.0
    return tuple(_blend(rgba[..., c], alpha) for c in range(3))


# Neighbour offsets (dy, dx), x outer and y inner; ties keep the first match.
_NEIGHBOUR_OFFSETS = [(dy, dx) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dy or dx]


def _shift(values: np.ndarray, dy: int, dx: int, fill=0) -> np.ndarray:
    """values[y + dy, x + dx] for every pixel, `fill` outside the image."""
    h, w = values.shape
    padded = np.pad(values, 1, mode="constant", constant_values=fill)
    return padded[1 + dy:1 + dy + h, 1 + dx:1 + dx + w]


def _border(shape: Tuple[int, int]) -> np.ndarray:
    border = np.zeros(shape, dtype=bool)
    border[0, :] = border[-1, :] = True
    border[:, 0] = border[:, -1] = True
    return border


def _equal_neighbour_counts(values: np.ndarray) -> np.ndarray:
    """
    Number of 3x3 neighbours with the same value, plus one on the image border.
    """
    inside = np.ones(values.shape, dtype=bool)
    counts = np.zeros(values.shape, dtype=np.int32)
    for dy, dx in _NEIGHBOUR_OFFSETS:
        counts += (_shift(values, dy, dx) == values) & _shift(inside, dy, dx, False)
    return counts + _border(values.shape)


def _has_many_siblings(packed: np.ndarray) -> np.ndarray:
    """True where more than two neighbours share the exact RGBA value."""
    return _equal_neighbour_counts(packed) > 2


def _antialiased(luma: np.ndarray, flat_in_both: np.ndarray) -> np.ndarray:
    """
    Pixels that look like anti-aliasing artifacts.

    A pixel qualifies when it sits between its darkest and brightest
    neighbour and one of those extremes lies in a flat region of both images
    (`flat_in_both`). Pixels with more than two equal neighbours never do.
    """
    inside = np.ones(luma.shape, dtype=bool)
    min_delta = np.zeros(luma.shape)
    max_delta = np.zeros(luma.shape)
    min_at = np.full(luma.shape, -1, dtype=np.int8)
    max_at = np.full(luma.shape, -1, dtype=np.int8)

    for k, (dy, dx) in enumerate(_NEIGHBOUR_OFFSETS):
        valid = _shift(inside, dy, dx, False)
        delta = luma - _shift(luma, dy, dx, 0.0)
        darker = valid & (delta < min_delta)
        min_delta[darker] = delta[darker]
        min_at[darker] = k
        brighter = valid & (delta > max_delta)
        max_delta[brighter] = delta[brighter]
        max_at[brighter] = k

    flat_min = np.zeros(luma.shape, dtype=bool)
    flat_max = np.zeros(luma.shape, dtype=bool)
    for k, (dy, dx) in enumerate(_NEIGHBOUR_OFFSETS):
        flat = _shift(flat_in_both, dy, dx, False)
        flat_min |= (min_at == k) & flat
        flat_max |= (max_at == k) & flat

    return (
        (_equal_neighbour_counts(luma) <= 2)
        & (min_at >= 0)
        & (max_at >= 0)
        & (flat_min | flat_max)
    )


class ImageDiffer:
    """
    Compare two equally sized PNG images.

    Usage:
        >>> differ = ImageDiffer()
        >>> result = differ.compare("baseline.png", "current.png", "diff.png", threshold=0.1)
        >>> result.identical
        True
    """

    def __init__(
        self,
        include_anti_aliased: bool = False,
        alpha: float = 0.1,
        diff_color: Tuple[int, int, int] = (255, 0, 0),
        anti_aliased_color: Tuple[int, int, int] = (255, 255, 0),
    ):
        """
        Args:
            include_anti_aliased: Count anti-aliased pixels as differences
            alpha: Opacity of the grayscale background in the diff image
            diff_color: Colour for differing pixels
            anti_aliased_color: Colour for detected anti-aliased pixels
        """
        self.include_anti_aliased = include_anti_aliased
        self.alpha = alpha
        self.diff_color = diff_color
        self.anti_aliased_color = anti_aliased_color

    def compare(
        self,
        image_a: PathLike,
        image_b: PathLike,
        diff_destination: PathLike,
        threshold: Optional[float] = None,
    ) -> ComparisonResult:
        """
        Compare two images and write the diff artifact.

        Args:
            image_a: Reference image (also the diff background)
            image_b: Image under test
            diff_destination: Where to write the diff PNG
            threshold: Per-pixel tolerance in [0, 1]; `visual.threshold` when None

        Returns:
            ComparisonResult

        Raises:
            ImageDimensionMismatchError: Sizes differ; nothing is written
            ValueError: Threshold outside [0, 1]
            OSError: Images unreadable or diff not writable
        """
        if threshold is None:
            threshold = get_config("visual.threshold", 0.1)
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be within [0, 1], got {threshold}")

        pixels_a = self._load(image_a)
        pixels_b = self._load(image_b)
        if pixels_a.shape != pixels_b.shape:
            raise ImageDimensionMismatchError(
                image_a, (pixels_a.shape[1], pixels_a.shape[0]),
                image_b, (pixels_b.shape[1], pixels_b.shape[0]),
            )

        h, w = pixels_a.shape[:2]
        output = self._gray_background(pixels_a)
        diff_count = 0
        aa_count = 0

        if not np.array_equal(pixels_a, pixels_b):
            ra, ga, ba = _blended_rgb(pixels_a)
            rb, gb, bb = _blended_rgb(pixels_b)
            luma_a = _rgb2y(ra, ga, ba)
            luma_b = _rgb2y(rb, gb, bb)
            y = luma_a - luma_b
            i = _rgb2i(ra, ga, ba) - _rgb2i(rb, gb, bb)
            q = _rgb2q(ra, ga, ba) - _rgb2q(rb, gb, bb)
            delta = 0.5053 * y * y + 0.299 * i * i + 0.1957 * q * q
            delta[np.all(pixels_a == pixels_b, axis=2)] = 0.0

            candidates = delta > MAX_YIQ_DELTA * threshold * threshold
            aa_mask = np.zeros((h, w), dtype=bool)

            if not self.include_anti_aliased and candidates.any():
                aa_mask = self._anti_aliased_mask(candidates, pixels_a, pixels_b, luma_a, luma_b)

            diff_mask = candidates & ~aa_mask
            output[aa_mask, :3] = self.anti_aliased_color
            output[diff_mask, :3] = self.diff_color
            diff_count = int(diff_mask.sum())
            aa_count = int(aa_mask.sum())

        diff_destination = Path(diff_destination)
        diff_destination.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(output).save(diff_destination, format="PNG")

        result = ComparisonResult(
            differing_pixel_count=diff_count,
            diff_artifact_path=diff_destination,
            total_pixels=h * w,
            anti_aliased_pixel_count=aa_count,
        )
        logger.info(
            f"Compared {Path(image_a).name} with {Path(image_b).name}: "
            f"{diff_count} differing pixel(s) ({result.mismatch_ratio:.2%}), "
            f"{aa_count} anti-aliased"
        )
        return result

    @staticmethod
    def _load(path: PathLike) -> np.ndarray:
        with Image.open(path) as img:
            return np.asarray(img.convert("RGBA"), dtype=np.uint8)

    def _gray_background(self, pixels: np.ndarray) -> np.ndarray:
        rgba = pixels.astype(np.float64)
        luma = _rgb2y(rgba[..., 0], rgba[..., 1], rgba[..., 2])
        gray = _blend(luma, self.alpha * rgba[..., 3] / 255.0)
        output = np.empty(pixels.shape, dtype=np.uint8)
        output[..., :3] = np.clip(gray, 0, 255).astype(np.uint8)[..., None]
        output[..., 3] = 255
        return output

    @staticmethod
    def _anti_aliased_mask(
        candidates: np.ndarray,
        pixels_a: np.ndarray,
        pixels_b: np.ndarray,
        luma_a: np.ndarray,
        luma_b: np.ndarray,
    ) -> np.ndarray:
        # Whole-array passes; a per-pixel loop is far too slow on full screenshots.
        packed_a = np.ascontiguousarray(pixels_a).view(np.uint32)[..., 0]
        packed_b = np.ascontiguousarray(pixels_b).view(np.uint32)[..., 0]
        flat_in_both = _has_many_siblings(packed_a) & _has_many_siblings(packed_b)

        return candidates & (
            _antialiased(luma_a, flat_in_both) | _antialiased(luma_b, flat_in_both)
        )


__all__ = [
    "ComparisonResult",
    "ImageDiffer",
    "ImageDimensionMismatchError",
    "MAX_YIQ_DELTA",
]
