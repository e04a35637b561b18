"""
Palette extraction pipeline.

This module implements the core of Chromapick: downscaling a decoded RGBA
bitmap, sampling pixels at a fixed stride, quantizing them into color
buckets, ranking the buckets by frequency and greedily selecting a set of
mutually distant colors.

The pipeline is a pure function of (bitmap, requested count). Degenerate
images produce an empty palette rather than an exception.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

import numpy as np
from PIL import Image
from loguru import logger

from .formatting import rgb_to_hex


# Working resolution: the larger edge is scaled down to at most this many pixels
TARGET_SIZE = 400

# Examine one pixel out of every SAMPLE_STRIDE in row-major order
SAMPLE_STRIDE = 5

# Pixels with alpha below this are treated as transparent
ALPHA_THRESHOLD = 128

# Near-pure white: max channel > 248 and min channel > 240
WHITE_MAX_GT = 248
WHITE_MIN_GT = 240

# Near-pure black: max channel < 8
BLACK_MAX_LT = 8

# Channel quantization granularity
BUCKET_STEP = 24

# Minimum Euclidean RGB distance between two palette colors
UNIQUE_THRESHOLD = 60


@dataclass(frozen=True)
class Color:
    """An RGB color with integer channels in [0, 255]."""
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.r, self.g, self.b)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def distance_to(self, other: "Color") -> float:
        """Euclidean distance in RGB space."""
        return color_distance(self.as_tuple(), other.as_tuple())


@dataclass(frozen=True)
class Bucket:
    """A quantized color candidate and the number of samples that fell into it."""
    color: Color
    count: int


@dataclass(frozen=True)
class ExtractionResult:
    """Palette plus the bookkeeping gathered while producing it."""
    colors: List[Color]
    requested_count: int
    width: int
    height: int
    working_width: int
    working_height: int
    sampled_pixels: int
    accepted_pixels: int
    bucket_count: int
    parameters: dict = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.colors


def color_distance(a: Sequence[int], b: Sequence[int]) -> float:
    """Euclidean distance between two RGB triples."""
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


def validate_bitmap(bitmap: np.ndarray) -> None:
    """
    Check that ``bitmap`` is an ``H x W x 4`` uint8 RGBA array.

    Raises:
        ValueError: If the buffer has the wrong type, shape or is empty
    """
    if not isinstance(bitmap, np.ndarray):
        raise ValueError(f"Expected numpy RGBA bitmap, got {type(bitmap).__name__}")
    if bitmap.dtype != np.uint8:
        raise ValueError(f"Expected uint8 bitmap, got dtype {bitmap.dtype}")
    if bitmap.ndim != 3 or bitmap.shape[2] != 4:
        raise ValueError(f"Expected RGBA bitmap with shape (H, W, 4), got {bitmap.shape}")
    if bitmap.shape[0] == 0 or bitmap.shape[1] == 0:
        raise ValueError("Bitmap has no pixels")


def normalize_count(count: int) -> int:
    """Clamp a requested palette size to at least one color."""
    return max(1, int(count))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_working_size(width: int, height: int, target_size: int = TARGET_SIZE) -> Tuple[int, int]:
    """
    Compute the working resolution for a ``width x height`` image.

    The scale factor is ``min(1, target_size / max(width, height))`` so images
    are never upscaled. Dimensions are rounded half-up and kept at least 1.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}")

    scale = min(1.0, target_size / max(width, height))
    working_width = max(1, _round_half_up(width * scale))
    working_height = max(1, _round_half_up(height * scale))
    return working_width, working_height


def scale_bitmap(bitmap: np.ndarray, target_size: int = TARGET_SIZE) -> np.ndarray:
    """
    Produce a fresh RGBA bitmap whose larger edge is at most ``target_size``.

    The input array is never modified.
    """
    height, width = bitmap.shape[:2]
    working_width, working_height = compute_working_size(width, height, target_size)

    if (working_width, working_height) == (width, height):
        return bitmap.copy()

    # Pillow premultiplies alpha when resampling RGBA
    image = Image.fromarray(bitmap)
    resized = image.resize((working_width, working_height), Image.Resampling.BILINEAR)
    logger.debug(f"Scaled bitmap {width}x{height} -> {working_width}x{working_height}")
    return np.asarray(resized, dtype=np.uint8).copy()


def sample_pixels(bitmap: np.ndarray,
                  stride: int = SAMPLE_STRIDE,
                  alpha_threshold: int = ALPHA_THRESHOLD) -> np.ndarray:
    """
    Sample every ``stride``-th pixel and drop those that should not vote.

    Filters, in order:
        1. alpha below ``alpha_threshold``
        2. near-pure white (max > 248 and min > 240)
        3. near-pure black (max < 8)

    Tinted near-whites and near-blacks with some channel variation survive.

    Returns:
        Accepted RGB triples, shape (N, 3) uint8, in sampling order
    """
    flat = bitmap.reshape(-1, 4)[::stride]

    opaque = flat[:, 3] >= alpha_threshold
    rgb = flat[:, :3]
    max_channel = rgb.max(axis=1)
    min_channel = rgb.min(axis=1)

    near_white = (max_channel > WHITE_MAX_GT) & (min_channel > WHITE_MIN_GT)
    near_black = max_channel < BLACK_MAX_LT

    keep = opaque & ~near_white & ~near_black
    logger.debug(
        f"Sampled {len(flat)} pixels: {int(np.sum(~opaque))} transparent, "
        f"{int(np.sum(opaque & near_white))} white, {int(np.sum(opaque & near_black))} black"
    )
    return rgb[keep]


def max_bucket_level(step: int = BUCKET_STEP) -> int:
    """Largest multiple of ``step`` that still fits in a channel."""
    return (255 // step) * step


def quantize_channel(value: int, step: int = BUCKET_STEP) -> int:
    """Round a channel to the nearest multiple of ``step`` (halves round up)."""
    return min(_round_half_up(value / step) * step, max_bucket_level(step))


def quantize_pixels(pixels: np.ndarray, step: int = BUCKET_STEP) -> np.ndarray:
    """Vectorized :func:`quantize_channel` over an (N, 3) array."""
    levels = np.floor(pixels.astype(np.float64) / step + 0.5).astype(np.int32) * step
    return np.minimum(levels, max_bucket_level(step))


def count_buckets(quantized: np.ndarray) -> Counter:
    """
    Accumulate sample counts per quantized triple.

    The returned Counter keeps first-seen order, which the ranker relies on
    for tie-breaking.
    """
    return Counter(map(tuple, quantized.tolist()))


def rank_buckets(counts: Counter) -> List[Bucket]:
    """Buckets ordered by descending count; equal counts keep first-seen order."""
    buckets = [Bucket(Color(*key), count) for key, count in counts.items()]
    return sorted(buckets, key=lambda bucket: -bucket.count)


def select_distinct(ranked: Iterable[Bucket],
                    count: int,
                    threshold: float = UNIQUE_THRESHOLD) -> List[Color]:
    """
    Greedily pick up to ``count`` colors that are pairwise at least ``threshold`` apart.

    Buckets are visited in ranked order and each candidate is compared only
    against colors accepted so far; a distance strictly below ``threshold``
    rejects it. Scanning stops once ``count`` colors are selected.
    """
    selected: List[Color] = []
    if count <= 0:
        return selected

    for bucket in ranked:
        candidate = bucket.color
        if all(candidate.distance_to(existing) >= threshold for existing in selected):
            selected.append(candidate)
        if len(selected) >= count:
            break

    return selected


def analyze_bitmap(bitmap: np.ndarray, count: int) -> ExtractionResult:
    """
    Run the full extraction pipeline and keep the intermediate statistics.

    Args:
        bitmap: Decoded RGBA image, shape (H, W, 4) uint8
        count: Requested palette size; values below 1 are treated as 1

    Returns:
        ExtractionResult whose ``colors`` are ordered by descending frequency

    Raises:
        ValueError: If the bitmap is malformed
    """
    validate_bitmap(bitmap)
    requested = normalize_count(count)
    height, width = bitmap.shape[:2]

    working = scale_bitmap(bitmap, TARGET_SIZE)
    working_height, working_width = working.shape[:2]
    sampled = -(-working_width * working_height // SAMPLE_STRIDE)

    accepted = sample_pixels(working, SAMPLE_STRIDE, ALPHA_THRESHOLD)
    counts = count_buckets(quantize_pixels(accepted, BUCKET_STEP))
    ranked = rank_buckets(counts)
    colors = select_distinct(ranked, requested, UNIQUE_THRESHOLD)

    logger.info(
        f"Palette extraction: {width}x{height} -> {working_width}x{working_height}, "
        f"{len(accepted)}/{sampled} pixels accepted, {len(ranked)} buckets, "
        f"{len(colors)}/{requested} colors"
    )

    return ExtractionResult(
        colors=colors,
        requested_count=requested,
        width=width,
        height=height,
        working_width=working_width,
        working_height=working_height,
        sampled_pixels=sampled,
        accepted_pixels=int(len(accepted)),
        bucket_count=len(ranked),
        parameters={
            "target_size": TARGET_SIZE,
            "sample_stride": SAMPLE_STRIDE,
            "alpha_threshold": ALPHA_THRESHOLD,
            "bucket_step": BUCKET_STEP,
            "unique_threshold": UNIQUE_THRESHOLD,
        },
    )


def extract_palette(bitmap: np.ndarray, count: int) -> List[Color]:
    """Extract up to ``count`` well-separated dominant colors from an RGBA bitmap."""
    return analyze_bitmap(bitmap, count).colors
