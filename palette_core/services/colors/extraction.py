"""
Dominant color extraction pipeline.

Implements the four stages run once per extraction call:
sampling (merge identical pixels into weighted buckets), filtering (drop
washed-out and very dark buckets), weighted k-means clustering with k-means++
seeding, and palette assembly. Nothing is shared between calls.
"""

import time
from functools import cmp_to_key
from typing import (
    Callable, Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Protocol,
    Sequence, Tuple, Union
)

import numpy as np
from loguru import logger

from palette_core.config import config
from palette_core.utils.logging import get_logger
from palette_core.utils.metrics import get_metrics, performance_monitor

from .analysis import brightness
from .color import BLACK, WHITE, ColorValue, FLOAT_EPSILON, MAX_RGB_VALUE, round_half_up
from .conversions import rgb_to_hsb
from .palette import ColorPalette

RGBTuple = Tuple[int, int, int]

# White, light gray, medium gray, dark gray, very dark gray
FALLBACK_PALETTE_HEX = ("#FFFFFF", "#C7C7C7", "#8F8F8F", "#565656", "#1E1E1E")

DEFAULT_EXCLUDED_COLORS: FrozenSet[RGBTuple] = frozenset({BLACK.as_tuple(), WHITE.as_tuple()})

# Brightness gap under which palette ordering falls back to hue
BRIGHTNESS_TIE_EPSILON = 0.01


class InvalidArgumentError(ValueError):
    """Raised for invalid extraction arguments such as a palette size below 1."""


class WeightedSample(NamedTuple):
    """A unique RGB triple and how many times it was seen."""
    r: int
    g: int
    b: int
    count: int


class ClusterResult(NamedTuple):
    """Output of one k-means run."""
    centroids: np.ndarray  # (k, 3) float RGB means
    weights: np.ndarray  # (k,) total sample count per cluster
    iterations: int
    converged: bool


class RandomSource(Protocol):
    """Randomness used by k-means++ seeding; `random.Random` satisfies it."""

    def random(self) -> float:
        """Uniform float in [0, 1)."""

    def randrange(self, stop: int) -> int:
        """Uniform integer in [0, stop)."""


class SeededRandom:
    """RandomSource backed by numpy's default generator."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = config.RNG_SEED if seed is None else seed
        self._rng = np.random.default_rng(self.seed)

    def random(self) -> float:
        return float(self._rng.random())

    def randrange(self, stop: int) -> int:
        if stop < 1:
            raise ValueError(f"randrange stop must be positive, got {stop}")
        return int(self._rng.integers(0, stop))


PixelInput = Union[Sequence[int], WeightedSample]
ColorLike = Union[ColorValue, Sequence[int]]


def stride_pixels(image_rgb: np.ndarray, sample_size: Optional[int] = None) -> List[RGBTuple]:
    """
    Sample a decoded image on a regular grid.

    Args:
        image_rgb: Decoded image as an (H, W, 3+) array in RGB channel order
        sample_size: Approximate number of samples along each dimension

    Returns:
        Row-major list of (r, g, b) tuples
    """
    sample_size = sample_size or config.SAMPLE_SIZE
    pixels = np.asarray(image_rgb)
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3) RGB array, got shape {pixels.shape}")

    height, width = pixels.shape[:2]
    step_y = max(1, height // sample_size)
    step_x = max(1, width // sample_size)

    grid = pixels[::step_y, ::step_x, :3].reshape(-1, 3)
    logger.debug(f"Stride sampling {width}x{height} with steps ({step_x}, {step_y}): {len(grid)} pixels")
    return [(int(r), int(g), int(b)) for r, g, b in grid]


def _normalize_excluded(excluded: Optional[Iterable[ColorLike]]) -> FrozenSet[RGBTuple]:
    if excluded is None:
        return DEFAULT_EXCLUDED_COLORS if config.EXCLUDE_EXTREMES else frozenset()
    return frozenset(
        color.as_tuple() if isinstance(color, ColorValue) else tuple(int(c) for c in color)
        for color in excluded
    )


def sample_pixels(pixels: Iterable[PixelInput],
                  excluded: Optional[Iterable[ColorLike]] = None) -> List[WeightedSample]:
    """
    Merge identical pixels into weighted samples.

    Args:
        pixels: (r, g, b) triples, or pre-aggregated (r, g, b, count) tuples
        excluded: Colors dropped before counting. Defaults to pure black and
            pure white when `Config.EXCLUDE_EXTREMES` is set; pass an empty
            iterable to keep everything.

    Returns:
        Samples in first-seen order

    Raises:
        ValueError: If a pixel is malformed or has a channel outside [0, 255]
    """
    excluded_set = _normalize_excluded(excluded)
    counts: Dict[RGBTuple, int] = {}
    dropped = 0

    for pixel in pixels:
        if len(pixel) == 4:
            r, g, b, count = pixel
        elif len(pixel) == 3:
            r, g, b = pixel
            count = 1
        else:
            raise ValueError(f"Pixel must have 3 channels or 3 channels plus a count, got {pixel!r}")

        key = (int(r), int(g), int(b))
        if any(c < 0 or c > MAX_RGB_VALUE for c in key):
            raise ValueError(f"Pixel channel out of range: {key}")
        if count <= 0:
            continue
        if key in excluded_set:
            dropped += int(count)
            continue
        counts[key] = counts.get(key, 0) + int(count)

    logger.debug(f"Sampling: {len(counts)} unique colors, {dropped} excluded pixels")
    return [WeightedSample(r, g, b, count) for (r, g, b), count in counts.items()]


def filter_samples(samples: Sequence[WeightedSample],
                   min_saturation: Optional[float] = None,
                   min_brightness: Optional[float] = None) -> List[WeightedSample]:
    """
    Drop samples with low HSB saturation or brightness.

    If every sample would be dropped the input is returned unchanged, so a
    non-empty sample set never reaches clustering empty. Both floors are
    inclusive.

    Raises:
        InvalidArgumentError: If a threshold is outside [0, 1]
    """
    min_saturation = config.MIN_SATURATION if min_saturation is None else min_saturation
    min_brightness = config.MIN_BRIGHTNESS if min_brightness is None else min_brightness
    for name, value in (("min_saturation", min_saturation), ("min_brightness", min_brightness)):
        if not config.validate_threshold(value):
            raise InvalidArgumentError(f"{name} must be between 0 and 1, got {value}")

    kept = []
    for sample in samples:
        hsb = rgb_to_hsb(sample.r, sample.g, sample.b)
        if (hsb["s"] >= min_saturation - FLOAT_EPSILON
                and hsb["b"] >= min_brightness - FLOAT_EPSILON):
            kept.append(sample)

    if not kept:
        logger.debug(f"Filter would remove all {len(samples)} samples; keeping unfiltered set")
        return list(samples)

    logger.debug(f"Filtering: {len(samples)} → {len(kept)} samples")
    return kept


def _nearest_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    # (N, 1, 3) - (1, k, 3) -> (N, k)
    return np.linalg.norm(points[:, None, :] - centroids[None, :, :], axis=2)


def initialize_centroids(points: np.ndarray, k: int, rng: RandomSource) -> np.ndarray:
    """
    k-means++ style seeding.

    The first centroid is a uniformly chosen sample. Each further centroid is
    drawn by roulette wheel where a sample's weight is its distance (not
    squared distance) to the nearest centroid chosen so far.
    """
    n = len(points)
    chosen = [points[rng.randrange(n)]]

    for _ in range(1, k):
        min_distances = _nearest_distances(points, np.stack(chosen)).min(axis=1)
        cumulative = np.cumsum(min_distances)
        target = rng.random() * cumulative[-1]
        index = int(np.searchsorted(cumulative, target, side="left"))
        chosen.append(points[min(index, n - 1)])

    return np.stack(chosen).astype(np.float64)


def cluster_samples(samples: Sequence[WeightedSample], k: int,
                    rng: Optional[RandomSource] = None,
                    max_iterations: Optional[int] = None,
                    tolerance: Optional[float] = None) -> ClusterResult:
    """
    Weighted k-means over RGB samples.

    Args:
        samples: Non-empty weighted samples
        k: Number of clusters (>= 1)
        rng: Random source for seeding (seeded from config when omitted)
        max_iterations: Hard iteration cap
        tolerance: Convergence is reached when every centroid moves less
            than this distance

    Returns:
        ClusterResult with float centroids and per-cluster weights

    Raises:
        InvalidArgumentError: If k < 1
        ValueError: If samples is empty
    """
    if k < 1:
        raise InvalidArgumentError("Count must be greater than 0")
    if not samples:
        raise ValueError("Cannot cluster an empty sample set")

    rng = rng if rng is not None else SeededRandom()
    max_iterations = config.MAX_ITERATIONS if max_iterations is None else max_iterations
    tolerance = config.CONVERGENCE_TOLERANCE if tolerance is None else tolerance

    points = np.array([(s.r, s.g, s.b) for s in samples], dtype=np.float64)
    counts = np.array([s.count for s in samples], dtype=np.float64)

    centroids = initialize_centroids(points, k, rng)
    cluster_weights = np.zeros(k, dtype=np.float64)
    converged = False
    iterations = 0

    while not converged and iterations < max_iterations:
        iterations += 1

        # argmin keeps the lowest centroid index on ties
        labels = _nearest_distances(points, centroids).argmin(axis=1)
        cluster_weights = np.bincount(labels, weights=counts, minlength=k)

        updated = centroids.copy()
        for i in range(k):
            # empty clusters keep their previous centroid
            if cluster_weights[i] > 0:
                members = labels == i
                updated[i] = (points[members] * counts[members, None]).sum(axis=0) / cluster_weights[i]

        movement = np.linalg.norm(updated - centroids, axis=1)
        converged = bool(np.all(movement < tolerance))
        centroids = updated

    logger.debug(f"k-means finished after {iterations} iterations (converged={converged})")
    return ClusterResult(centroids, cluster_weights, iterations, converged)


def _clamp_channel(value: float) -> int:
    return min(MAX_RGB_VALUE, max(0, round_half_up(float(value))))


def _compare_brightness(a: ColorValue, b: ColorValue) -> int:
    diff = brightness(b) - brightness(a)
    if abs(diff) < BRIGHTNESS_TIE_EPSILON:
        hue_a = rgb_to_hsb(*a.as_tuple())["h"]
        hue_b = rgb_to_hsb(*b.as_tuple())["h"]
        return (hue_a > hue_b) - (hue_a < hue_b)
    return (diff > 0) - (diff < 0)


def assemble_palette(centroids: np.ndarray, weights: Optional[np.ndarray] = None,
                     order: Optional[str] = None) -> ColorPalette:
    """
    Turn final centroids into a palette.

    Args:
        centroids: (k, 3) float RGB means
        weights: Per-centroid sample weights, required for `order="weight"`
        order: "brightness" (brightest first, hue on near-ties) or "weight"
            (most populated cluster first)

    Raises:
        InvalidArgumentError: If the order is unknown
    """
    order = order or config.ORDER
    if not config.validate_order(order):
        raise InvalidArgumentError(f"Unknown palette order: {order}")

    colors = [ColorValue(*(_clamp_channel(c) for c in centroid)) for centroid in centroids]

    if order == "weight":
        if weights is None:
            raise InvalidArgumentError("Weight ordering requires cluster weights")
        ranked = sorted(range(len(colors)), key=lambda i: -float(weights[i]))
        return ColorPalette([colors[i] for i in ranked])

    return ColorPalette(sorted(colors, key=cmp_to_key(_compare_brightness)))


def fallback_palette() -> ColorPalette:
    """The fixed grayscale palette returned when extraction cannot proceed."""
    return ColorPalette([ColorValue.from_hex(hex_color) for hex_color in FALLBACK_PALETTE_HEX])


def extract_dominant_colors(pixels: Iterable[PixelInput], k: Optional[int] = None,
                            rng: Optional[RandomSource] = None, *,
                            excluded: Optional[Iterable[ColorLike]] = None,
                            min_saturation: Optional[float] = None,
                            min_brightness: Optional[float] = None,
                            max_iterations: Optional[int] = None,
                            tolerance: Optional[float] = None,
                            order: Optional[str] = None,
                            on_failure: Optional[Callable[[Exception], None]] = None) -> ColorPalette:
    """
    Extract `k` dominant colors from a pixel population.

    The only error surfaced to callers is an invalid `k`. An empty sample set
    or any failure inside the pipeline yields `fallback_palette()`; failures
    are logged, counted under `extraction_suppressed_failures_total` and
    handed to `on_failure` when provided.

    Args:
        pixels: (r, g, b) triples or (r, g, b, count) tuples
        k: Number of colors to extract
        rng: Random source for k-means++ seeding; a fresh generator seeded
            with `Config.RNG_SEED` is used when omitted
        excluded: Colors dropped during sampling (default: pure black/white)
        min_saturation: HSB saturation floor for filtering
        min_brightness: HSB brightness floor for filtering
        max_iterations: k-means iteration cap
        tolerance: k-means centroid movement threshold
        order: Palette ordering, see `assemble_palette`
        on_failure: Hook called with any suppressed exception

    Returns:
        ColorPalette with k colors, or the 5-color fallback

    Raises:
        InvalidArgumentError: If k < 1
    """
    k = config.DEFAULT_COUNT if k is None else k
    if not config.validate_count(k):
        raise InvalidArgumentError("Count must be greater than 0")

    log = get_logger()
    metrics = get_metrics()
    metrics.increment_extraction_count()
    rng = rng if rng is not None else SeededRandom()
    start_time = time.time()

    try:
        with performance_monitor("pixel_sampling"):
            samples = sample_pixels(pixels, excluded)

        if not samples:
            metrics.increment_fallback_count("empty")
            log.warning("No samples to cluster; returning fallback palette", extra={"k": k})
            return fallback_palette()

        with performance_monitor("sample_filtering", sample_count=len(samples)):
            filtered = filter_samples(samples, min_saturation, min_brightness)

        with performance_monitor("color_clustering", sample_count=len(filtered), cluster_count=k):
            result = cluster_samples(filtered, k, rng, max_iterations, tolerance)
        metrics.record_iterations(result.iterations, result.converged)

        with performance_monitor("palette_assembly"):
            palette = assemble_palette(result.centroids, result.weights, order)

    except Exception as e:
        metrics.increment_suppressed_failure(type(e).__name__)
        metrics.increment_fallback_count("failure")
        log.error("Color extraction failed; returning fallback palette",
                  extra={"k": k, "error_type": type(e).__name__, "error": str(e)}, exc=e)
        if on_failure is not None:
            on_failure(e)
        return fallback_palette()

    duration_ms = (time.time() - start_time) * 1000
    metrics.record_timing("extraction", duration_ms)
    log.info("Color extraction completed", extra={
        "k": k,
        "sample_count": len(samples),
        "filtered_count": len(filtered),
        "iterations": result.iterations,
        "converged": result.converged,
        "palette": palette.to_hex_list(),
        "duration_ms": round(duration_ms, 2),
    })
    return palette
