"""
Site generation for the tessellation generators.

Three placement policies share one signature and are dispatched through
``DISTRIBUTIONS``. The order of the returned sites is the index space used
later to match Voronoi cells with their sites, so every policy consumes the
PRNG in a fixed order.
"""

import math
from typing import Callable, Dict

import numpy as np
import structlog

from ..config.parameters import DistributionType
from .alea_prng import AleaPRNG

logger = structlog.get_logger()

JITTER_FRACTION = 0.3
MIN_CLUSTERS = 2
MAX_CLUSTERS = 10
LOOSE_CLUSTER_RADIUS = 0.25  # fraction of the shorter inner side
TIGHT_CLUSTER_RADIUS = 0.03


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def cluster_count(cluster_factor: float) -> int:
    """Map a cluster factor in [0, 1] linearly onto [2, 10] clusters."""
    factor = _clamp01(cluster_factor)
    return int(round(MIN_CLUSTERS + factor * (MAX_CLUSTERS - MIN_CLUSTERS)))


def cluster_radius(tightness: float, inner_width: float, inner_height: float) -> float:
    """Map tightness in [0, 1] linearly onto a maximum cluster radius."""
    t = _clamp01(tightness)
    fraction = LOOSE_CLUSTER_RADIUS + t * (TIGHT_CLUSTER_RADIUS - LOOSE_CLUSTER_RADIUS)
    return fraction * min(inner_width, inner_height)


def random_points(prng: AleaPRNG, count: int, x0: float, y0: float,
                  x1: float, y1: float, **_) -> np.ndarray:
    """Uniformly random sites inside [x0, x1) x [y0, y1)."""
    points = []
    for _ in range(count):
        x = prng.uniform(x0, x1)
        y = prng.uniform(y0, y1)
        points.append([x, y])
    return np.array(points, dtype=np.float64).reshape(-1, 2)


def jittered_grid_points(prng: AleaPRNG, count: int, x0: float, y0: float,
                         x1: float, y1: float, **_) -> np.ndarray:
    """
    Grid sites jittered by up to 30% of the cell size.

    Column and row counts are chosen so the cell grid matches the aspect
    ratio of the inner rectangle; cells are filled row by row until
    ``count`` sites exist.
    """
    width = x1 - x0
    height = y1 - y0
    if count <= 0:
        return np.empty((0, 2))

    cols = max(1, int(round(math.sqrt(count * width / height))))
    rows = max(1, int(math.ceil(count / cols)))
    cell_w = width / cols
    cell_h = height / rows

    points = []
    for row in range(rows):
        for col in range(cols):
            if len(points) >= count:
                break
            cx = x0 + (col + 0.5) * cell_w
            cy = y0 + (row + 0.5) * cell_h
            x = cx + prng.uniform(-JITTER_FRACTION, JITTER_FRACTION) * cell_w
            y = cy + prng.uniform(-JITTER_FRACTION, JITTER_FRACTION) * cell_h
            points.append([x, y])
    return np.array(points, dtype=np.float64).reshape(-1, 2)


def clustered_points(prng: AleaPRNG, count: int, x0: float, y0: float,
                     x1: float, y1: float, cluster_factor: float = 0.5,
                     cluster_tightness: float = 0.5, **_) -> np.ndarray:
    """
    Sites scattered around uniformly placed cluster centers.

    Each site picks a center, then a polar offset with uniform angle and
    uniform radius up to the cluster radius, and is clamped into bounds.
    """
    n_clusters = cluster_count(cluster_factor)
    max_radius = cluster_radius(cluster_tightness, x1 - x0, y1 - y0)

    centers = [(prng.uniform(x0, x1), prng.uniform(y0, y1)) for _ in range(n_clusters)]

    points = []
    for _ in range(count):
        cx, cy = centers[prng.randint(n_clusters)]
        angle = prng.uniform(0.0, 2.0 * math.pi)
        radius = prng.uniform(0.0, max_radius)
        x = min(max(cx + math.cos(angle) * radius, x0), x1)
        y = min(max(cy + math.sin(angle) * radius, y0), y1)
        points.append([x, y])
    return np.array(points, dtype=np.float64).reshape(-1, 2)


DISTRIBUTIONS: Dict[DistributionType, Callable[..., np.ndarray]] = {
    DistributionType.RANDOM: random_points,
    DistributionType.UNIFORM: jittered_grid_points,
    DistributionType.CLUSTERED: clustered_points,
}


def filter_min_distance(points: np.ndarray, min_distance: float) -> np.ndarray:
    """
    Greedy minimum-distance filter.

    Points are scanned in generation order and kept only when their distance
    to every already-kept point exceeds ``min_distance``. Later points can be
    dropped even when space remains elsewhere; this is not Poisson-disc
    sampling and existing seeds depend on the exact behaviour.
    """
    if min_distance <= 0 or len(points) == 0:
        return points

    kept = []
    for point in points:
        if kept:
            distances = np.hypot(*(np.asarray(kept) - point).T)
            if np.any(distances <= min_distance):
                continue
        kept.append(point)

    logger.debug("Minimum distance filter applied",
                 before=len(points), after=len(kept), min_distance=min_distance)
    return np.array(kept, dtype=np.float64).reshape(-1, 2)


def distribute_points(prng: AleaPRNG, count: int, width: float, height: float,
                      margin: float = 0.0,
                      distribution: DistributionType = DistributionType.RANDOM,
                      min_distance: float = 0.0, cluster_factor: float = 0.5,
                      cluster_tightness: float = 0.5) -> np.ndarray:
    """
    Generate an ordered site list inside the canvas.

    Args:
        prng: Seeded generator for this pass
        count: Number of sites requested
        width: Canvas width
        height: Canvas height
        margin: Inset from every canvas edge
        distribution: Placement policy
        min_distance: Greedy rejection threshold (0 disables)
        cluster_factor: Cluster count driver for the clustered policy
        cluster_tightness: Cluster radius driver for the clustered policy

    Returns:
        Array of [x, y] site coordinates; empty when the margin leaves no
        usable area or ``count`` is zero
    """
    x0, y0 = margin, margin
    x1, y1 = width - margin, height - margin
    if count <= 0 or x1 <= x0 or y1 <= y0:
        logger.warning("No usable area for site generation",
                       count=count, width=width, height=height, margin=margin)
        return np.empty((0, 2))

    placer = DISTRIBUTIONS[DistributionType(distribution)]
    points = placer(prng, count, x0, y0, x1, y1,
                    cluster_factor=cluster_factor,
                    cluster_tightness=cluster_tightness)
    points = filter_min_distance(points, min_distance)

    logger.info("Sites generated", distribution=DistributionType(distribution).value,
                requested=count, generated=len(points))
    return points
