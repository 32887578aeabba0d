"""Delaunay triangulation and clipped Voronoi cells for a site set."""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError, Voronoi
from shapely.geometry import Polygon, box

logger = structlog.get_logger()

# Far sentinel sites are placed this many canvas sizes away from the center
# so that every real site has a bounded cell.
SENTINEL_DISTANCE = 10.0
MIN_CELL_AREA = 1e-9


@dataclass
class Tessellation:
    """Triangulation and per-site cells for one site set."""

    width: float
    height: float
    sites: np.ndarray
    triangles: np.ndarray = field(default_factory=lambda: np.empty((0, 3), dtype=np.int64))
    cells: List[Optional[np.ndarray]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.triangles) == 0 and not any(c is not None for c in self.cells)

    def cell_indices(self) -> List[int]:
        """Site indices that have a defined cell polygon."""
        return [i for i, cell in enumerate(self.cells) if cell is not None]


def get_sentinel_points(width: float, height: float) -> np.ndarray:
    """
    Four far-away sites around the canvas.

    Adding them to the diagram closes every real cell, which replaces the
    infinite-ridge handling of an unbounded Voronoi diagram.
    """
    cx, cy = width / 2, height / 2
    d = SENTINEL_DISTANCE * max(width, height)
    return np.array([
        [cx - d, cy - d],
        [cx + d, cy - d],
        [cx + d, cy + d],
        [cx - d, cy + d],
    ])


def clip_cell(vertices: np.ndarray, canvas: Polygon) -> Optional[np.ndarray]:
    """
    Intersect one cell outline with the canvas rectangle.

    Args:
        vertices: Cell corners in boundary order
        canvas: Clip rectangle

    Returns:
        (k, 2) outline without the repeated closing vertex, or None when the
        intersection is empty or has no area
    """
    clipped = Polygon(vertices).intersection(canvas)
    if clipped.is_empty or not isinstance(clipped, Polygon) or clipped.area < MIN_CELL_AREA:
        return None

    coords = np.asarray(clipped.exterior.coords, dtype=np.float64)[:-1]
    min_x, min_y, max_x, max_y = canvas.bounds
    coords[:, 0] = np.clip(coords[:, 0], min_x, max_x)
    coords[:, 1] = np.clip(coords[:, 1], min_y, max_y)
    return coords


def build_cells(vor: Voronoi, sites: np.ndarray, width: float,
                height: float) -> List[Optional[np.ndarray]]:
    """
    Build one clipped cell polygon per real site.

    Args:
        vor: scipy Voronoi diagram of sites followed by sentinel points
        sites: Real site coordinates (the first ``len(sites)`` diagram points)
        width: Clip rectangle width
        height: Clip rectangle height

    Returns:
        List indexed like ``sites``; ``None`` where the cell is degenerate
    """
    canvas = box(0.0, 0.0, width, height)
    cells: List[Optional[np.ndarray]] = []
    skipped = 0

    for i, site in enumerate(sites):
        region_idx = vor.point_region[i]
        region = vor.regions[region_idx] if region_idx != -1 else []
        if not region or -1 in region or len(region) < 3:
            cells.append(None)
            skipped += 1
            continue

        vertices = vor.vertices[region]
        # Cells are convex and contain their site, so angle order is
        # boundary order.
        angles = np.arctan2(vertices[:, 1] - site[1], vertices[:, 0] - site[0])
        cell = clip_cell(vertices[np.argsort(angles)], canvas)
        if cell is None:
            skipped += 1
        cells.append(cell)

    if skipped:
        logger.warning("Skipped degenerate Voronoi cells", skipped=skipped, sites=len(sites))
    return cells


def build_tessellation(sites: np.ndarray, width: float, height: float) -> Tessellation:
    """
    Triangulate ``sites`` and derive their Voronoi cells clipped to the canvas.

    Fewer than three sites, or a site set Qhull cannot triangulate (all
    collinear, for example), yields an empty tessellation rather than an
    error.
    """
    sites = np.asarray(sites, dtype=np.float64).reshape(-1, 2)
    tessellation = Tessellation(width=width, height=height, sites=sites)

    if len(sites) < 3:
        logger.warning("Not enough sites for tessellation", sites=len(sites))
        return tessellation

    try:
        delaunay = Delaunay(sites)
        vor = Voronoi(np.vstack([sites, get_sentinel_points(width, height)]))
    except QhullError as exc:
        logger.warning("Tessellation failed, producing no geometry",
                       sites=len(sites), error=str(exc).splitlines()[0])
        return tessellation

    tessellation.triangles = np.asarray(delaunay.simplices, dtype=np.int64)
    tessellation.cells = build_cells(vor, sites, width, height)

    logger.info("Tessellation built", sites=len(sites),
                triangles=len(tessellation.triangles),
                cells=len(tessellation.cell_indices()))
    return tessellation
