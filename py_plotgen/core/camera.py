"""
Camera models and 3D to 2D projection.

Two strategies are used:

- ``PitchCamera``: a pinhole camera translated to a fixed position and
  pitched about the x axis (wave generator).
- ``OrbitCamera``: model-view and projection matrices equivalent to a
  default WEBGL sketch camera with orbit and dolly controls (box, terrain
  and wormhole generators).

Matrix projection goes through a ``MatrixSource`` so the render path, the
export path and tests can all share or substitute the same matrices.
"""

import math
from typing import NamedTuple, Optional, Protocol, Tuple

import numpy as np
import structlog
from scipy.spatial.transform import Rotation

from .scene import scene_rotation

logger = structlog.get_logger()

Matrices = Tuple[np.ndarray, np.ndarray]

DEFAULT_FOV = math.pi / 3  # vertical, 60 degrees
CLIP_RATIO = 10.0          # near = eye / 10, far = eye * 10
MAX_DEPTH = 1.0            # NDC depth at the far plane
MIN_PITCH = -math.pi / 2 + 1e-3
MAX_PITCH = math.pi / 2 - 1e-3


class PerspectivePoint(NamedTuple):
    """Screen position plus the perspective scale at that depth."""

    x: float
    y: float
    scale: float


class PitchCamera:
    """
    Pinhole camera at (0, height, z_offset) pitched by ``pitch`` radians.

    Args:
        height: Camera elevation
        pitch: Rotation about the x axis
        focal_distance: Distance that maps one world unit to one pixel
        canvas_width: Output width in pixels
        canvas_height: Output height in pixels
        z_offset: Camera z position
    """

    def __init__(self, height: float, pitch: float, focal_distance: float,
                 canvas_width: float, canvas_height: float, z_offset: float = -50.0):
        self.position = np.array([0.0, height, z_offset])
        self.pitch = pitch
        self.focal_distance = focal_distance
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height

    def project(self, x: float, y: float, z: float) -> Optional[PerspectivePoint]:
        """Project one world point; ``None`` when it is at or behind the camera."""
        rel_x = x - self.position[0]
        rel_y = y - self.position[1]
        rel_z = z - self.position[2]

        cos_a = math.cos(self.pitch)
        sin_a = math.sin(self.pitch)
        rot_y = rel_y * cos_a - rel_z * sin_a
        rot_z = rel_y * sin_a + rel_z * cos_a

        if rot_z <= 0:
            return None

        scale = self.focal_distance / rot_z
        return PerspectivePoint(
            x=self.canvas_width / 2 + rel_x * scale,
            y=self.canvas_height / 2 - rot_y * scale,
            scale=scale,
        )


class MatrixSource(Protocol):
    def matrices(self) -> Optional[Matrices]:
        """Current (model_view, projection) pair, or None before the first frame."""


class FixedMatrices:
    """Matrix source that always returns the matrices it was built with."""

    def __init__(self, model_view: Optional[np.ndarray] = None,
                 projection: Optional[np.ndarray] = None):
        self.model_view = model_view
        self.projection = projection

    def matrices(self) -> Optional[Matrices]:
        if self.model_view is None or self.projection is None:
            return None
        return self.model_view, self.projection


def translation_matrix(x: float, y: float, z: float) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = (x, y, z)
    return m


def homogeneous(rotation: np.ndarray) -> np.ndarray:
    m = np.eye(4)
    m[:3, :3] = rotation
    return m


def perspective_matrix(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """
    Perspective projection with the y axis flipped.

    World +y maps towards the bottom of the screen, matching a WEBGL sketch
    where screen coordinates grow downwards.
    """
    f = 1.0 / math.tan(fov / 2)
    return np.array([
        [f / aspect, 0, 0, 0],
        [0, -f, 0, 0],
        [0, 0, (far + near) / (near - far), 2 * far * near / (near - far)],
        [0, 0, -1, 0],
    ])


class OrbitCamera:
    """
    Matrix camera orbiting the origin.

    The model part applies the scene rotation (x, then y, then z, in
    degrees); the view part places the eye ``eye_distance`` away on the
    +z axis, rotated by the orbit yaw and pitch.
    """

    def __init__(self, canvas_width: float, canvas_height: float,
                 model_rotation: Tuple[float, float, float] = (0.0, 0.0, 0.0),
                 orbit_x: float = 0.0, orbit_y: float = 0.0,
                 eye_distance: Optional[float] = None, fov: float = DEFAULT_FOV):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.model_rotation = tuple(model_rotation)
        self.orbit_x = orbit_x
        self.orbit_y = orbit_y
        self.default_eye_distance = (canvas_height / 2) / math.tan(DEFAULT_FOV / 2)
        self.eye_distance = eye_distance if eye_distance is not None else self.default_eye_distance
        self.fov = fov

    def orbit(self, delta_yaw: float, delta_pitch: float) -> None:
        """Rotate the eye around the origin (radians). Pitch is clamped short of the poles."""
        self.orbit_y += delta_yaw
        self.orbit_x = min(max(self.orbit_x + delta_pitch, MIN_PITCH), MAX_PITCH)

    def dolly(self, factor: float) -> None:
        """Scale the eye distance; the clip planes stay fixed."""
        if factor <= 0:
            raise ValueError("dolly factor must be positive")
        self.eye_distance *= factor

    def model_matrix(self) -> np.ndarray:
        return homogeneous(scene_rotation(self.model_rotation).as_matrix())

    def view_matrix(self) -> np.ndarray:
        orbit = Rotation.from_euler("XY", [-self.orbit_x, -self.orbit_y])
        return translation_matrix(0, 0, -self.eye_distance) @ homogeneous(orbit.as_matrix())

    def projection_matrix(self) -> np.ndarray:
        near = self.default_eye_distance / CLIP_RATIO
        far = self.default_eye_distance * CLIP_RATIO
        return perspective_matrix(self.fov, self.canvas_width / self.canvas_height, near, far)

    def matrices(self) -> Optional[Matrices]:
        return self.view_matrix() @ self.model_matrix(), self.projection_matrix()


class Projection(NamedTuple):
    """Projected points: screen xy, NDC depth and a validity mask."""

    screen: np.ndarray
    depth: np.ndarray
    valid: np.ndarray


def project_points(points: np.ndarray, source: MatrixSource,
                   width: float, height: float) -> Projection:
    """
    Project world points through the source's current matrices.

    Fails closed: with no matrices available, or for points whose
    homogeneous w is zero, the point is marked invalid instead of raising.

    Args:
        points: Array of shape (..., 3)
        source: Provider of (model_view, projection)
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        Projection with screen (..., 2), depth (...), valid (...)
    """
    points = np.asarray(points, dtype=np.float64)
    shape = points.shape[:-1]
    matrices = source.matrices()
    if matrices is None:
        logger.warning("Projection matrices unavailable, nothing is visible")
        return Projection(np.zeros(shape + (2,)), np.full(shape, np.inf),
                          np.zeros(shape, dtype=bool))

    model_view, projection = matrices
    flat = points.reshape(-1, 3)
    homog = np.hstack([flat, np.ones((len(flat), 1))])
    clip = homog @ (projection @ model_view).T

    w = clip[:, 3]
    valid = w != 0
    safe_w = np.where(valid, w, 1.0)
    ndc = clip[:, :3] / safe_w[:, None]

    screen = np.empty((len(flat), 2))
    screen[:, 0] = (ndc[:, 0] + 1) / 2 * width
    screen[:, 1] = (1 - ndc[:, 1]) / 2 * height
    depth = np.where(valid, ndc[:, 2], np.inf)

    return Projection(screen.reshape(shape + (2,)), depth.reshape(shape),
                      valid.reshape(shape))


def project_segments(segments: np.ndarray, source: MatrixSource,
                     width: float, height: float) -> Projection:
    """Project (n, 2, 3) segments; results keep the (n, 2) endpoint layout."""
    return project_points(np.asarray(segments).reshape(-1, 2, 3), source, width, height)


def export_visibility_mask(projected: Projection, width: float, height: float,
                           margin_x: float, margin_y: float) -> np.ndarray:
    """
    Whole-segment keep/drop test used when exporting projected wireframes.

    A segment survives when both endpoints are valid and in front of the far
    plane (NDC depth < 1) and at least one endpoint lies inside the canvas
    grown by the margins. Segments are never clipped, so a kept segment may
    run off the page and a dropped one may have crossed it.
    """
    screen, depth, valid = projected
    in_front = valid & (depth < MAX_DEPTH)
    x = screen[..., 0]
    y = screen[..., 1]
    near_canvas = ((x >= -margin_x) & (x <= width + margin_x)
                   & (y >= -margin_y) & (y <= height + margin_y))
    return in_front.all(axis=-1) & near_canvas.any(axis=-1)
