"""Tests for camera projection."""

import math

import numpy as np
import pytest

from py_plotgen.core.camera import (
    MAX_PITCH, FixedMatrices, OrbitCamera, PitchCamera, Projection,
    export_visibility_mask, perspective_matrix, project_points, project_segments,
)

WIDTH, HEIGHT = 800, 600


class TestPitchCamera:
    """Test the pinhole camera used for waves."""

    @pytest.fixture
    def camera(self):
        return PitchCamera(height=50, pitch=0.3, focal_distance=300,
                           canvas_width=WIDTH, canvas_height=HEIGHT)

    def test_optical_axis_projects_to_center(self, camera):
        d = 200.0
        point = camera.project(0.0, 50 + d * math.sin(0.3), -50 + d * math.cos(0.3))
        assert point.x == pytest.approx(WIDTH / 2)
        assert point.y == pytest.approx(HEIGHT / 2)
        assert point.scale == pytest.approx(300 / d)

    def test_behind_camera_culled(self):
        camera = PitchCamera(50, 0.0, 300, WIDTH, HEIGHT)
        assert camera.project(0.0, 50.0, -100.0) is None
        assert camera.project(0.0, 50.0, -50.0) is None

    def test_screen_directions(self):
        camera = PitchCamera(0, 0.0, 300, WIDTH, HEIGHT)
        right = camera.project(10.0, 0.0, 100.0)
        up = camera.project(0.0, 10.0, 100.0)
        assert right.x > WIDTH / 2
        assert up.y < HEIGHT / 2


class TestOrbitCamera:
    """Test the matrix camera."""

    def test_default_eye_distance(self):
        camera = OrbitCamera(WIDTH, HEIGHT)
        assert camera.eye_distance == pytest.approx(300 / math.tan(math.pi / 6))

    @pytest.mark.parametrize("rotation,orbit", [
        ((0, 0, 0), (0, 0)),
        ((30, -30, 0), (0, 0)),
        ((55, 0, -40), (0.3, -0.8)),
    ])
    def test_origin_projects_to_center(self, rotation, orbit):
        camera = OrbitCamera(WIDTH, HEIGHT, model_rotation=rotation,
                             orbit_x=orbit[0], orbit_y=orbit[1])
        screen, depth, valid = project_points(np.zeros(3), camera, WIDTH, HEIGHT)
        assert valid
        assert screen[0] == pytest.approx(WIDTH / 2)
        assert screen[1] == pytest.approx(HEIGHT / 2)
        assert -1 < depth < 1

    def test_point_on_axis(self):
        camera = OrbitCamera(WIDTH, HEIGHT)
        screen, _, valid = project_points(np.array([0.0, 0.0, 100.0]), camera, WIDTH, HEIGHT)
        assert valid
        np.testing.assert_allclose(screen, [WIDTH / 2, HEIGHT / 2])

    def test_screen_y_grows_downward(self):
        camera = OrbitCamera(WIDTH, HEIGHT)
        points = np.array([[10.0, 0.0, 0.0], [0.0, 10.0, 0.0]])
        screen = project_points(points, camera, WIDTH, HEIGHT).screen
        assert screen[0, 0] > WIDTH / 2
        assert screen[1, 1] > HEIGHT / 2

    def test_unit_scale_at_eye_distance(self):
        """At the default eye distance one world unit spans one pixel."""
        camera = OrbitCamera(WIDTH, HEIGHT)
        screen = project_points(np.array([100.0, 50.0, 0.0]), camera, WIDTH, HEIGHT).screen
        np.testing.assert_allclose(screen, [WIDTH / 2 + 100, HEIGHT / 2 + 50])

    def test_yaw_brings_point_onto_axis(self):
        """A quarter yaw turns the +x axis towards the eye."""
        camera = OrbitCamera(WIDTH, HEIGHT, orbit_y=math.pi / 2)
        screen, _, valid = project_points(np.array([100.0, 0.0, 0.0]), camera, WIDTH, HEIGHT)
        assert valid
        np.testing.assert_allclose(screen, [WIDTH / 2, HEIGHT / 2], atol=1e-9)

    def test_model_rotation_degrees(self):
        camera = OrbitCamera(WIDTH, HEIGHT, model_rotation=(0, 0, 90))
        np.testing.assert_allclose(camera.model_matrix()[:3, 0], [0, 1, 0], atol=1e-12)

    def test_orbit_pitch_clamped(self):
        camera = OrbitCamera(WIDTH, HEIGHT)
        camera.orbit(0.5, 10.0)
        assert camera.orbit_x == MAX_PITCH
        assert camera.orbit_y == 0.5

    def test_dolly(self):
        camera = OrbitCamera(WIDTH, HEIGHT)
        before = project_points(np.array([100.0, 0.0, 0.0]), camera, WIDTH, HEIGHT).screen
        camera.dolly(2.0)
        after = project_points(np.array([100.0, 0.0, 0.0]), camera, WIDTH, HEIGHT).screen
        assert abs(after[0] - WIDTH / 2) < abs(before[0] - WIDTH / 2)
        with pytest.raises(ValueError):
            camera.dolly(0)


class TestFailClosed:
    """Projection never raises when matrices are missing or degenerate."""

    def test_missing_matrices(self):
        segments = np.ones((5, 2, 3))
        projected = project_segments(segments, FixedMatrices(), WIDTH, HEIGHT)
        assert projected.valid.shape == (5, 2)
        assert not projected.valid.any()
        mask = export_visibility_mask(projected, WIDTH, HEIGHT, 400, 400)
        assert not mask.any()

    def test_zero_w(self):
        source = FixedMatrices(np.eye(4), perspective_matrix(math.pi / 3, 4 / 3, 1, 100))
        projected = project_points(np.array([[0.0, 0.0, 0.0], [0.0, 0.0, -10.0]]),
                                   source, WIDTH, HEIGHT)
        assert list(projected.valid) == [False, True]

    def test_fixed_matrices_match_camera(self):
        camera = OrbitCamera(WIDTH, HEIGHT, model_rotation=(20, -30, 0))
        points = np.random.default_rng(0).uniform(-200, 200, (20, 3))
        direct = project_points(points, camera, WIDTH, HEIGHT)
        fixed = project_points(points, FixedMatrices(*camera.matrices()), WIDTH, HEIGHT)
        np.testing.assert_array_equal(direct.screen, fixed.screen)


class TestExportVisibility:
    """Test whole-segment keep/drop."""

    def test_mask(self):
        screen = np.array([
            [[10, 10], [20, 20]],        # inside
            [[-1000, -1000], [2000, 2000]],  # both far outside
            [[10, 10], [20, 20]],        # beyond far plane
            [[10, 10], [5000, 5000]],    # one endpoint inside
        ], dtype=float)
        depth = np.array([[0.5, 0.5], [0.5, 0.5], [0.5, 1.5], [0.5, 0.9]])
        valid = np.ones((4, 2), dtype=bool)
        mask = export_visibility_mask(Projection(screen, depth, valid), WIDTH, HEIGHT, 400, 400)
        assert list(mask) == [True, False, False, True]

    def test_margin_is_inclusive(self):
        screen = np.array([[[-400.0, -300.0], [-5000.0, 0.0]]])
        projected = Projection(screen, np.zeros((1, 2)), np.ones((1, 2), dtype=bool))
        assert export_visibility_mask(projected, WIDTH, HEIGHT, 400, 300)[0]
        assert not export_visibility_mask(projected, WIDTH, HEIGHT, 399, 300)[0]
