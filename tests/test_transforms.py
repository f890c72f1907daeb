"""
Tests for cartesian <-> spherical conversions.
"""
import numpy as np
import pytest

from L4_perception import (
    spherical_of_cartesian,
    cartesian_of_spherical,
    cell_angles,
    angle_to_index
)


class TestSphericalOfCartesian:

    def test_point_on_optical_axis(self):
        r, theta, phi = spherical_of_cartesian(0.0, 0.0, 2.0)
        assert r == pytest.approx(2.0)
        assert theta == pytest.approx(0.0)
        assert phi == pytest.approx(0.0)

    def test_right_is_positive_theta_and_up_is_positive_phi(self):
        _, theta, _ = spherical_of_cartesian(1.0, 0.0, 1.0)
        assert theta == pytest.approx(np.pi / 4)
        # y points down
        _, _, phi = spherical_of_cartesian(0.0, -1.0, 1.0)
        assert phi == pytest.approx(np.pi / 4)

    def test_vectorised(self):
        x = np.array([0.0, 1.0, -1.0])
        y = np.zeros(3)
        z = np.ones(3)
        r, theta, phi = spherical_of_cartesian(x, y, z)
        assert r.shape == (3,)
        np.testing.assert_allclose(theta, [0.0, np.pi / 4, -np.pi / 4])

    def test_points_behind_sensor_fold_onto_front_hemisphere(self):
        # atan loses the sign of z: (0.5, 0, -1) and (-0.5, 0, 1) share theta
        _, theta_behind, _ = spherical_of_cartesian(0.5, 0.0, -1.0)
        _, theta_front, _ = spherical_of_cartesian(-0.5, 0.0, 1.0)
        assert theta_behind == pytest.approx(theta_front)

    def test_zero_depth_gives_right_angle(self):
        _, theta, _ = spherical_of_cartesian(1.0, 0.0, 0.0)
        assert theta == pytest.approx(np.pi / 2)

    def test_origin_is_undefined(self):
        r, theta, phi = spherical_of_cartesian(0.0, 0.0, 0.0)
        assert r == 0.0
        assert np.isnan(theta)
        assert np.isnan(phi)


class TestCartesianOfSpherical:

    @pytest.mark.parametrize("point", [
        (0.3, -0.2, 1.0),
        (-1.2, 0.5, 0.7),
        (0.01, 0.9, 2.5),
        (2.0, -2.0, 0.1),
    ])
    def test_round_trip_in_front_of_sensor(self, point):
        r, theta, phi = spherical_of_cartesian(*point)
        np.testing.assert_allclose(cartesian_of_spherical(r, theta, phi), point,
                                   atol=1e-12)

    def test_round_trip_random_points(self):
        rng = np.random.default_rng(7)
        x = rng.uniform(-2, 2, 200)
        y = rng.uniform(-2, 2, 200)
        z = rng.uniform(0.05, 3, 200)
        back = cartesian_of_spherical(*spherical_of_cartesian(x, y, z))
        np.testing.assert_allclose(np.stack(back), np.stack([x, y, z]), atol=1e-9)

    def test_defined_on_optical_axis(self):
        # x / tan(theta) is 0/0 at theta = 0; the cos form keeps z finite
        x, y, z = cartesian_of_spherical(1.5, 0.0, 0.0)
        assert (x, y, z) == pytest.approx((0.0, 0.0, 1.5))

    def test_point_behind_sensor_does_not_round_trip(self):
        back = cartesian_of_spherical(*spherical_of_cartesian(0.5, 0.0, -1.0))
        assert back == pytest.approx((-0.5, 0.0, 1.0))


class TestGridIndexing:

    def test_cell_angles_are_lower_edges(self):
        angles = cell_angles(4, np.pi)
        np.testing.assert_allclose(angles, [-np.pi / 2, -np.pi / 4, 0.0, np.pi / 4])

    def test_angle_to_index(self):
        idx, clamped = angle_to_index(np.array([-np.pi / 2, -0.01, 0.0, 1.5]), 64, np.pi)
        assert idx.tolist() == [0, 31, 32, 62]
        assert not clamped.any()

    def test_out_of_span_indices_are_clamped(self):
        idx, clamped = angle_to_index(np.array([np.pi / 2, -2.0, 2.0]), 64, np.pi)
        assert idx.tolist() == [63, 0, 63]
        assert clamped.all()
