"""
Tests for the simulated depth sensor and its use with the pipeline.
"""
import numpy as np
import pytest

from L3_sensor import DepthSensorSimulator, SceneObject, SceneGenerator, SensorWorld
from L5_sonification import SonificationLayer


@pytest.fixture
def wide_sensor():
    return DepthSensorSimulator(h_fov=100.0, v_fov=80.0, h_rays=200, v_rays=160,
                                noise_std=0.0)


def _sphere(x, y, z, radius=0.3):
    return SceneObject(center=np.array([x, y, z]), radius=radius,
                       velocity=np.zeros(3))


def test_empty_scene_has_no_points(wide_sensor):
    points = wide_sensor.scan([])
    assert points.shape == (0, 4)


def test_points_lie_on_sphere_surface(wide_sensor):
    sphere = _sphere(0.0, 0.0, 1.0)
    points = wide_sensor.scan([sphere])
    assert len(points) > 0
    dist = np.linalg.norm(points[:, :3] - sphere.center, axis=1)
    np.testing.assert_allclose(dist, sphere.radius, atol=1e-9)
    assert (points[:, 3] == 1.0).all()


def test_nearest_surface_occludes(wide_sensor):
    points = wide_sensor.scan([_sphere(0.0, 0.0, 1.0), _sphere(0.0, 0.0, 2.0)])
    assert np.linalg.norm(points[:, :3], axis=1).max() < 1.0


def test_objects_beyond_range_are_not_seen():
    sensor = DepthSensorSimulator(max_range=1.0, noise_std=0.0)
    assert sensor.scan([_sphere(0.0, 0.0, 3.0)]).shape == (0, 4)


def test_object_bounces_off_bounds():
    obj = SceneObject(center=np.array([0.0, 0.0, 0.55]), radius=0.2,
                      velocity=np.array([0.0, 0.0, -1.0]))
    obj.step(0.1)
    assert obj.center[2] == pytest.approx(0.5)
    assert obj.velocity[2] == pytest.approx(1.0)


def test_unknown_scenario_raises():
    with pytest.raises(ValueError):
        SceneGenerator.create('stampede')


def test_crowd_scenario_is_reproducible():
    a = SceneGenerator.create('crowd', np.random.default_rng(3))
    b = SceneGenerator.create('crowd', np.random.default_rng(3))
    assert len(a) == 6
    for oa, ob in zip(a, b):
        np.testing.assert_allclose(oa.center, ob.center)


def test_world_update_advances_time():
    world = SensorWorld(scenario='single', seed=1)
    points = world.update()
    assert world.current_frame == 1
    assert points.ndim == 2 and points.shape[1] == 4


def test_two_objects_get_two_channels(wide_sensor):
    world = SensorWorld(scenario='empty', sensor=wide_sensor)
    world.objects = [_sphere(-0.45, 0.0, 1.0), _sphere(0.45, 0.0, 1.0)]
    layer = SonificationLayer()

    update = layer.process_point_cloud(world.update())
    assert sorted(update.channel_ids) == [1, 2]
    left, right = sorted(update.things, key=lambda t: t.blob.average_theta)
    # Objects to the right (positive theta) get a negative pan
    assert left.blob.average_theta < 0 < right.blob.average_theta
    assert layer.audio_pool.get_channel_state(left.channel_id).pan > 0
    assert layer.audio_pool.get_channel_state(right.channel_id).pan < 0

    for obj in world.objects:
        obj.center = obj.center + np.array([0.0, 0.0, -0.05])
    update = layer.process_point_cloud(world.update())
    assert len(update.continued) == 2
    assert update.created == []
    assert sorted(update.channel_ids) == [1, 2]
