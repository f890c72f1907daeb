# =============================================================================
# L3 Sensor - Scene Objects and Presets
# =============================================================================

import numpy as np
from dataclasses import dataclass
from typing import List

from .config import (
    SCENE_BOUNDS,
    OBJECT_RADIUS_RANGE,
    OBJECT_SPEED_RANGE,
    CROWD_NUM_OBJECTS
)


@dataclass
class SceneObject:
    """Sphere moving in front of the sensor."""
    center: np.ndarray      # [x, y, z] in sensor frame
    radius: float
    velocity: np.ndarray    # [vx, vy, vz]

    def step(self, dt: float, bounds: tuple = SCENE_BOUNDS):
        """Advance the object, bouncing off the scene bounds."""
        self.center = self.center + self.velocity * dt
        for axis in range(3):
            lo, hi = bounds[2 * axis], bounds[2 * axis + 1]
            if self.center[axis] < lo or self.center[axis] > hi:
                self.velocity[axis] = -self.velocity[axis]
                self.center[axis] = np.clip(self.center[axis], lo, hi)


class SceneGenerator:
    """
    Scene presets for the simulated sensor.
    """

    SCENARIOS = ('single', 'crossing', 'crowd', 'empty')

    @staticmethod
    def create(scenario: str, rng: np.random.Generator = None) -> List[SceneObject]:
        """
        Create the objects of a scenario.

        Args:
            scenario: One of SCENARIOS
            rng: Random generator (crowd scenario)

        Returns:
            List of SceneObject
        """
        if scenario == 'single':
            return SceneGenerator.scenario_single()
        elif scenario == 'crossing':
            return SceneGenerator.scenario_crossing()
        elif scenario == 'crowd':
            return SceneGenerator.scenario_crowd(rng or np.random.default_rng())
        elif scenario == 'empty':
            return []
        else:
            raise ValueError(f"Unknown scenario: {scenario}")

    @staticmethod
    def scenario_single() -> List[SceneObject]:
        """One object approaching and receding along the optical axis."""
        return [SceneObject(center=np.array([0.0, 0.0, 2.0]), radius=0.3,
                            velocity=np.array([0.0, 0.0, -0.3]))]

    @staticmethod
    def scenario_crossing() -> List[SceneObject]:
        """Two objects crossing the field of view in opposite directions."""
        return [
            SceneObject(center=np.array([-0.8, 0.0, 1.0]), radius=0.25,
                        velocity=np.array([0.3, 0.0, 0.0])),
            SceneObject(center=np.array([0.8, 0.1, 1.2]), radius=0.25,
                        velocity=np.array([-0.3, 0.0, 0.0])),
        ]

    @staticmethod
    def scenario_crowd(rng: np.random.Generator,
                       num_objects: int = CROWD_NUM_OBJECTS,
                       bounds: tuple = SCENE_BOUNDS,
                       radius_range: tuple = OBJECT_RADIUS_RANGE,
                       speed_range: tuple = OBJECT_SPEED_RANGE) -> List[SceneObject]:
        """More objects than can be tracked at once, moving randomly."""
        objects = []
        for _ in range(num_objects):
            center = np.array([rng.uniform(bounds[0], bounds[1]),
                               rng.uniform(bounds[2], bounds[3]),
                               rng.uniform(bounds[4], bounds[5])])
            direction = rng.normal(size=3)
            direction /= np.linalg.norm(direction)
            speed = rng.uniform(speed_range[0], speed_range[1])
            objects.append(SceneObject(center=center,
                                       radius=rng.uniform(radius_range[0], radius_range[1]),
                                       velocity=direction * speed))
        return objects
