# =============================================================================
# L3 Sensor - Sensor World
# =============================================================================

import numpy as np
from typing import List

from .scene import SceneObject, SceneGenerator
from .depth_sensor import DepthSensorSimulator
from .config import DEFAULT_DT, SCENE_BOUNDS


class SensorWorld:
    """
    Simulation world seen by a static depth sensor.
    Manages scene objects, the sensor and global time.
    """

    def __init__(self, dt: float = DEFAULT_DT, scenario: str = 'crossing',
                 seed: int = None, bounds: tuple = SCENE_BOUNDS,
                 sensor: DepthSensorSimulator = None):
        """
        Initialize the world.

        Args:
            dt: Delta time between frames
            scenario: Scene preset (see SceneGenerator.SCENARIOS)
            seed: Seed for object placement and sensor noise
            bounds: Region objects move in
            sensor: Depth sensor (default configuration when omitted)
        """
        self.dt = dt
        self.bounds = bounds
        self.rng = np.random.default_rng(seed)
        self.sensor = sensor or DepthSensorSimulator(rng=self.rng)
        self.objects: List[SceneObject] = []
        self.current_time = 0.0
        self.current_frame = 0
        self.reset(scenario)

    def reset(self, scenario: str):
        """Reset time and load a scenario."""
        self.scenario = scenario
        self.objects = SceneGenerator.create(scenario, self.rng)
        self.current_time = 0.0
        self.current_frame = 0

    def update(self) -> np.ndarray:
        """
        Advance one frame and scan.

        Returns:
            Point cloud of the frame, (N, 4)
        """
        for obj in self.objects:
            obj.step(self.dt, self.bounds)
        self.current_time += self.dt
        self.current_frame += 1
        return self.sensor.scan(self.objects)

    def get_state(self) -> dict:
        return {
            'time': self.current_time,
            'frame': self.current_frame,
            'objects': [{'center': o.center.copy(), 'radius': o.radius}
                        for o in self.objects],
        }
