# =============================================================================
# L3 Sensor Package
# =============================================================================
# Simulated depth sensor standing in for the real depth service.
#
# Responsibilities:
# - Scene objects (moving spheres) and scenario presets
# - Ray-cast point-cloud generation with range noise
#
# Usage:
#   from L3_sensor import SensorWorld
#   world = SensorWorld(scenario='crossing')
#   points = world.update()
# =============================================================================

from .scene import SceneObject, SceneGenerator
from .depth_sensor import DepthSensorSimulator
from .world import SensorWorld

from .config import DEFAULT_DT, DEFAULT_SIMULATION_STEPS

__all__ = [
    'SceneObject',
    'SceneGenerator',
    'DepthSensorSimulator',
    'SensorWorld',

    'DEFAULT_DT',
    'DEFAULT_SIMULATION_STEPS',
]

__version__ = '1.0.0'
