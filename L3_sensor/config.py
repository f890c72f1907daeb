# =============================================================================
# L3 Sensor - Configuration
# =============================================================================
# All configurable parameters for the simulated depth sensor and scenes.
# Frame: x to the right, y downwards, z along the optical axis (meters).
# =============================================================================

# =============================================================================
# TIME PARAMETERS
# =============================================================================
# Delta time between point-cloud frames (seconds), 5 Hz like a depth camera
DEFAULT_DT = 0.2

# Total number of simulation steps
DEFAULT_SIMULATION_STEPS = 300

# =============================================================================
# DEPTH SENSOR CONFIGURATION
# =============================================================================
# Field of view (degrees)
SENSOR_H_FOV = 70.0
SENSOR_V_FOV = 55.0

# Number of rays along each axis
SENSOR_H_RAYS = 140
SENSOR_V_RAYS = 110

# Maximum measurable range (meters)
SENSOR_MAX_RANGE = 4.0

# Gaussian range noise standard deviation (meters)
SENSOR_NOISE_STD = 0.01

# =============================================================================
# SCENE CONFIGURATION
# =============================================================================
# Region objects move in: (x_min, x_max, y_min, y_max, z_min, z_max)
SCENE_BOUNDS = (-1.2, 1.2, -0.6, 0.6, 0.5, 2.5)

# Object radius range (meters)
OBJECT_RADIUS_RANGE = (0.2, 0.35)

# Object speed range (m/s)
OBJECT_SPEED_RANGE = (0.1, 0.4)

# Number of objects in the crowd scenario
CROWD_NUM_OBJECTS = 6
