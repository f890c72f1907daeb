# =============================================================================
# L5 Sonification - Configuration
# =============================================================================
# All configurable parameters for tracking and audio mapping.
# =============================================================================

import numpy as np

# =============================================================================
# THING TRACKING CONFIGURATION
# =============================================================================
# Maximum number of simultaneously tracked things
MAX_NUM_THINGS = 4

# Maximum centroid displacement between frames for the same thing (meters)
MATCH_EPSILON = 0.40

# Association strategy: 'greedy' (nearest neighbour, ranking order)
# or 'hungarian' (optimal assignment)
ASSOCIATION_METHOD = 'greedy'

# =============================================================================
# AUDIO MAPPING CONFIGURATION
# =============================================================================
# Distance at which volume has fallen to 2^-VOLUME_FALLOFF (meters)
MAX_DISTANCE = 1.5

# Exponent of the volume falloff: vol = 2^(-FALLOFF * r / MAX_DISTANCE)
VOLUME_FALLOFF = 4.0

# Horizontal span mapped onto the stereo field (radians)
PAN_ANGULAR_SPAN = np.pi

# =============================================================================
# AUDIO CHANNEL POOL CONFIGURATION
# =============================================================================
# Number of looped sounds (channels). Twice MAX_NUM_THINGS so a frame of
# new things can be leased before the previous frame's things are released.
AUDIO_NUM_CHANNELS = 2 * MAX_NUM_THINGS

# Names of the looped sounds, one per channel
AUDIO_SOUND_NAMES = tuple(f"sound_{i}" for i in range(1, AUDIO_NUM_CHANNELS + 1))

# Maximum number of simultaneously audible streams
AUDIO_MAX_STREAMS = MAX_NUM_THINGS
