# =============================================================================
# L4 Perception - Configuration
# =============================================================================
# All configurable parameters for the quantization and blob extraction layer.
# =============================================================================

import numpy as np

# =============================================================================
# DEPTH GRID CONFIGURATION
# =============================================================================
# Total field of view covered by the grid (radians)
HORIZ_ANGULAR_SPAN = np.pi
VERT_ANGULAR_SPAN = np.pi

# Number of angular cells along each axis
HORIZ_RES = 64
VERT_RES = 64

# Values per point in a flat sensor buffer (x, y, z, confidence)
POINT_BUFFER_STRIDE = 4

# =============================================================================
# BLOB EXTRACTION CONFIGURATION
# =============================================================================
# Cells farther than this are not part of any blob (meters)
MAX_CELL_DISTANCE = 1.5

# Minimum number of grid cells for a valid blob
MIN_BLOB_SIZE = 50

# Maximum aggregated distance of a valid blob (meters)
MAX_BLOB_DISTANCE = 1.5

# Maximum number of blobs returned per frame (nearest first)
MAX_NUM_BLOBS = 4
