# =============================================================================
# L4 Perception Package
# =============================================================================
# Point-cloud perception layer.
#
# Responsibilities:
# - Cartesian <-> spherical coordinate transforms
# - Generalized (f-)means of radial distances
# - Angular quantization of point clouds into a depth grid
# - Connected-component blob extraction and nearest-N selection
#
# Usage:
#   from L4_perception import PerceptionLayer
#   perception = PerceptionLayer()
#   blobs = perception.process_point_cloud(points)
# =============================================================================

# Types
from .types import Bijection, Blob

# Core components
from .transforms import (
    spherical_of_cartesian,
    cartesian_of_spherical,
    cell_angles,
    angle_to_index
)
from .averaging import (
    RECIPROCAL,
    IDENTITY,
    LOGARITHM,
    generalized_average
)
from .quantizer import DepthQuantizer, as_point_array
from .blobs import BlobExtractor, find_blobs
from .layer import PerceptionLayer

__all__ = [
    # Types
    'Bijection',
    'Blob',

    # Transforms
    'spherical_of_cartesian',
    'cartesian_of_spherical',
    'cell_angles',
    'angle_to_index',

    # Averaging
    'RECIPROCAL',
    'IDENTITY',
    'LOGARITHM',
    'generalized_average',

    # Components
    'DepthQuantizer',
    'as_point_array',
    'BlobExtractor',
    'find_blobs',

    # Complete layer
    'PerceptionLayer',
]

__version__ = '1.0.0'
