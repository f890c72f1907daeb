# =============================================================================
# L5 Sonification Package
# =============================================================================
# Turns the blobs of the perception layer into positioned looped sounds.
#
# Responsibilities:
# - Frame-to-frame tracking of things (nearest-neighbour matching)
# - Audio channel lease/release as things appear and disappear
# - Volume/pan mapping of each thing's position
#
# Usage:
#   from L5_sonification import SonificationLayer
#   layer = SonificationLayer()
#   update = layer.process_point_cloud(points)
#
# Note: Quantization and blob extraction are handled by L4_perception.
# =============================================================================

# Types
from .types import Thing, RejectedBlob, TrackingUpdate

# Audio channel pool
from .audio import (
    AudioChannelPool,
    AudioChannelError,
    PoolExhausted,
    InvalidChannel,
    OutOfRange
)
from .looped_sounds import LoopedSoundCollection, ChannelState, stereo_volumes

# Core components
from .mapping import pan_of, vol_of, clamp_pan, clamp_volume
from .tracker import ThingTracker

# Complete layer
from .layer import SonificationLayer

__all__ = [
    # Types
    'Thing',
    'RejectedBlob',
    'TrackingUpdate',

    # Audio
    'AudioChannelPool',
    'AudioChannelError',
    'PoolExhausted',
    'InvalidChannel',
    'OutOfRange',
    'LoopedSoundCollection',
    'ChannelState',
    'stereo_volumes',

    # Components
    'pan_of',
    'vol_of',
    'clamp_pan',
    'clamp_volume',
    'ThingTracker',

    # Complete layer
    'SonificationLayer',
]

__version__ = '1.0.0'
