# =============================================================================
# L5 Sonification - Audio Mapping
# =============================================================================
# Derive pan and volume from a tracked position.
#   pan = -theta / (span / 2)            lateral position
#   vol = 2^(-falloff * r / max_dist)    1 at r = 0, 1/16 at r = max_dist
# =============================================================================

import numpy as np

from .config import MAX_DISTANCE, VOLUME_FALLOFF, PAN_ANGULAR_SPAN


def _blob_of(thing):
    return getattr(thing, "blob", thing)


def pan_of(thing, horiz_span: float = PAN_ANGULAR_SPAN) -> float:
    """Get the audio pan associated with the lateral position of thing (unclamped)."""
    return -_blob_of(thing).average_theta / (horiz_span / 2.0)


def vol_of(thing, max_distance: float = MAX_DISTANCE,
           falloff: float = VOLUME_FALLOFF) -> float:
    """Get the audio volume associated with the distance of thing."""
    return float(2.0 ** (-falloff * _blob_of(thing).average_r / max_distance))


def clamp_pan(pan: float) -> float:
    return float(np.clip(pan, -1.0, 1.0))


def clamp_volume(volume: float) -> float:
    return float(np.clip(volume, 0.0, 1.0))
