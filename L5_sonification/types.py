# =============================================================================
# L5 Sonification - Types and Data Structures
# =============================================================================
# Tracked things and the per-frame result of the tracker.
# Note: Blob comes from L4_perception.
# =============================================================================

from dataclasses import dataclass, field
from typing import List

from L4_perception import Blob

from .audio import PoolExhausted


@dataclass
class Thing:
    """
    A blob and its associated sound.

    The blob is replaced as a whole on every continuation; the channel
    binding stays the same for the thing's whole life.
    """
    id: int
    blob: Blob
    channel_id: int
    first_seen: int                 # Frame of creation
    last_seen: int                  # Last frame matched
    updates: int = 0                # Number of continuations


@dataclass
class RejectedBlob:
    """A blob that could not become a thing this frame."""
    blob: Blob
    error: PoolExhausted


@dataclass
class TrackingUpdate:
    """Outcome of one tracker update."""
    frame: int
    things: List[Thing] = field(default_factory=list)      # Tracked set after the update
    continued: List[Thing] = field(default_factory=list)   # Matched with a previous thing
    created: List[Thing] = field(default_factory=list)     # New things (new channel)
    released: List[Thing] = field(default_factory=list)    # Previous things that disappeared
    rejected: List[RejectedBlob] = field(default_factory=list)

    @property
    def channel_ids(self) -> List[int]:
        return [t.channel_id for t in self.things]
