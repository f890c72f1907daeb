# =============================================================================
# L5 Sonification - Sonification Layer
# =============================================================================
# Per-frame driver: point cloud -> depth grid -> blobs -> tracked things
# -> audio channel volume/pan.
# =============================================================================

import logging
import threading
from typing import List, Optional

from L4_perception import PerceptionLayer

from .types import Thing, TrackingUpdate
from .audio import AudioChannelPool
from .looped_sounds import LoopedSoundCollection
from .tracker import ThingTracker

from .config import (
    MATCH_EPSILON,
    MAX_DISTANCE,
    MAX_NUM_THINGS,
    ASSOCIATION_METHOD
)

logger = logging.getLogger(__name__)


class SonificationLayer:
    """
    Complete L5 Sonification Layer.

    Integrates:
    - L4 perception (quantization and blob extraction)
    - Thing tracking
    - Audio channel bindings

    Frames are processed one at a time; a frame arriving while another is
    being processed waits for it to finish.
    """

    def __init__(self, audio_pool: Optional[AudioChannelPool] = None,
                 perception: Optional[PerceptionLayer] = None,
                 epsilon: float = MATCH_EPSILON,
                 max_distance: float = MAX_DISTANCE,
                 association: str = ASSOCIATION_METHOD):
        """
        Initialize sonification layer.

        Args:
            audio_pool: Channel pool; a LoopedSoundCollection is created
                        (and owned) when omitted
            perception: Perception layer (default configuration when omitted)
            epsilon: Matching tolerance for tracking (meters)
            max_distance: Distance used by the volume falloff (meters)
            association: 'greedy' or 'hungarian'
        """
        self._owns_pool = audio_pool is None
        self.audio_pool = audio_pool if audio_pool is not None else LoopedSoundCollection()
        if perception is None:
            perception = PerceptionLayer(max_num_blobs=MAX_NUM_THINGS)
        self.perception = perception
        self.tracker = ThingTracker(self.audio_pool, epsilon=epsilon,
                                    max_distance=max_distance,
                                    horiz_span=perception.quantizer.horiz_span,
                                    association=association)
        self._lock = threading.Lock()
        self.frames_processed = 0
        self.last_update: Optional[TrackingUpdate] = None

    def process_point_cloud(self, points, num_points: int = None) -> TrackingUpdate:
        """
        Process a point cloud and update the tracked things.

        Args:
            points: (N, >=3) array or flat (x, y, z, c) buffer
            num_points: Number of points to read (default: all)

        Returns:
            TrackingUpdate of this frame
        """
        with self._lock:
            blobs = self.perception.process_point_cloud(points, num_points)
            return self._track(blobs)

    def process_grid(self, grid) -> TrackingUpdate:
        """Process an already quantized depth grid."""
        with self._lock:
            blobs = self.perception.process_grid(grid)
            return self._track(blobs)

    def _track(self, blobs) -> TrackingUpdate:
        update = self.tracker.update(blobs)
        self.frames_processed += 1
        self.last_update = update
        logger.debug("Frame %d: %d blobs, channels %s (+%d, -%d, rejected %d)",
                     update.frame, len(blobs), update.channel_ids,
                     len(update.created), len(update.released),
                     len(update.rejected))
        return update

    def get_things(self) -> List[Thing]:
        """Get current tracked things."""
        with self._lock:
            return self.tracker.get_things()

    def reset(self):
        """Release all bindings and reset tracking state."""
        with self._lock:
            self.tracker.reset()
            self.frames_processed = 0
            self.last_update = None

    def shutdown(self):
        """Discard tracked state, release all bindings and close an owned pool."""
        with self._lock:
            released = self.tracker.release_all()
            logger.info("Sonification stopped, released %d channels", len(released))
            if self._owns_pool:
                self.audio_pool.close()

    def get_statistics(self) -> dict:
        """Get sonification statistics."""
        stats = self.perception.get_statistics()
        stats.update({
            "frames_processed": self.frames_processed,
            "tracked_things": len(self.tracker.things),
            "channels": [t.channel_id for t in self.tracker.things],
            "total_created": self.tracker.total_created,
            "total_released": self.tracker.total_released,
            "total_rejected": self.tracker.total_rejected,
        })
        return stats
