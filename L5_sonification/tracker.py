# =============================================================================
# L5 Sonification - Thing Tracker
# =============================================================================
# Tracks blobs over time and binds each tracked thing to an audio channel:
# - Nearest-neighbour association of new blobs to previous things
# - Channel lease on appearance, release on disappearance
# - Volume/pan update from the thing's position every frame
# =============================================================================

import logging
import numpy as np
from typing import Dict, List, Optional, Sequence

from L4_perception import Blob

from .types import Thing, RejectedBlob, TrackingUpdate
from .audio import AudioChannelPool, PoolExhausted
from .mapping import pan_of, vol_of, clamp_pan, clamp_volume

from .config import (
    MATCH_EPSILON,
    MAX_DISTANCE,
    PAN_ANGULAR_SPAN,
    ASSOCIATION_METHOD
)

logger = logging.getLogger(__name__)

ASSOCIATION_METHODS = ('greedy', 'hungarian')

# Cost assigned to pairs that cannot be associated
_GATED_COST = 1e6


class ThingTracker:
    """
    Multi-object tracker with audio channel bindings.

    Each frame:
    1. Receives the ranked blobs (nearest first)
    2. Associates them to the things of the previous frame
    3. Continues matched things, keeping their channel
    4. Pauses the channels of things that disappeared
    5. Creates things for unmatched blobs, leasing a new channel
    6. Releases the channels of things that disappeared

    Greedy association processes blobs in ranking order and takes the
    nearest previous thing that is still unmatched, so an earlier blob
    can take a thing that would have suited a later blob better.
    """

    def __init__(self, audio_pool: AudioChannelPool,
                 epsilon: float = MATCH_EPSILON,
                 max_distance: float = MAX_DISTANCE,
                 horiz_span: float = PAN_ANGULAR_SPAN,
                 association: str = ASSOCIATION_METHOD):
        """
        Initialize the tracker.

        Args:
            audio_pool: Pool the channel bindings are leased from
            epsilon: Maximum centroid distance between frames for a match (meters)
            max_distance: Distance used by the volume falloff (meters)
            horiz_span: Horizontal span mapped onto the stereo field (radians)
            association: 'greedy' or 'hungarian'
        """
        if association not in ASSOCIATION_METHODS:
            raise ValueError(f"Unknown association method: {association}")
        self.audio_pool = audio_pool
        self.epsilon = epsilon
        self.max_distance = max_distance
        self.horiz_span = horiz_span
        self.association = association

        self.things: List[Thing] = []
        self.next_id = 0
        self.current_frame = 0

        # Totals over the tracker's life
        self.total_created = 0
        self.total_released = 0
        self.total_rejected = 0

    def update(self, blobs: Sequence[Blob]) -> TrackingUpdate:
        """
        Update tracked things with the blobs of a new frame.

        Args:
            blobs: Blobs of the current frame, nearest first

        Returns:
            TrackingUpdate describing the new tracked set
        """
        self.current_frame += 1
        result = TrackingUpdate(frame=self.current_frame)
        previous = list(self.things)

        if self.association == 'hungarian':
            matches = self._associate_hungarian(blobs, previous)
        else:
            matches = self._associate_greedy(blobs, previous)

        carried = set(matches.values())
        vanished = [thing for idx, thing in enumerate(previous) if idx not in carried]

        # Silence vanished things before new ones start playing, so the
        # pool's stream limit never stops a thing that is carried forward
        for thing in vanished:
            self.audio_pool.pause(thing.channel_id)

        for j, blob in enumerate(blobs):
            idx = matches.get(j)
            if idx is not None:
                # Same object at two points in time: inherit the old sound
                thing = previous[idx]
                thing.blob = blob
                thing.last_seen = self.current_frame
                thing.updates += 1
                self._apply_volume_pan(thing)
                result.continued.append(thing)
                result.things.append(thing)
            else:
                thing = self._create_thing(blob, result)
                if thing is not None:
                    result.created.append(thing)
                    result.things.append(thing)

        # Discard things that have disappeared from the visual field
        for thing in vanished:
            self._release_thing(thing)
            result.released.append(thing)

        self.things = result.things
        return result

    # =========================================================================
    # Association
    # =========================================================================

    def _associate_greedy(self, blobs: Sequence[Blob],
                          previous: List[Thing]) -> Dict[int, int]:
        """Match each blob, in order, to its nearest unmatched previous thing."""
        max_dist_sq = self.epsilon * self.epsilon
        available = set(range(len(previous)))
        matches = {}

        for j, blob in enumerate(blobs):
            best_idx = None
            best_dist_sq = np.inf
            for i in sorted(available):
                d = previous[i].blob.distance_sq_to(blob)
                if d < best_dist_sq:
                    best_dist_sq = d
                    best_idx = i
            if best_idx is not None and best_dist_sq <= max_dist_sq:
                matches[j] = best_idx
                available.discard(best_idx)

        return matches

    def _associate_hungarian(self, blobs: Sequence[Blob],
                             previous: List[Thing]) -> Dict[int, int]:
        """Match blobs to previous things minimizing total squared distance."""
        if not blobs or not previous:
            return {}

        from scipy.optimize import linear_sum_assignment

        max_dist_sq = self.epsilon * self.epsilon
        cost_matrix = np.full((len(blobs), len(previous)), _GATED_COST)
        for j, blob in enumerate(blobs):
            for i, thing in enumerate(previous):
                d = thing.blob.distance_sq_to(blob)
                if np.isfinite(d) and d <= max_dist_sq:
                    cost_matrix[j, i] = d

        row_ind, col_ind = linear_sum_assignment(cost_matrix)
        return {int(j): int(i) for j, i in zip(row_ind, col_ind)
                if cost_matrix[j, i] <= max_dist_sq}

    # =========================================================================
    # Channel Bindings
    # =========================================================================

    def _apply_volume_pan(self, thing: Thing):
        volume = clamp_volume(vol_of(thing, self.max_distance))
        pan = clamp_pan(pan_of(thing, self.horiz_span))
        self.audio_pool.set_volume_pan(thing.channel_id, volume, pan)

    def _create_thing(self, blob: Blob, result: TrackingUpdate) -> Optional[Thing]:
        """Create a new thing with a new sound, or record the blob as rejected."""
        try:
            channel_id = self.audio_pool.acquire()
        except PoolExhausted as e:
            logger.warning("No free audio channel for blob at r=%.2f: %s",
                           blob.average_r, e)
            result.rejected.append(RejectedBlob(blob=blob, error=e))
            self.total_rejected += 1
            return None

        thing = Thing(
            id=self.next_id,
            blob=blob,
            channel_id=channel_id,
            first_seen=self.current_frame,
            last_seen=self.current_frame
        )
        self.next_id += 1
        self.total_created += 1

        self._apply_volume_pan(thing)
        self.audio_pool.play(channel_id)
        return thing

    def _release_thing(self, thing: Thing):
        self.audio_pool.pause(thing.channel_id)
        self.audio_pool.release(thing.channel_id)
        self.total_released += 1

    def release_all(self) -> List[Thing]:
        """
        Pause and release every binding, forgetting all tracked things.

        Returns:
            The things that were released
        """
        released = list(self.things)
        for thing in released:
            self._release_thing(thing)
        self.things = []
        return released

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_things(self) -> List[Thing]:
        """Returns a copy of the tracked things."""
        return list(self.things)

    def get_thing_by_channel(self, channel_id: int) -> Optional[Thing]:
        for thing in self.things:
            if thing.channel_id == channel_id:
                return thing
        return None

    def reset(self):
        """Release every binding and reset counters."""
        self.release_all()
        self.next_id = 0
        self.current_frame = 0
        self.total_created = 0
        self.total_released = 0
        self.total_rejected = 0
