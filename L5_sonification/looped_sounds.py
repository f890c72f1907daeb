# =============================================================================
# L5 Sonification - Looped Sound Collection
# =============================================================================
# In-memory audio channel pool: one looped sound per channel, leased in
# least-recently-released order, with a stereo pan law applied to
# volume/pan requests.
# =============================================================================

import logging
import threading
from collections import deque, OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .audio import (
    AudioChannelPool,
    AudioChannelError,
    PoolExhausted,
    InvalidChannel,
    OutOfRange
)

from .config import AUDIO_SOUND_NAMES, AUDIO_MAX_STREAMS

logger = logging.getLogger(__name__)


@dataclass
class ChannelState:
    """Playback state of one looped sound."""
    channel_id: int
    sound: str
    leased: bool = False
    playing: bool = False
    volume: float = 0.0
    pan: float = 0.0
    left_volume: float = 0.0
    right_volume: float = 0.0


def stereo_volumes(volume: float, pan: float) -> Tuple[float, float]:
    """
    Split a volume into left/right gains.

    Args:
        volume: Overall volume in [0, 1]
        pan: Pan in [-1, 1] (-1 = left, 1 = right)

    Returns:
        Tuple (left, right)
    """
    p = pan / (1.0 + pan * pan) + 0.5
    return (1.0 - p) * volume, p * volume


class LoopedSoundCollection(AudioChannelPool):
    """
    Manages concurrent looped sounds.

    Channel ids start at 1. Free channels are kept in a FIFO queue, so
    the sound that has been silent the longest is leased first. At most
    max_streams channels are audible at once; starting another one stops
    the stream that has been playing the longest.
    """

    def __init__(self, sounds: Sequence[str] = AUDIO_SOUND_NAMES,
                 max_streams: int = AUDIO_MAX_STREAMS):
        """
        Args:
            sounds: One looped sound per channel
            max_streams: Maximum number of simultaneously playing channels
        """
        if not sounds:
            raise ValueError("LoopedSoundCollection needs at least one sound")
        self.max_streams = max_streams
        self._lock = threading.RLock()
        self._channels: Dict[int, ChannelState] = {
            i: ChannelState(channel_id=i, sound=name)
            for i, name in enumerate(sounds, start=1)
        }
        self._inactive = deque(self._channels)
        self._playing: "OrderedDict[int, None]" = OrderedDict()
        self._closed = False

    @property
    def size(self) -> int:
        return len(self._channels)

    def _leased(self, channel_id: int) -> ChannelState:
        if self._closed:
            raise AudioChannelError("Sound collection has been closed")
        state = self._channels.get(channel_id)
        if state is None or not state.leased:
            raise InvalidChannel(channel_id)
        return state

    def _stop(self, state: ChannelState):
        state.playing = False
        self._playing.pop(state.channel_id, None)

    # =========================================================================
    # AudioChannelPool
    # =========================================================================

    def acquire(self) -> int:
        """Activate the least recently active sound."""
        with self._lock:
            if self._closed:
                raise AudioChannelError("Sound collection has been closed")
            if not self._inactive:
                raise PoolExhausted(f"All {self.size} sounds are in use")
            channel_id = self._inactive.popleft()
            self._channels[channel_id].leased = True
            return channel_id

    def release(self, channel_id: int):
        """Deactivate a sound, stopping playback if need be."""
        with self._lock:
            state = self._leased(channel_id)
            self._stop(state)
            state.leased = False
            state.volume = state.pan = 0.0
            state.left_volume = state.right_volume = 0.0
            self._inactive.append(channel_id)

    def set_volume_pan(self, channel_id: int, volume: float, pan: float):
        with self._lock:
            state = self._leased(channel_id)
            if not 0.0 <= volume <= 1.0:
                raise OutOfRange(f"Volume must be between 0.0 and 1.0, got {volume}")
            if not -1.0 <= pan <= 1.0:
                raise OutOfRange(f"Pan must be between -1.0 and 1.0, got {pan}")
            state.volume = float(volume)
            state.pan = float(pan)
            state.left_volume, state.right_volume = stereo_volumes(volume, pan)

    def play(self, channel_id: int):
        with self._lock:
            state = self._leased(channel_id)
            if state.playing:
                return
            if len(self._playing) >= self.max_streams:
                oldest = next(iter(self._playing))
                logger.debug("Stream limit %d reached, stopping channel %d",
                             self.max_streams, oldest)
                self._stop(self._channels[oldest])
            state.playing = True
            self._playing[channel_id] = None

    def pause(self, channel_id: int):
        with self._lock:
            self._stop(self._leased(channel_id))

    # =========================================================================
    # Lifecycle and Query Methods
    # =========================================================================

    def close(self):
        """Pause every sound and release the collection's resources."""
        with self._lock:
            for state in self._channels.values():
                self._stop(state)
                state.leased = False
            self._inactive.clear()
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def get_channel_state(self, channel_id: int) -> ChannelState:
        """Snapshot of a channel's state."""
        with self._lock:
            state = self._channels.get(channel_id)
            if state is None:
                raise InvalidChannel(channel_id, f"Unknown channel {channel_id}")
            return ChannelState(**vars(state))

    def leased_channels(self) -> List[int]:
        with self._lock:
            return [i for i, s in self._channels.items() if s.leased]

    def playing_channels(self) -> List[int]:
        with self._lock:
            return list(self._playing)

    def free_count(self) -> int:
        with self._lock:
            return len(self._inactive)
