# =============================================================================
# L5 Sonification - Audio Channel Pool Interface
# =============================================================================
# Contract between the tracker and the audio backend: a fixed pool of
# looped sounds that can be leased, positioned, played and released.
# =============================================================================

from abc import ABC, abstractmethod


# =============================================================================
# Errors
# =============================================================================

class AudioChannelError(Exception):
    """Base class for audio channel pool errors."""


class PoolExhausted(AudioChannelError):
    """No free channel remains in the pool."""


class InvalidChannel(AudioChannelError):
    """The channel is unknown or not currently leased."""

    def __init__(self, channel_id, message: str = None):
        self.channel_id = channel_id
        super().__init__(message or f"Channel {channel_id} is not leased")


class OutOfRange(AudioChannelError, ValueError):
    """Volume or pan outside of its valid range."""


# =============================================================================
# Pool Interface
# =============================================================================

class AudioChannelPool(ABC):
    """
    Abstract pool of audio channels.

    Implementations must make acquire/release atomic.
    """

    @abstractmethod
    def acquire(self) -> int:
        """
        Lease a free channel.

        Raises:
            PoolExhausted: If no free channel remains
        """

    @abstractmethod
    def release(self, channel_id: int):
        """
        Return a leased channel to the pool, silencing it.

        Raises:
            InvalidChannel: If the channel is not leased
        """

    @abstractmethod
    def set_volume_pan(self, channel_id: int, volume: float, pan: float):
        """
        Set volume in [0, 1] and pan in [-1, 1] of a leased channel.

        Raises:
            InvalidChannel: If the channel is not leased
            OutOfRange: If volume or pan is out of range
        """

    @abstractmethod
    def play(self, channel_id: int):
        """Start looping a leased channel. No-op if already playing."""

    @abstractmethod
    def pause(self, channel_id: int):
        """Pause a leased channel. No-op if already paused."""
