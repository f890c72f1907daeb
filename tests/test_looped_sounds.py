"""
Tests for the in-memory audio channel pool.
"""
import pytest

from L5_sonification import (
    LoopedSoundCollection,
    AudioChannelError,
    PoolExhausted,
    InvalidChannel,
    OutOfRange,
    stereo_volumes
)


def test_channels_start_at_one(pool):
    assert pool.size == 8
    assert pool.acquire() == 1
    assert pool.acquire() == 2


def test_least_recently_released_is_leased_first():
    pool = LoopedSoundCollection(sounds=["a", "b", "c"])
    first = pool.acquire()
    second = pool.acquire()
    pool.release(first)
    assert pool.acquire() == 3
    pool.release(second)
    assert pool.acquire() == first
    assert pool.acquire() == second


def test_exhausted_pool_raises(single_channel_pool):
    single_channel_pool.acquire()
    with pytest.raises(PoolExhausted):
        single_channel_pool.acquire()


def test_release_unleased_channel_raises(pool):
    with pytest.raises(InvalidChannel):
        pool.release(1)
    with pytest.raises(InvalidChannel):
        pool.release(42)


def test_double_release_raises(pool):
    channel = pool.acquire()
    pool.release(channel)
    with pytest.raises(InvalidChannel):
        pool.release(channel)


def test_set_volume_pan(pool):
    channel = pool.acquire()
    pool.set_volume_pan(channel, 0.5, 0.0)
    state = pool.get_channel_state(channel)
    assert state.volume == 0.5
    assert state.left_volume == pytest.approx(0.25)
    assert state.right_volume == pytest.approx(0.25)


@pytest.mark.parametrize("volume, pan", [(-0.1, 0.0), (1.1, 0.0), (0.5, 1.5), (0.5, -1.01)])
def test_out_of_range_volume_pan(pool, volume, pan):
    channel = pool.acquire()
    with pytest.raises(OutOfRange):
        pool.set_volume_pan(channel, volume, pan)
    with pytest.raises(ValueError):
        pool.set_volume_pan(channel, volume, pan)


def test_operations_on_unleased_channel_raise(pool):
    for operation in (pool.play, pool.pause):
        with pytest.raises(InvalidChannel):
            operation(3)
    with pytest.raises(InvalidChannel):
        pool.set_volume_pan(3, 0.5, 0.0)


def test_play_and_pause_are_idempotent(pool):
    channel = pool.acquire()
    pool.play(channel)
    pool.play(channel)
    assert pool.playing_channels() == [channel]
    pool.pause(channel)
    pool.pause(channel)
    assert pool.playing_channels() == []


def test_release_silences_channel(pool):
    channel = pool.acquire()
    pool.set_volume_pan(channel, 0.8, 0.3)
    pool.play(channel)
    pool.release(channel)
    state = pool.get_channel_state(channel)
    assert not state.leased
    assert not state.playing
    assert state.left_volume == state.right_volume == 0.0


def test_stream_limit_stops_oldest_stream():
    pool = LoopedSoundCollection(sounds=["a", "b", "c"], max_streams=2)
    channels = [pool.acquire() for _ in range(3)]
    for channel in channels:
        pool.play(channel)
    assert pool.playing_channels() == channels[1:]
    assert pool.get_channel_state(channels[0]).leased


def test_close_frees_everything(pool):
    channel = pool.acquire()
    pool.play(channel)
    pool.close()
    assert pool.closed
    assert pool.playing_channels() == []
    with pytest.raises(AudioChannelError):
        pool.acquire()
    with pytest.raises(AudioChannelError):
        pool.play(channel)


def test_state_snapshot_is_a_copy(pool):
    channel = pool.acquire()
    snapshot = pool.get_channel_state(channel)
    pool.set_volume_pan(channel, 1.0, 0.0)
    assert snapshot.volume == 0.0


def test_query_methods(pool):
    a = pool.acquire()
    b = pool.acquire()
    assert pool.leased_channels() == [a, b]
    assert pool.free_count() == 6


def test_needs_sounds():
    with pytest.raises(ValueError):
        LoopedSoundCollection(sounds=[])


class TestStereoVolumes:

    def test_centre(self):
        assert stereo_volumes(1.0, 0.0) == pytest.approx((0.5, 0.5))

    def test_hard_right(self):
        assert stereo_volumes(0.6, 1.0) == pytest.approx((0.0, 0.6))

    def test_hard_left(self):
        assert stereo_volumes(0.6, -1.0) == pytest.approx((0.6, 0.0))

    def test_gains_sum_to_volume(self):
        left, right = stereo_volumes(0.7, 0.35)
        assert left + right == pytest.approx(0.7)
        assert right > left
