"""
Tests for pan/volume mapping.
"""
import numpy as np
import pytest

from L4_perception import Blob
from L5_sonification import Thing, pan_of, vol_of, clamp_pan, clamp_volume


def _blob(r=1.0, theta=0.0):
    return Blob(average_r=r, size=10, average_theta=theta, average_phi=0.0)


def test_pan_of_centred_thing_is_zero():
    assert pan_of(_blob(theta=0.0)) == pytest.approx(0.0)


def test_pan_is_negated_normalised_theta():
    assert pan_of(_blob(theta=np.pi / 2)) == pytest.approx(-1.0)
    assert pan_of(_blob(theta=-np.pi / 4)) == pytest.approx(0.5)


def test_pan_is_not_clamped():
    assert pan_of(_blob(theta=np.pi)) == pytest.approx(-2.0)


def test_pan_with_custom_span():
    assert pan_of(_blob(theta=-0.5), horiz_span=2.0) == pytest.approx(0.5)


def test_volume_falloff():
    assert vol_of(_blob(r=0.0)) == pytest.approx(1.0)
    assert vol_of(_blob(r=1.5)) == pytest.approx(1.0 / 16.0)
    assert vol_of(_blob(r=0.5)) == pytest.approx(2 ** (-4 * 0.5 / 1.5))


def test_volume_decreases_with_distance():
    volumes = [vol_of(_blob(r=r)) for r in np.linspace(0.0, 5.0, 20)]
    assert all(a > b for a, b in zip(volumes, volumes[1:]))


def test_accepts_things():
    thing = Thing(id=0, blob=_blob(r=1.5, theta=-np.pi / 2), channel_id=1,
                  first_seen=1, last_seen=1)
    assert pan_of(thing) == pytest.approx(1.0)
    assert vol_of(thing) == pytest.approx(1.0 / 16.0)


def test_clamping():
    assert clamp_pan(-2.0) == -1.0
    assert clamp_pan(0.3) == 0.3
    assert clamp_volume(1.2) == 1.0
    assert clamp_volume(-0.1) == 0.0
