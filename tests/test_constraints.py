import math

import pytest

from mavplan.constraints import PhysicalConstraints


def test_defaults():
    c = PhysicalConstraints()
    assert c.v_max == 1.0
    assert c.a_max == 2.0
    assert c.yaw_rate_max == pytest.approx(math.pi / 4.0)
    assert c.robot_radius == 1.0
    assert c.sampling_dt == 0.01


def test_from_mapping_overrides_known_keys():
    c = PhysicalConstraints.from_mapping({"v_max": 3.5, "robot_radius": 0.4})
    assert c.v_max == 3.5
    assert c.robot_radius == 0.4
    assert c.a_max == PhysicalConstraints().a_max


def test_from_mapping_ignores_unknown_keys():
    c = PhysicalConstraints.from_mapping({"frame_id": "map", "sampling_dt": 0.05})
    assert c == PhysicalConstraints(sampling_dt=0.05)


def test_from_mapping_empty_is_default():
    assert PhysicalConstraints.from_mapping({}) == PhysicalConstraints()