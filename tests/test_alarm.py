import pytest

from telemlog.core.alarm import encode_alarms, flag_codes, list_code
from telemlog.core.constants import ALARM_FLAGS

FLAGS = {"flagA": [10, 20, 30], "flagB": [1, 2, 3]}


def test_flag_and_list_codes():
    section = {
        "type": "ALARM",
        "maxLevel": 2,
        "uas": {"flagA": 1},
        "ressList": [{"type": 1, "code": 2, "level": 1}],
    }
    level, alarms = encode_alarms(section, FLAGS)
    assert level == 2
    assert alarms == ["14", "1000201"]


def test_max_level_zero_skips_flags():
    section = {
        "maxLevel": 0,
        "uas": {"flagA": 1, "flagB": 1},
        "otherList": [{"type": 2, "code": 0, "level": 3}],
    }
    level, alarms = encode_alarms(section, FLAGS)
    assert level == 0
    assert alarms == ["2000003"]


def test_empty_section_defaults():
    assert encode_alarms({"type": "ALARM"}) == (0, [])


def test_only_positive_flags_are_raised():
    codes = flag_codes({"flagA": 0, "flagB": 1, "other": -1}, 3, FLAGS)
    assert codes == ["3"]


def test_unknown_flag_maps_to_minus_one():
    # unmapped flags keep the -1 sentinel, hex encoded with its sign
    assert flag_codes({"notInTable": 1}, 1, FLAGS) == ["-1"]


def test_level_beyond_table_raises():
    with pytest.raises(ValueError):
        flag_codes({"flagA": 1}, 4, FLAGS)


def test_duplicate_codes_collapse_in_first_occurrence_order():
    entry = {"type": 1, "code": 2, "level": 1}
    section = {
        "maxLevel": 1,
        "uas": {"flagB": 1, "flagA": 1},
        "ressList": [entry, entry],
        "mortorList": [{"type": 0, "code": 0, "level": 1}, entry],
        "engineList": [entry],
    }
    _, alarms = encode_alarms(section, FLAGS)
    # flagB level 1 -> 1, flagA level 1 -> 10 (0xa), list entry (0,0,1) -> 1 again
    assert alarms == ["1", "a", "1000201"]


def test_lists_are_concatenated_in_fixed_order():
    section = {
        "otherList": [{"type": 4, "code": 0, "level": 0}],
        "engineList": [{"type": 3, "code": 0, "level": 0}],
        "mortorList": [{"type": 2, "code": 0, "level": 0}],
        "ressList": [{"type": 1, "code": 0, "level": 0}],
    }
    _, alarms = encode_alarms(section, FLAGS)
    assert alarms == ["1000000", "2000000", "3000000", "4000000"]


def test_list_code_packing():
    assert list_code({"type": 0x12, "code": 0x3456, "level": 0x78}) == "12345678"
    assert list_code({}) == "0"


def test_builtin_table_has_three_levels():
    for flag, levels in ALARM_FLAGS.items():
        assert len(levels) == 3, flag
    assert flag_codes({"insulation": 1}, 2) == ["ff000b02"]


def test_list_code_high_type_uses_unbounded_ints():
    # no 32-bit wraparound for types >= 128
    assert list_code({"type": 200, "code": 1, "level": 1}) == "c8000101"
