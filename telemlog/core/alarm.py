"""Alarm code derivation for ALARM sub-sections.

Two sources feed the code list:
  - `uas` flags: each raised flag maps through a per-level code table, using
    the entry for the section's `maxLevel`. Flags missing from the table map
    to UNKNOWN_ALARM_CODE (-1, encoded as "-1").
  - `ressList`, `mortorList`, `engineList`, `otherList`: each entry packs
    `type << 24 | code << 8 | level` into one integer.

Codes are lowercase hex without prefix, deduplicated on first occurrence.
"""
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from telemlog.core.constants import ALARM_FLAGS, UNKNOWN_ALARM_CODE

ALARM_LISTS = ("ressList", "mortorList", "engineList", "otherList")


def to_hex(value: int) -> str:
    return format(int(value), "x")


def _is_raised(value: Any) -> bool:
    return isinstance(value, (int, float)) and value > 0


def flag_codes(uas: Mapping[str, Any], max_level: int,
               table: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> List[str]:
    if not max_level or max_level <= 0:
        return []
    codes = []
    for flag, value in (uas or {}).items():
        if not _is_raised(value):
            continue
        levels = table.get(flag)
        if levels is None:
            codes.append(to_hex(UNKNOWN_ALARM_CODE))
            continue
        idx = int(max_level) - 1 if float(max_level).is_integer() else None
        if idx is None or idx >= len(levels):
            raise ValueError(f"Alarm flag {flag} has no code for level {max_level}")
        codes.append(to_hex(levels[idx]))
    return codes


def list_code(entry: Mapping[str, Any]) -> str:
    a_type = int(entry.get("type") or 0)
    code = int(entry.get("code") or 0)
    level = int(entry.get("level") or 0)
    return to_hex((a_type << 24) | (code << 8) | level)


def dedupe(codes: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(codes))


def encode_alarms(section: Dict[str, Any],
                  table: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> Tuple[int, List[str]]:
    """Return (alarmLevel, alarms) for one ALARM sub-section."""
    max_level = section.get("maxLevel") or 0
    codes = flag_codes(section.get("uas") or {}, max_level, table)
    for name in ALARM_LISTS:
        for entry in section.get(name) or []:
            codes.append(list_code(entry))
    return max_level, dedupe(codes)
