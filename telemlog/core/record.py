"""Assemble report bodies into DomainRecords.

Sub-sections are applied in `items` order. A later section of the same type
replaces the field set by an earlier one; unknown types are ignored.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from telemlog.core import alarm
from telemlog.core.constants import ALARM_FLAGS, CUSTOM_EXT_FIELDS, EXTREME_FIELDS, VEHICLE_FIELDS


@dataclass
class DomainRecord:
    id: str
    at: Any = None
    alarmLevel: int = 0
    vehicle: Optional[Dict[str, Any]] = None
    motors: Optional[List[Any]] = None
    location: Optional[Dict[str, Any]] = None
    extreme: Optional[Dict[str, Any]] = None
    alarms: Optional[List[str]] = None
    customExt: Optional[Dict[str, Any]] = None
    adas: Optional[List[Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {"id": self.id, "alarmLevel": self.alarmLevel}
        for name in ("at", "vehicle", "motors", "location", "extreme", "alarms", "customExt", "adas"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


def pick(section: Mapping[str, Any], fields: Sequence[str]) -> Dict[str, Any]:
    """Copy only allow-listed keys present on the section."""
    return {k: section[k] for k in fields if k in section}


def extract_section(record: DomainRecord, section: Mapping[str, Any],
                    alarm_flags: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> None:
    """Project one sub-section onto the matching slice of `record`."""
    kind = section.get("type")
    if kind == "VEHICLE":
        # snapshot of the record so far, overlaid with the vehicle fields
        snapshot = record.to_dict()
        snapshot.update(pick(section, VEHICLE_FIELDS))
        record.vehicle = snapshot
    elif kind == "MOTOR":
        record.motors = section.get("motors") or []
    elif kind == "LOCATION":
        record.location = {"lng": section.get("lng"), "lat": section.get("lat")}
    elif kind == "EXTREME":
        record.extreme = pick(section, EXTREME_FIELDS)
    elif kind == "ALARM":
        record.alarmLevel, record.alarms = alarm.encode_alarms(section, alarm_flags)
    elif kind == "CUSTOM_EXT":
        record.customExt = pick(section, CUSTOM_EXT_FIELDS)
    elif kind == "TEN_SECONDS":
        record.adas = section.get("datas") or []


def assemble_record(vin: str, body: Mapping[str, Any],
                    alarm_flags: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> DomainRecord:
    record = DomainRecord(id=vin, at=body.get("at"))
    for section in body.get("items") or []:
        extract_section(record, section, alarm_flags)
    return record
