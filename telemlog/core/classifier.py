"""Classify raw log envelopes into tagged output envelopes.

Pipeline::

    raw message (bytes/str, or an object exposing `.value`)
      |
      |- not JSON / no `log` string / `log` not JSON -> INVALID_LOG (raw text)
      |- fails LogSchema                             -> INVALID_LOG (raw text)
      |- level 30: fails RdbDataSchema               -> INVALID_LOG (log entry)
      |            otherwise                         -> RDB_DATA via handle_command
      |- level 50                                    -> REQUEST_ERROR (log entry)
      |- other level                                 -> INVALID_LOG (log entry)

`handle_message` never raises. Envelopes built from a parsed log entry carry
`reportedAt`, the entry's `time` as an ISO-8601 UTC string.
"""
import json
import logging
from typing import Any, Dict, Mapping, Sequence

from telemlog.core.command_router import handle_command
from telemlog.core.constants import ALARM_FLAGS, LEVEL_ERROR, LEVEL_INFO
from telemlog.core.envelope import OutputEnvelope, invalid_log, request_error
from telemlog.core.errors import SchemaValidationError, TelemlogError, TransportDecodeError, UnsupportedLevel
from telemlog.core.schemas import SchemaValidator, validator as default_validator
from telemlog.core.utils import to_iso_timestamp


def _raw_value(data: Any) -> Any:
    return getattr(data, "value", data)


def _raw_payload(raw: Any) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw
    return raw


def decode_entry(raw: Any, validator: SchemaValidator = default_validator) -> Dict[str, Any]:
    """Parse the envelope and its inner `log` string, validated against LogSchema."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        message = json.loads(text)
    except (TypeError, ValueError) as e:
        raise TransportDecodeError(f"Invalid envelope: {e}")

    log = message.get("log") if isinstance(message, dict) else None
    if not isinstance(log, str):
        raise TransportDecodeError("log property missing or not a string")

    try:
        entry = json.loads(log)
    except ValueError as e:
        raise TransportDecodeError(f"Invalid log: {e}")

    ok, errors = validator.validate("log", entry)
    if not ok:
        raise SchemaValidationError("LogSchema", errors)
    return entry


def handle_info(entry: Dict[str, Any], validator: SchemaValidator = default_validator,
                alarm_flags: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> OutputEnvelope:
    ok, errors = validator.validate("rdb_data", entry)
    if not ok:
        raise SchemaValidationError("RdbDataSchema", errors)
    return handle_command(entry["request"], alarm_flags)


def classify_entry(entry: Dict[str, Any], validator: SchemaValidator = default_validator,
                   alarm_flags: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> OutputEnvelope:
    """Branch on log level. UnsupportedCommand propagates to the caller."""
    level = entry["level"]
    try:
        if level == LEVEL_INFO:
            return handle_info(entry, validator, alarm_flags)
        elif level == LEVEL_ERROR:
            return request_error(entry)
        raise UnsupportedLevel(level)
    except (SchemaValidationError, UnsupportedLevel) as e:
        logging.debug(f"[classifier] invalid log entry (level={level}): {e}")
        return invalid_log(entry, e.detail)


def handle_message(data: Any, validator: SchemaValidator = default_validator,
                   alarm_flags: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> OutputEnvelope:
    raw = _raw_value(data)
    try:
        entry = decode_entry(raw, validator)
        envelope = classify_entry(entry, validator, alarm_flags)
        envelope = envelope.with_reported_at(to_iso_timestamp(entry["time"]))
    except Exception as e:
        detail = e.detail if isinstance(e, TelemlogError) else str(e)
        logging.debug(f"[classifier] invalid log: {detail}")
        return invalid_log(_raw_payload(raw), detail)
    return envelope


def classify(data: Any, validator: SchemaValidator = default_validator,
             alarm_flags: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> Dict[str, Any]:
    """Wire-format (dict) variant of handle_message."""
    return handle_message(data, validator, alarm_flags).to_dict()
