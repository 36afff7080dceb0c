import pytest

from telemlog.core.command_router import handle_command
from telemlog.core.errors import UnsupportedCommand
from telemlog.core.record import DomainRecord


def test_report_commands_assemble_record():
    for command in ("REALTIME_REPORT", "REISSUE_REPORT"):
        env = handle_command({"command": command, "vin": "V1", "body": {"at": 7, "items": []}})
        assert env.type == "RDB_DATA"
        assert env.vin == "V1"
        assert env.command == command
        assert isinstance(env.payload, DomainRecord)
        assert env.payload.to_dict() == {"id": "V1", "alarmLevel": 0, "at": 7}


def test_passthrough_keeps_body_object():
    body = {"seq": 3}
    env = handle_command({"command": "HEARTBEAT", "vin": "V1", "body": body})
    assert env.payload is body
    assert env.to_dict() == {"type": "RDB_DATA", "vin": "V1", "command": "HEARTBEAT", "payload": {"seq": 3}}


def test_unknown_command_raises():
    with pytest.raises(UnsupportedCommand) as exc:
        handle_command({"command": "OTA_UPGRADE", "vin": "V1", "body": {}})
    assert exc.value.command == "OTA_UPGRADE"
