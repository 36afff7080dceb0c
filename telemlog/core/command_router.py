"""Route a validated report request by command.

Report commands are assembled into a DomainRecord; session commands
(login/logout/heartbeat) forward their body unchanged. Anything else raises
UnsupportedCommand for the caller to recover.
"""
from typing import Any, Dict, Mapping, Sequence

from telemlog.core.constants import ALARM_FLAGS, PASSTHROUGH_COMMANDS, REPORT_COMMANDS
from telemlog.core.envelope import OutputEnvelope, rdb_data
from telemlog.core.errors import UnsupportedCommand
from telemlog.core.record import assemble_record


def handle_command(request: Dict[str, Any],
                   alarm_flags: Mapping[str, Sequence[int]] = ALARM_FLAGS) -> OutputEnvelope:
    command = request.get("command")
    vin = request.get("vin")
    body = request.get("body")

    if command in REPORT_COMMANDS:
        return rdb_data(vin, command, assemble_record(vin, body or {}, alarm_flags))
    elif command in PASSTHROUGH_COMMANDS:
        return rdb_data(vin, command, body)
    raise UnsupportedCommand(command)
