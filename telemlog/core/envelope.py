from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from telemlog.core.constants import INVALID_LOG, RDB_DATA, REQUEST_ERROR


@dataclass(frozen=True)
class OutputEnvelope:
    type: str
    payload: Any = None
    vin: Optional[str] = None
    command: Optional[str] = None
    error: Any = None
    reportedAt: Optional[str] = None

    def with_reported_at(self, reported_at: str) -> "OutputEnvelope":
        return replace(self, reportedAt=reported_at)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.type == RDB_DATA:
            out["vin"] = self.vin
            out["command"] = self.command
        out["payload"] = self.payload.to_dict() if hasattr(self.payload, "to_dict") else self.payload
        if self.type == INVALID_LOG:
            out["error"] = self.error
        if self.reportedAt is not None:
            out["reportedAt"] = self.reportedAt
        return out


def rdb_data(vin: str, command: str, payload: Any) -> OutputEnvelope:
    return OutputEnvelope(type=RDB_DATA, vin=vin, command=command, payload=payload)


def request_error(entry: Dict[str, Any]) -> OutputEnvelope:
    return OutputEnvelope(type=REQUEST_ERROR, payload=entry)


def invalid_log(payload: Any, error: Any) -> OutputEnvelope:
    return OutputEnvelope(type=INVALID_LOG, payload=payload, error=error)
