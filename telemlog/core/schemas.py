"""Structural contracts for inbound log entries.

The two named schemas are pydantic models used for validation only: callers
keep working on the original dicts so passthrough bodies stay verbatim.
"""
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, ValidationError


class LogSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    level: Union[StrictInt, StrictFloat]
    time: Union[StrictInt, StrictFloat, StrictStr]


class ReportBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    items: List[Dict[str, Any]] = Field(default_factory=list)
    at: Optional[Union[StrictInt, StrictFloat, StrictStr]] = None


class ReportRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    command: StrictStr
    vin: StrictStr
    body: ReportBody


class RdbDataSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    request: ReportRequest


SCHEMAS: Dict[str, Type[BaseModel]] = {
    "log": LogSchema,
    "rdb_data": RdbDataSchema,
}


class SchemaValidator:
    """Validate plain objects against named schema contracts."""

    def __init__(self, schemas: Optional[Dict[str, Type[BaseModel]]] = None):
        self.schemas = dict(schemas or SCHEMAS)

    def validate(self, schema: str, obj: Any) -> Tuple[bool, List[Dict[str, Any]]]:
        """Return (ok, errors). Errors are JSON-safe dicts with loc/msg/type/input."""
        model = self.schemas.get(schema)
        if model is None:
            raise KeyError(f"Unknown schema: {schema}")
        if not isinstance(obj, dict):
            return False, [{"loc": [], "msg": "Input should be an object", "type": "dict_type", "input": obj}]
        try:
            model.model_validate(obj)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            for err in errors:
                err["loc"] = list(err.get("loc", ()))
            return False, errors
        return True, []


validator = SchemaValidator()
