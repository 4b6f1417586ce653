"""
Opaque pagination cursors: JSON payload -> URL-safe base64 (no padding).

Decoding reads only the fields it knows (extra keys are ignored) and checks each one's
primitive type; any problem raises InvalidCursorError, never a partial payload.
"""
import base64
import binascii
import json
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Sequence
from urllib.parse import unquote

from garden_planner.errors import InvalidCursorError
from garden_planner.logging_config import get_logger

logger = get_logger(__name__)

# Field kinds understood by the codec.
STR = "str"
INT = "int"
TIMESTAMP = "timestamp"
UUID = "uuid"

# Longest token accepted before decoding; real cursors are far shorter.
MAX_TOKEN_LENGTH = 8192


@dataclass(frozen=True)
class CursorField:
    """One named, typed cursor field."""

    name: str
    kind: str


class CursorCodec:
    """Encode/decode cursor payloads of one resource kind."""

    def __init__(self, kind: str, fields: Sequence[CursorField]) -> None:
        self.kind = kind
        self.fields = tuple(fields)

    def encode(self, payload: Dict[str, Any]) -> str:
        """Serialize payload to a compact, URL-safe token."""
        data = {f.name: _dump_value(f, payload[f.name]) for f in self.fields}
        raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")

    def decode(self, token: str) -> Dict[str, Any]:
        """Parse and validate a token. Raises InvalidCursorError."""
        if not isinstance(token, str) or not token.strip():
            raise self._invalid("empty cursor")
        if len(token) > MAX_TOKEN_LENGTH:
            raise self._invalid("cursor is too long")
        text = unquote(token.strip())
        try:
            raw = base64.b64decode(text + "=" * (-len(text) % 4), altchars=b"-_", validate=True)
        except (binascii.Error, ValueError):
            raise self._invalid("cursor is not valid base64")
        try:
            parsed = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError, RecursionError):
            raise self._invalid("cursor is not valid JSON")
        if not isinstance(parsed, dict):
            raise self._invalid("cursor must be a JSON object")

        payload: Dict[str, Any] = {}
        for f in self.fields:
            if f.name not in parsed:
                raise self._invalid(f"cursor field '{f.name}' is missing")
            payload[f.name] = self._load_value(f, parsed[f.name])
        return payload

    def _load_value(self, f: CursorField, value: Any) -> Any:
        if f.kind == STR:
            if not isinstance(value, str):
                raise self._invalid(f"cursor field '{f.name}' must be a string")
            return value
        if f.kind == INT:
            if not isinstance(value, int) or isinstance(value, bool):
                raise self._invalid(f"cursor field '{f.name}' must be an integer")
            return value
        if f.kind == TIMESTAMP:
            if not isinstance(value, str):
                raise self._invalid(f"cursor field '{f.name}' must be an ISO timestamp string")
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                raise self._invalid(f"cursor field '{f.name}' is not a valid timestamp")
        if f.kind == UUID:
            if not isinstance(value, str):
                raise self._invalid(f"cursor field '{f.name}' must be a UUID string")
            try:
                return uuid.UUID(value)
            except ValueError:
                raise self._invalid(f"cursor field '{f.name}' is not a valid UUID")
        raise ValueError(f"unknown cursor field kind: {f.kind}")

    def _invalid(self, reason: str) -> InvalidCursorError:
        logger.info("cursor.invalid", kind=self.kind, reason=reason)
        return InvalidCursorError(f"Invalid cursor: {reason}", field="cursor")


def _dump_value(f: CursorField, value: Any) -> Any:
    if f.kind == TIMESTAMP:
        if isinstance(value, datetime):
            return value.isoformat()
        return str(value)
    if f.kind == UUID:
        return str(value)
    return value


PLAN_CURSOR = CursorCodec(
    "plan",
    [CursorField("updated_at", TIMESTAMP), CursorField("id", UUID)],
)
GRID_CELL_CURSOR = CursorCodec(
    "grid_cell",
    [CursorField("updated_at", TIMESTAMP), CursorField("x", INT), CursorField("y", INT)],
)
PLANT_PLACEMENT_CURSOR = CursorCodec(
    "plant_placement",
    [CursorField("plant_name", STR), CursorField("x", INT), CursorField("y", INT)],
)
