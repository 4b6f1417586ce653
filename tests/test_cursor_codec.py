"""
Cursor tokens: round trip for every resource kind, strict rejection of malformed input.
"""
import base64
import json
import uuid
from datetime import datetime, timezone

import pytest

from garden_planner.errors import InvalidCursorError
from garden_planner.services.cursor_codec import (
    GRID_CELL_CURSOR,
    MAX_TOKEN_LENGTH,
    PLAN_CURSOR,
    PLANT_PLACEMENT_CURSOR,
)


def _token(obj) -> str:
    raw = json.dumps(obj).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def test_plan_cursor_round_trip() -> None:
    payload = {"updated_at": datetime(2026, 3, 1, 12, 30, 5, 123456, tzinfo=timezone.utc), "id": uuid.uuid4()}
    assert PLAN_CURSOR.decode(PLAN_CURSOR.encode(payload)) == payload


def test_grid_cell_cursor_round_trip() -> None:
    payload = {"updated_at": datetime(2026, 3, 1, 12, 0, 0), "x": 0, "y": 199}
    assert GRID_CELL_CURSOR.decode(GRID_CELL_CURSOR.encode(payload)) == payload


def test_plant_cursor_round_trip_with_unicode_name() -> None:
    payload = {"plant_name": "Tomate «Cœur de bœuf»", "x": 3, "y": 4}
    token = PLANT_PLACEMENT_CURSOR.encode(payload)
    assert set(token) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")
    assert PLANT_PLACEMENT_CURSOR.decode(token) == payload


def test_percent_encoded_padding_is_accepted() -> None:
    raw = json.dumps({"plant_name": "Bas", "x": 1, "y": 2}).encode("utf-8")
    padded = base64.urlsafe_b64encode(raw).decode("ascii")
    assert padded.endswith("==")
    token = padded.replace("=", "%3D")
    assert PLANT_PLACEMENT_CURSOR.decode(token) == {"plant_name": "Bas", "x": 1, "y": 2}


def test_extra_keys_are_ignored() -> None:
    token = _token({"plant_name": "Basil", "x": 1, "y": 2, "debug": True})
    assert PLANT_PLACEMENT_CURSOR.decode(token) == {"plant_name": "Basil", "x": 1, "y": 2}


@pytest.mark.parametrize(
    "token",
    [
        "",
        "not base64 at all!",
        "@@@@",
        base64.urlsafe_b64encode(b"not json").decode("ascii"),
        _token([1, 2, 3]),
        _token("just a string"),
        _token({"plant_name": "Basil", "x": 1}),
        _token({"plant_name": 5, "x": 1, "y": 2}),
        _token({"plant_name": "Basil", "x": "1", "y": 2}),
        _token({"plant_name": "Basil", "x": True, "y": 2}),
        _token({"plant_name": "Basil", "x": 1.5, "y": 2}),
        base64.urlsafe_b64encode(b"[" * 5000).decode("ascii"),
        "A" * (MAX_TOKEN_LENGTH + 4),
    ],
)
def test_malformed_plant_cursor(token: str) -> None:
    with pytest.raises(InvalidCursorError) as exc:
        PLANT_PLACEMENT_CURSOR.decode(token)
    assert exc.value.code == "invalid_cursor"


def test_bad_timestamp_and_uuid() -> None:
    with pytest.raises(InvalidCursorError):
        PLAN_CURSOR.decode(_token({"updated_at": "yesterday", "id": str(uuid.uuid4())}))
    with pytest.raises(InvalidCursorError):
        PLAN_CURSOR.decode(_token({"updated_at": "2026-01-01T00:00:00", "id": "not-a-uuid"}))
    with pytest.raises(InvalidCursorError):
        GRID_CELL_CURSOR.decode(_token({"updated_at": 1700000000, "x": 0, "y": 0}))


def test_plan_cursor_is_not_a_grid_cursor() -> None:
    token = PLAN_CURSOR.encode({"updated_at": datetime(2026, 1, 1), "id": uuid.uuid4()})
    with pytest.raises(InvalidCursorError):
        GRID_CELL_CURSOR.decode(token)
