"""
Error taxonomy of the plan editor.
Every error is a ValueError carrying a stable `code`; routers never see raw store errors
for validation, ownership or concurrency problems.
Confirmation-gated changes do not raise: they return RequiresConfirmation (services/confirmation_gate.py).
"""
from typing import Any, Dict, Optional


class PlanEditorError(ValueError):
    """Base error: code (machine readable), message, optional field and extra context."""

    code = "plan_editor_error"
    status_code = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.extra = extra or {}


class InvalidGeometryError(PlanEditorError):
    """Plan dimensions / cell size rules violated."""

    code = "invalid_geometry"
    status_code = 422


class OutOfBoundsError(PlanEditorError):
    """Coordinate outside the plan's current grid."""

    code = "out_of_bounds"
    status_code = 422


class InvalidQueryError(PlanEditorError):
    """Mutually exclusive filters combined or malformed filter value."""

    code = "invalid_query"
    status_code = 400


class InvalidCursorError(PlanEditorError):
    """Pagination cursor failed to decode or failed structural checks."""

    code = "invalid_cursor"
    status_code = 400


class NotFoundError(PlanEditorError):
    """Entity absent or not owned by the caller."""

    code = "not_found"
    status_code = 404


class ConflictError(PlanEditorError):
    """Concurrent mutation detected by the store, or unique constraint hit."""

    code = "conflict"
    status_code = 409


class CellNotSoilError(PlanEditorError):
    """Plant placement requested on a cell whose type is not soil."""

    code = "cell_not_soil"
    status_code = 422
