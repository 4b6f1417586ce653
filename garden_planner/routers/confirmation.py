"""HTTP rendering of RequiresConfirmation: 409 with code=requires_confirmation (never `conflict`)."""
from fastapi import status
from fastapi.responses import JSONResponse

from garden_planner.schemas.common import ErrorResponse, ImpactOut
from garden_planner.services.confirmation_gate import RequiresConfirmation

REQUIRES_CONFIRMATION = "requires_confirmation"


def confirmation_required(outcome: RequiresConfirmation, confirm_param: str) -> JSONResponse:
    impact = ImpactOut(**outcome.impact.as_dict())
    body = ErrorResponse(
        detail=impact.reason or f"Change is destructive; repeat with {confirm_param}=true",
        code=REQUIRES_CONFIRMATION,
        extra={**impact.model_dump(), "confirm_param": confirm_param},
    )
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=body.model_dump(mode="json"))
