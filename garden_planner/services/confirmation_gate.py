"""
Two-phase confirmation for destructive changes.

The gate is stateless: a destructive, unconfirmed request returns RequiresConfirmation
without writing anything, and the client replays the same request with its confirm flag set.
A client that never replays has discarded the change; there is nothing to clean up.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar, Union

from garden_planner.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ImpactReport:
    """What a change would destroy. Built by a probe, read by the gate and the client."""

    destructive: bool
    plant_count: int = 0
    cell_count: int = 0
    reason: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "destructive": self.destructive,
            "plant_count": self.plant_count,
            "cell_count": self.cell_count,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Applied(Generic[T]):
    result: T


@dataclass(frozen=True)
class RequiresConfirmation:
    impact: ImpactReport


Outcome = Union[Applied, RequiresConfirmation]


async def attempt(
    apply: Callable[[], Awaitable[T]],
    probe: Callable[[], Awaitable[ImpactReport]],
    confirmed: bool,
) -> Outcome:
    """
    Run probe; apply only when the change is harmless or already confirmed.
    A confirmed request never re-prompts even if the impact grew since it was shown.
    """
    impact = await probe()
    if impact.destructive and not confirmed:
        logger.info("gate.requires_confirmation", **impact.as_dict())
        return RequiresConfirmation(impact=impact)
    result = await apply()
    if impact.destructive:
        logger.info("gate.confirmed_applied", **impact.as_dict())
    return Applied(result=result)
