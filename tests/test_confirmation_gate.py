"""Gate decision table: harmless -> apply, destructive -> prompt unless confirmed."""
import pytest

from garden_planner.services.confirmation_gate import (
    Applied,
    ImpactReport,
    RequiresConfirmation,
    attempt,
)


class _Recorder:
    def __init__(self, impact: ImpactReport) -> None:
        self.impact = impact
        self.applied = 0

    async def probe(self) -> ImpactReport:
        return self.impact

    async def apply(self) -> str:
        self.applied += 1
        return "done"


@pytest.mark.asyncio
async def test_harmless_change_applies_without_confirmation() -> None:
    rec = _Recorder(ImpactReport(destructive=False))
    outcome = await attempt(rec.apply, rec.probe, confirmed=False)
    assert outcome == Applied(result="done")
    assert rec.applied == 1


@pytest.mark.asyncio
async def test_destructive_unconfirmed_does_not_apply() -> None:
    impact = ImpactReport(destructive=True, plant_count=3, cell_count=9, reason="3 plants removed")
    rec = _Recorder(impact)
    outcome = await attempt(rec.apply, rec.probe, confirmed=False)
    assert isinstance(outcome, RequiresConfirmation)
    assert outcome.impact == impact
    assert rec.applied == 0


@pytest.mark.asyncio
async def test_destructive_confirmed_applies() -> None:
    rec = _Recorder(ImpactReport(destructive=True, plant_count=1))
    outcome = await attempt(rec.apply, rec.probe, confirmed=True)
    assert isinstance(outcome, Applied)
    assert rec.applied == 1


def test_impact_as_dict() -> None:
    assert ImpactReport(destructive=True, plant_count=2, cell_count=4).as_dict() == {
        "destructive": True,
        "plant_count": 2,
        "cell_count": 4,
        "reason": None,
    }
