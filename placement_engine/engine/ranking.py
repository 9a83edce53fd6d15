from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from placement_engine.core.config.scoring import get_scoring_value
from placement_engine.core.errors import EngineValidationError
from placement_engine.schemas import SimulationChange


@dataclass(slots=True, frozen=True)
class RankedChange:
    change: SimulationChange
    immediate_yield: int
    effort: float


def default_effort(change: SimulationChange) -> float:
    if change.effort is not None:
        return float(change.effort)
    value = get_scoring_value(f"simulation.default_effort.{change.kind}", 0)
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
        raise EngineValidationError(
            f"simulation.default_effort.{change.kind} must be a non-negative number",
            code="invalid_config",
        )
    return float(value)


def _checked_yield(change: SimulationChange, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EngineValidationError(
            f"Yield for change {change.key} must be an integer, got {value!r}",
            code="invalid_yield",
        )
    return value


def rank(
    changes: Sequence[SimulationChange],
    yield_per_change: Mapping[SimulationChange, int],
    effort_per_change: Mapping[SimulationChange, float] | None = None,
) -> list[RankedChange]:
    """Order changes by immediate yield (desc), then effort (asc).

    The sort is stable, so changes tied on both keys keep their input order.
    A change missing from ``yield_per_change`` yields nothing.
    """
    efforts = effort_per_change or {}
    entries = [
        RankedChange(
            change=change,
            immediate_yield=_checked_yield(change, yield_per_change.get(change, 0)),
            effort=float(efforts[change]) if change in efforts else default_effort(change),
        )
        for change in changes
    ]
    return sorted(entries, key=lambda entry: (-entry.immediate_yield, entry.effort))
