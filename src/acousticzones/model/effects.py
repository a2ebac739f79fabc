"""
Treatment Effects
=================
The per-point severity ledger and its diminishing-returns transition.

Every application of a treatment produces a NEW PointEffect from the previous
one; nothing here mutates in place. Repeating the same treatment on the same
point is geometrically less effective (diminish_base ** times_already_applied);
different treatments are not discounted against each other.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from acousticzones.config import DEFAULT_SETTINGS, EngineSettings
from acousticzones.model.treatments import Treatment
from acousticzones.model.zones import Zone
from acousticzones.utils import clamp, round_half_up


@dataclass(frozen=True)
class PointEffect:
    severity: int
    applied: Tuple[str, ...] = ()

    def times_applied(self, treatment_id: str) -> int:
        return self.applied.count(treatment_id)


def initial_effect(settings: EngineSettings = DEFAULT_SETTINGS) -> PointEffect:
    return PointEffect(severity=settings.default_severity)


def treatment_impact(
    treatment: Treatment,
    zone: Zone | str,
    times_already_applied: int,
    diminish_base: float = DEFAULT_SETTINGS.diminish_base
) -> int:
    """Rounded impact of one more application of the treatment."""
    diminish = diminish_base ** times_already_applied
    return round_half_up(treatment.impact_for(zone) * diminish)


def apply_treatment(
    effect: Optional[PointEffect],
    treatment: Treatment,
    zone: Zone | str,
    settings: EngineSettings = DEFAULT_SETTINGS
) -> PointEffect:
    """
    Next PointEffect after applying `treatment` to a point in `zone`.
    An absent effect starts from the default severity with no history.
    """
    previous = effect if effect is not None else initial_effect(settings)
    impact = treatment_impact(
        treatment,
        zone,
        previous.times_applied(treatment.id),
        settings.diminish_base,
    )
    severity = int(clamp(previous.severity - impact, 0, 100))
    return PointEffect(severity=severity, applied=previous.applied + (treatment.id,))


def is_satisfied(
    effect: Optional[PointEffect],
    settings: EngineSettings = DEFAULT_SETTINGS
) -> bool:
    """A point is satisfied once enough treatments were applied, whichever they were."""
    return effect is not None and len(effect.applied) >= settings.satisfied_threshold


def intensity_from_severity(severity: float) -> str:
    if severity <= 20:
        return "LOW"
    if severity <= 50:
        return "MEDIUM"
    return "HIGH"
