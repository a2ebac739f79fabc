"""
Simulation State (Data Model)
=============================
This module defines the state of a running acoustic simulation and the only
way to change it.

Why is this file needed?
------------------------
1. State Management: One immutable snapshot holds the deployed points, their
   placements, the treatment ledger, the selection and the room check.
2. Transitions: `reduce(state, event)` is a pure function returning the next
   snapshot. Events dispatched in quick succession (repeated drag-drops) each
   see the snapshot produced by the previous one, so no update is lost.
3. Projections: Views never read the ledger directly; they read PointView /
   SelectionSummary objects derived here.

Classes:
    SimulationState: The snapshot.
    Deploy, Reset, SelectPoint, ApplyTreatment, SetShowAfter, RecheckRoom: Events.
    PointView, SelectionSummary: Read-only projections for the Presentation Layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from acousticzones.config import DEFAULT_SETTINGS, SELECTED_SCALE, EngineSettings
from acousticzones.model.colors import display_color
from acousticzones.model.effects import (
    PointEffect, apply_treatment, intensity_from_severity, is_satisfied, treatment_impact,
)
from acousticzones.model.geometry_utils import Placement, RoomBounds, map_points, room_bounds
from acousticzones.model.readings import DeployedPoint, Reading, deploy_readings
from acousticzones.model.room import INITIAL_ROOM_CHECK, RoomCheckResult, check_room_size
from acousticzones.model.treatments import (
    DEFAULT_CATALOG, Treatment, TreatmentCatalog, dominant_treatment_name, format_applied,
)
from acousticzones.model.zones import RGB, ZONE_COLORS, Zone

logger = logging.getLogger(__name__)


def _frozen(mapping: Optional[Dict] = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class SimulationState:
    """
    Snapshot of the whole simulation. Never mutated; use `reduce`.
    """
    points: Tuple[DeployedPoint, ...] = ()
    placements: Mapping[str, Placement] = field(default_factory=_frozen)
    bounds: RoomBounds = field(default_factory=lambda: room_bounds(()))
    effects: Mapping[str, PointEffect] = field(default_factory=_frozen)
    selected_key: Optional[str] = None
    show_after: bool = True
    room_check: RoomCheckResult = INITIAL_ROOM_CHECK
    settings: EngineSettings = DEFAULT_SETTINGS

    def point(self, key: str) -> Optional[DeployedPoint]:
        for p in self.points:
            if p.key == key:
                return p
        return None

    @property
    def selected_point(self) -> Optional[DeployedPoint]:
        return self.point(self.selected_key) if self.selected_key else None


# ------------------------------------------------------------------------------
# Events
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Deploy:
    readings: Tuple[Reading, ...]

@dataclass(frozen=True)
class Reset:
    pass

@dataclass(frozen=True)
class SelectPoint:
    key: Optional[str]

@dataclass(frozen=True)
class ApplyTreatment:
    key: str
    treatment_id: str
    # None: use the deployed point's own zone
    zone: Optional[Zone] = None

@dataclass(frozen=True)
class SetShowAfter:
    show_after: bool

@dataclass(frozen=True)
class RecheckRoom:
    pass

Event = Union[Deploy, Reset, SelectPoint, ApplyTreatment, SetShowAfter, RecheckRoom]


# ------------------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------------------
def reduce(
    state: SimulationState,
    event: Event,
    catalog: TreatmentCatalog = DEFAULT_CATALOG
) -> SimulationState:
    """Pure transition: (snapshot, event) -> next snapshot."""
    match event:
        case Deploy(readings=readings):
            return _deploy(state, readings)
        case Reset():
            logger.info("Simulation reset.")
            return SimulationState(settings=state.settings)
        case SelectPoint(key=key):
            if key is not None and state.point(key) is None:
                logger.warning(f"Cannot select unknown point '{key}'.")
                return state
            return replace(state, selected_key=key)
        case ApplyTreatment():
            return _apply(state, event, catalog)
        case SetShowAfter(show_after=show_after):
            return replace(state, show_after=bool(show_after))
        case RecheckRoom():
            return replace(state, room_check=check_room_size(state.points, state.settings))
        case _:
            raise TypeError(f"Unknown event: {event!r}")


def _deploy(state: SimulationState, readings: Sequence[Reading]) -> SimulationState:
    settings = state.settings
    points = deploy_readings(readings)
    room_check = check_room_size(points, settings)
    placements, bounds = map_points(points, settings.default_distance_unit)

    logger.info(
        f"Deployed {len(points)} point(s), {len(placements)} placed. "
        f"Room check: {'OK' if room_check.ok else 'FAILED'} ({room_check.reason})"
    )

    # A failed room check does not block deployment; points stay inspectable.
    return SimulationState(
        points=points,
        placements=_frozen(placements),
        bounds=bounds,
        room_check=room_check,
        settings=settings,
    )


def _apply(
    state: SimulationState,
    event: ApplyTreatment,
    catalog: TreatmentCatalog
) -> SimulationState:
    treatment: Optional[Treatment] = catalog.get(event.treatment_id)
    if treatment is None:
        logger.warning(f"Unknown treatment '{event.treatment_id}' ignored.")
        return state

    point = state.point(event.key)
    if point is None:
        logger.warning(f"Treatment '{event.treatment_id}' dropped on unknown point '{event.key}'.")
        return state

    zone = event.zone or point.zone
    previous = state.effects.get(event.key)
    impact = treatment_impact(
        treatment, zone,
        previous.times_applied(treatment.id) if previous else 0,
        state.settings.diminish_base,
    )
    effect = apply_treatment(previous, treatment, zone, state.settings)

    logger.debug(
        f"Applied '{treatment.id}' to '{event.key}' ({zone}), impact {impact}: "
        f"severity {previous.severity if previous else state.settings.default_severity} -> {effect.severity}"
    )
    return replace(state, effects=_frozen({**state.effects, event.key: effect}))


# ------------------------------------------------------------------------------
# Projections (read-only, for the Presentation Layer)
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class PointView:
    key: str
    reading: Reading
    zone: Zone
    position: Placement
    base_color: RGB
    color: RGB
    severity: Optional[int]
    satisfied: bool
    selected: bool

    @property
    def scale(self) -> float:
        return SELECTED_SCALE if self.selected else 1.0


@dataclass(frozen=True)
class SelectionSummary:
    point: DeployedPoint
    effect: Optional[PointEffect]
    recommendation: Optional[Treatment]
    before_color: RGB
    after_color: RGB
    severity: int
    intensity: str
    dominant_treatment: str
    applied_labels: List[str]


def is_point_satisfied(state: SimulationState, key: str) -> bool:
    """True once the point has had enough treatments; False for keys with no effect."""
    return is_satisfied(state.effects.get(key), state.settings)


def point_views(state: SimulationState) -> List[PointView]:
    """One view per placed point, in deployment order."""
    views = []
    for point in state.points:
        position = state.placements.get(point.key)
        if position is None:
            continue
        effect = state.effects.get(point.key)
        satisfied = is_point_satisfied(state, point.key)
        views.append(PointView(
            key=point.key,
            reading=point.reading,
            zone=point.zone,
            position=position,
            base_color=ZONE_COLORS[point.zone],
            color=display_color(point.zone, effect, state.show_after, satisfied),
            severity=effect.severity if effect else None,
            satisfied=satisfied,
            selected=point.key == state.selected_key,
        ))
    return views


def selection_summary(
    state: SimulationState,
    catalog: TreatmentCatalog = DEFAULT_CATALOG
) -> Optional[SelectionSummary]:
    """Everything the recommendation panel shows for the selected point."""
    point = state.selected_point
    if point is None:
        return None

    effect = state.effects.get(point.key)
    applied = effect.applied if effect else ()
    recommendation = catalog.recommend(point.zone)
    severity = effect.severity if effect else state.settings.default_severity

    return SelectionSummary(
        point=point,
        effect=effect,
        recommendation=recommendation,
        before_color=ZONE_COLORS[point.zone],
        # The panel preview always shows the blended "after" color.
        after_color=display_color(point.zone, effect, show_after=True, satisfied=False),
        severity=severity,
        intensity=intensity_from_severity(severity),
        dominant_treatment=dominant_treatment_name(
            applied, catalog, recommendation.name if recommendation else ""
        ),
        applied_labels=format_applied(applied, catalog),
    )
