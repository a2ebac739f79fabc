from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from PySide6.QtCore import QMutex, QMutexLocker, QObject, Signal

from acousticzones.config import DEFAULT_SETTINGS, EngineSettings
from acousticzones.model.readings import Reading, normalize_rows
from acousticzones.model.state import (
    ApplyTreatment, Deploy, Event, RecheckRoom, Reset, SelectPoint, SetShowAfter,
    PointView, SelectionSummary, SimulationState, is_point_satisfied, point_views, reduce,
    selection_summary,
)
from acousticzones.model.treatments import DEFAULT_CATALOG, TreatmentCatalog
from acousticzones.model.zones import Zone

logger = logging.getLogger(__name__)


class Store(QObject):
    """
    Central simulation store with signals for panel/scene sync.

    The only writer of SimulationState: every change goes through `dispatch`,
    which runs the pure reducer on the current snapshot under a mutex, so even
    a multi-threaded host sees one applied-treatment count per point.
    """
    state_changed = Signal(object)
    points_changed = Signal(object)
    effects_changed = Signal(object)
    selection_changed = Signal(object)
    room_check_changed = Signal(object)
    display_mode_changed = Signal(bool)

    def __init__(
        self,
        catalog: TreatmentCatalog = DEFAULT_CATALOG,
        settings: EngineSettings = DEFAULT_SETTINGS,
        parent: Optional[QObject] = None
    ) -> None:
        super().__init__(parent)
        self.catalog = catalog
        self._state = SimulationState(settings=settings)
        self._mutex = QMutex()

    @property
    def state(self) -> SimulationState:
        return self._state

    def dispatch(self, event: Event) -> SimulationState:
        with QMutexLocker(self._mutex):
            previous = self._state
            current = reduce(previous, event, self.catalog)
            self._state = current

        # Signals are emitted outside the lock so slots may dispatch again.
        if current is previous:
            logger.debug(f"{type(event).__name__}: no change")
        else:
            self._emit_changes(previous, current)
        return current

    def _emit_changes(self, previous: SimulationState, current: SimulationState) -> None:
        if current.points is not previous.points:
            self.points_changed.emit(current.points)
        if current.effects is not previous.effects:
            self.effects_changed.emit(current.effects)
        if current.selected_key != previous.selected_key:
            self.selection_changed.emit(current.selected_key)
        if current.room_check is not previous.room_check:
            self.room_check_changed.emit(current.room_check)
        if current.show_after != previous.show_after:
            self.display_mode_changed.emit(current.show_after)
        self.state_changed.emit(current)

    # --- Inbound events ---

    def deploy(self, readings: Iterable[Reading]) -> SimulationState:
        return self.dispatch(Deploy(readings=tuple(readings)))

    def deploy_rows(self, rows: Iterable[Mapping[str, Any]]) -> SimulationState:
        """Normalize raw table rows at the ingestion boundary, then deploy."""
        return self.deploy(normalize_rows(rows))

    def reset(self) -> SimulationState:
        return self.dispatch(Reset())

    def select_point(self, key: Optional[str]) -> SimulationState:
        return self.dispatch(SelectPoint(key=key))

    def apply_treatment(self, key: str, treatment_id: str, zone: Optional[Zone] = None) -> SimulationState:
        return self.dispatch(ApplyTreatment(key=key, treatment_id=treatment_id, zone=zone))

    def set_show_after(self, show_after: bool) -> SimulationState:
        return self.dispatch(SetShowAfter(show_after=show_after))

    def recheck_room_size(self) -> SimulationState:
        return self.dispatch(RecheckRoom())

    # --- Outbound projections ---

    def is_satisfied(self, key: str) -> bool:
        return is_point_satisfied(self._state, key)

    def point_views(self) -> List[PointView]:
        return point_views(self._state)

    def selection_summary(self) -> Optional[SelectionSummary]:
        return selection_summary(self._state, self.catalog)
