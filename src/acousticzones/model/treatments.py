"""
Treatment Catalog
=================
Defines the acoustic treatments an operator can drop onto a survey point and
their nominal impact per zone.

Classes:
    Treatment: One catalog entry.
    TreatmentCatalog: Ordered registry of treatments. Declaration order matters:
        it breaks ties when recommending.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from acousticzones.model.zones import Zone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Treatment:
    id: str
    name: str
    icon: str
    impact: Mapping[Zone, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "impact", MappingProxyType(dict(self.impact)))
        for zone, score in self.impact.items():
            if not 0 <= score <= 100:
                raise ValueError(f"Impact of '{self.id}' on {zone} out of range: {score}")

    def impact_for(self, zone: Zone | str) -> int:
        """Nominal impact on a zone; 0 if the zone is not in the table."""
        try:
            return self.impact.get(Zone(zone), 0)
        except ValueError:
            return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "impact": {str(z): v for z, v in self.impact.items()},
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Treatment:
        return Treatment(
            id=data["id"],
            name=data.get("name", data["id"]),
            icon=data.get("icon", ""),
            impact={Zone(z): int(v) for z, v in data.get("impact", {}).items()},
        )


DEFAULT_TREATMENTS: tuple[Treatment, ...] = (
    Treatment("bass_trap", "Bass Trap", "🟥", {Zone.HOTSPOT: 35, Zone.DEADSPOT: 5, Zone.NEUTRAL: 0}),
    Treatment("absorber", "Absorber", "🧱", {Zone.HOTSPOT: 25, Zone.DEADSPOT: 0, Zone.NEUTRAL: 0}),
    Treatment("diffuser", "Diffuser", "🔀", {Zone.HOTSPOT: 10, Zone.DEADSPOT: 20, Zone.NEUTRAL: 5}),
    Treatment("rug", "Rug", "🟫", {Zone.HOTSPOT: 15, Zone.DEADSPOT: 0, Zone.NEUTRAL: 0}),
)


class TreatmentCatalog:
    """
    Ordered, read-only registry of treatments.
    """
    def __init__(self, treatments: Iterable[Treatment] = DEFAULT_TREATMENTS) -> None:
        self._treatments: Dict[str, Treatment] = {}
        for treatment in treatments:
            if treatment.id in self._treatments:
                raise ValueError(f"Duplicate treatment id '{treatment.id}'.")
            self._treatments[treatment.id] = treatment
        logger.debug(f"Treatment catalog loaded: {', '.join(self._treatments)}")

    def __iter__(self):
        return iter(self._treatments.values())

    def __len__(self) -> int:
        return len(self._treatments)

    def __contains__(self, treatment_id: object) -> bool:
        return treatment_id in self._treatments

    def get(self, treatment_id: str) -> Optional[Treatment]:
        """Retrieve a treatment by id (None if unknown)."""
        return self._treatments.get(treatment_id)

    def get_ids(self) -> List[str]:
        return list(self._treatments.keys())

    def name_of(self, treatment_id: str) -> str:
        treatment = self.get(treatment_id)
        return treatment.name if treatment else treatment_id

    def recommend(self, zone: Zone | str) -> Optional[Treatment]:
        """
        Treatment with the highest impact on the zone.
        Ties go to the first declared treatment; None for an empty catalog.
        """
        best: Optional[Treatment] = None
        best_score = float("-inf")
        for treatment in self:
            score = treatment.impact_for(zone)
            if score > best_score:
                best, best_score = treatment, score
        return best


DEFAULT_CATALOG = TreatmentCatalog()


# ------------------------------------------------------------------------------
# Applied-treatment summaries
# ------------------------------------------------------------------------------
def format_applied(applied: Sequence[str], catalog: TreatmentCatalog = DEFAULT_CATALOG) -> List[str]:
    """["Bass Trap ×2", "Rug ×1"], in order of first application."""
    counts = Counter(applied)
    return [f"{catalog.name_of(tid)} ×{count}" for tid, count in counts.items()]


def dominant_treatment_name(
    applied: Sequence[str],
    catalog: TreatmentCatalog = DEFAULT_CATALOG,
    fallback: str = ""
) -> str:
    """Name of the most applied treatment; the first one to reach the top count wins ties."""
    if not applied:
        return fallback or "—"

    top_id, top_count = None, -1
    for tid, count in Counter(applied).items():
        if count > top_count:
            top_id, top_count = tid, count

    treatment = catalog.get(top_id)
    if treatment:
        return treatment.name
    return fallback or top_id or "—"
