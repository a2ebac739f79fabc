"""Tests for the treatment catalog and recommendations."""
import pytest

from acousticzones.model.treatments import (
    DEFAULT_CATALOG, Treatment, TreatmentCatalog, dominant_treatment_name, format_applied,
)
from acousticzones.model.zones import Zone


def test_default_catalog_order_and_lookup():
    assert DEFAULT_CATALOG.get_ids() == ["bass_trap", "absorber", "diffuser", "rug"]
    assert DEFAULT_CATALOG.get("bass_trap").impact_for(Zone.HOTSPOT) == 35
    assert DEFAULT_CATALOG.get("unknown") is None
    assert "rug" in DEFAULT_CATALOG
    assert len(DEFAULT_CATALOG) == 4


def test_impact_for_missing_zone_is_zero():
    treatment = Treatment("panel", "Panel", "#", {Zone.HOTSPOT: 10})
    assert treatment.impact_for(Zone.DEADSPOT) == 0
    assert treatment.impact_for("hotspot") == 10
    assert treatment.impact_for("not-a-zone") == 0


@pytest.mark.parametrize("zone, expected", [
    (Zone.HOTSPOT, "bass_trap"),
    (Zone.DEADSPOT, "diffuser"),
    (Zone.NEUTRAL, "diffuser"),
])
def test_recommend(zone, expected):
    assert DEFAULT_CATALOG.recommend(zone).id == expected


def test_recommend_ties_go_to_first_declared():
    catalog = TreatmentCatalog([
        Treatment("a", "A", "", {Zone.NEUTRAL: 0}),
        Treatment("b", "B", "", {Zone.NEUTRAL: 0}),
    ])
    assert catalog.recommend(Zone.NEUTRAL).id == "a"

    catalog = TreatmentCatalog([
        Treatment("a", "A", "", {Zone.HOTSPOT: 20}),
        Treatment("b", "B", "", {Zone.HOTSPOT: 30}),
        Treatment("c", "C", "", {Zone.HOTSPOT: 30}),
    ])
    assert catalog.recommend(Zone.HOTSPOT).id == "b"


def test_recommend_empty_catalog():
    assert TreatmentCatalog([]).recommend(Zone.HOTSPOT) is None


def test_catalog_rejects_duplicates_and_bad_impact():
    with pytest.raises(ValueError):
        TreatmentCatalog([Treatment("a", "A", ""), Treatment("a", "A2", "")])
    with pytest.raises(ValueError):
        Treatment("x", "X", "", {Zone.HOTSPOT: 120})


def test_treatment_dict_roundtrip():
    rug = DEFAULT_CATALOG.get("rug")
    assert Treatment.from_dict(rug.to_dict()) == rug


def test_format_applied():
    applied = ["bass_trap", "rug", "bass_trap", "mystery"]
    assert format_applied(applied) == ["Bass Trap ×2", "Rug ×1", "mystery ×1"]
    assert format_applied([]) == []


def test_dominant_treatment_name():
    assert dominant_treatment_name(["rug", "bass_trap", "bass_trap"]) == "Bass Trap"
    assert dominant_treatment_name(["rug", "diffuser"]) == "Rug"
    assert dominant_treatment_name([], fallback="Diffuser") == "Diffuser"
    assert dominant_treatment_name([]) == "—"


def test_catalog_entries_are_read_only():
    rug = DEFAULT_CATALOG.get("rug")
    with pytest.raises(TypeError):
        rug.impact[Zone.HOTSPOT] = 99
    assert DEFAULT_CATALOG.get("rug").impact_for(Zone.HOTSPOT) == 15
    assert hash(rug) == hash(Treatment("rug", "Rug", "🟫", {Zone.HOTSPOT: 15}))


def test_treatment_copies_its_impact_table():
    table = {Zone.HOTSPOT: 10}
    treatment = Treatment("panel", "Panel", "#", table)
    table[Zone.HOTSPOT] = 90
    assert treatment.impact_for(Zone.HOTSPOT) == 10
    assert treatment == Treatment("panel", "Panel", "#", {Zone.HOTSPOT: 10})
