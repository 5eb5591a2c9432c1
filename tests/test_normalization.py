"""
French label <-> code mapping for property status and project phase.
"""
import pytest

from services.normalization import (
    normalize_phase,
    normalize_prop_status,
    phase_for_storage,
    prop_status_label,
    status_for_storage,
)


class TestPropertyStatus:

    @pytest.mark.parametrize("raw, code", [
        ("sale", "sale"),
        ("À vendre", "sale"),
        ("a vendre", "sale"),
        ("Vente", "sale"),
        ("  A LOUER  ", "rent"),
        ("location", "rent"),
        ("Vendu", "sold"),
        ("SOLD", "sold"),
    ])
    def test_known_labels(self, raw, code):
        assert normalize_prop_status(raw) == code

    @pytest.mark.parametrize("raw", [None, "", "   ", "sur demande", 42])
    def test_unknown_is_none(self, raw):
        assert normalize_prop_status(raw) is None

    def test_labels(self):
        assert prop_status_label("sale") == "À vendre"
        assert prop_status_label("rent") == "À louer"
        assert prop_status_label("sold") == "Vendu"
        assert prop_status_label("bogus") is None
        assert prop_status_label(None) is None

    def test_storage_keeps_unrecognized_value(self):
        assert status_for_storage("À louer") == "rent"
        assert status_for_storage("Sur demande") == "Sur demande"
        assert status_for_storage(None) is None


class TestProjectPhase:

    @pytest.mark.parametrize("raw, code", [
        ("planned", "planned"),
        ("Planifié", "planned"),
        ("PLANIFIE", "planned"),
        ("En cours", "ongoing"),
        ("ongoing", "ongoing"),
        ("Livré", "delivered"),
        (" livre ", "delivered"),
    ])
    def test_known_labels(self, raw, code):
        assert normalize_phase(raw) == code

    def test_unknown_is_none(self):
        assert normalize_phase("abandonné") is None
        assert normalize_phase(None) is None

    def test_storage(self):
        assert phase_for_storage("en cours") == "ongoing"
        assert phase_for_storage("En pause") == "En pause"
        assert phase_for_storage(None) is None
