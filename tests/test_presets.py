"""
Tests for the bundled preset catalog.
"""

import json

import pytest

from spokecalc.calculator import compute
from spokecalc.errors import PresetLoadError
from spokecalc.io import PRESET_FILES, load_presets
from spokecalc.io.presets import display_name_from_id


def _preset_document(values, **extra):
    document = {
        "inputs": dict(values),
        "results": {"left": 287.9, "right": 287.9},
        "metadata": {"calculator": "Bicycle Spoke Length Calculator", "version": "1.0"},
    }
    document.update(extra)
    return document


class TestBundledPresets:

    @pytest.fixture(scope="class")
    def catalog(self):
        return load_presets()

    def test_all_declared_presets_load(self, catalog):
        assert len(catalog) == len(PRESET_FILES) == 3
        assert catalog.skipped == []

    def test_ids_and_names(self, catalog):
        assert [p.id for p in catalog] == [
            "mtb-650b-rear-boost",
            "road-front-28h-2x",
            "xc-front-radial-24h",
        ]
        assert catalog.get("road-front-28h-2x").name == "Road Front 28H 2x"

    def test_name_falls_back_to_id(self, catalog):
        assert catalog.get("xc-front-radial-24h").name == "Xc Front Radial 24h"

    def test_stored_results_match_formula(self, catalog):
        for preset in catalog:
            assert compute(preset.inputs).model_dump() == preset.results.model_dump(), preset.id

    def test_rear_preset_is_asymmetric(self, catalog):
        preset = catalog.get("mtb-650b-rear-boost")
        assert preset.category == "MTB"
        assert (preset.results.left, preset.results.right) == (272.8, 271.6)

    def test_unknown_id(self, catalog):
        assert catalog.get("tandem") is None


class TestPresetValidation:

    def test_malformed_entry_skipped(self, example_values):
        broken = dict(example_values)
        del broken["spokeHoleDiameter"]
        reports = []

        catalog = load_presets(
            [
                ("good", _preset_document(example_values, displayName="Good")),
                ("broken", _preset_document(broken)),
            ],
            on_error=reports.append,
        )

        assert [p.id for p in catalog] == ["good"]
        assert len(reports) == 1
        assert [e.preset_id for e in reports[0]] == ["broken"]
        assert "spokeHoleDiameter" in reports[0][0].reason

    def test_on_error_called_once_for_many_failures(self, example_values):
        reports = []
        load_presets(
            [("a", "{not json"), ("b", json.dumps({"inputs": {}})), ("c", "[]")],
            on_error=reports.append,
        )
        assert len(reports) == 1
        assert len(reports[0]) == 3

    def test_on_error_not_called_when_all_valid(self, example_values):
        reports = []
        load_presets([("good", _preset_document(example_values))], on_error=reports.append)
        assert reports == []

    def test_numeric_zero_input_counts_as_missing(self, example_values):
        values = dict(example_values, crossingsLeft=0)
        catalog = load_presets([("zero", _preset_document(values))])
        assert len(catalog) == 0
        assert isinstance(catalog.skipped[0], PresetLoadError)

    def test_text_zero_input_is_present(self, example_values):
        values = dict(example_values, crossingsLeft="0")
        catalog = load_presets([("radial-left", _preset_document(values))])
        assert len(catalog) == 1

    def test_error_message_names_preset(self):
        error = PresetLoadError("broken", "missing input fields: erd")
        assert str(error) == "Invalid preset format in broken: missing input fields: erd"


class TestDisplayName:

    @pytest.mark.parametrize("preset_id,expected", [
        ("road-front", "Road Front"),
        ("mtb_rear-boost", "Mtb Rear Boost"),
        ("29er", "29er"),
    ])
    def test_display_name_from_id(self, preset_id, expected):
        assert display_name_from_id(preset_id) == expected
