"""
Tests for the application controller: user actions, notifications and state.
"""

import codecs
import json

import pytest

from spokecalc.app import SpokeCalculatorApp, translate
from spokecalc.enums import Language, NoticeLevel
from spokecalc.io import JsonFileStore, MemoryStore, load_presets


def _messages(notices):
    return [message for message, _ in notices]


class TestCalculate:

    def test_fresh_form_needs_all_fields(self, app, notices):
        assert app.calculate() is None
        assert notices == [(translate("alerts.fillAllFields"), NoticeLevel.WARNING)]
        assert not app.state.results.is_complete

    def test_successful_calculation(self, app, example_values, notices):
        app.apply_inputs(example_values)
        results = app.calculate()
        assert (results.left, results.right) == (287.9, 287.9)
        assert app.state.validation.valid
        assert notices == []

    def test_invalid_value_notifies(self, app, example_values, notices):
        app.apply_inputs(dict(example_values, numberOfSpokes="31"))
        assert app.calculate() is None
        assert notices == [(translate("alerts.invalidInput"), NoticeLevel.WARNING)]


class TestFormEditing:

    def test_edit_invalidates_result(self, calculated_app):
        assert calculated_app.state.results.is_complete
        calculated_app.set_input("erd", "600")
        assert not calculated_app.state.results.is_complete
        assert calculated_app.state.validation is None

    def test_rejected_edit_keeps_result(self, calculated_app):
        assert calculated_app.set_input("erd", "59x") == "590"
        assert calculated_app.state.results.is_complete

    def test_edit_is_clamped(self, app):
        assert app.set_input("spokeHoleDiameter", "3.5") == "3"
        assert app.state.inputs.spoke_hole_diameter == "3"

    def test_blur_formats_spoke_hole(self, app):
        app.set_input("spokeHoleDiameter", "2")
        assert app.blur_input("spokeHoleDiameter") == "2.0"
        assert app.state.inputs.spoke_hole_diameter == "2.0"

    def test_apply_same_values_keeps_result(self, calculated_app, example_values):
        calculated_app.apply_inputs(example_values)
        assert calculated_app.state.results.is_complete


class TestSaveLoadDelete:

    def test_save(self, calculated_app, notices):
        record = calculated_app.save("Front wheel")
        assert record is not None
        assert [c.name for c in calculated_app.state.saved] == ["Front wheel"]
        assert notices[-1] == (translate("alerts.saved"), NoticeLevel.SUCCESS)

    def test_save_needs_name(self, calculated_app, notices):
        assert calculated_app.save("  ") is None
        assert notices[-1][0] == translate("alerts.enterCalculationName")
        assert calculated_app.state.saved == []

    def test_save_needs_result(self, app, notices):
        assert app.save("Front wheel") is None
        assert notices[-1][0] == translate("alerts.performCalculationFirst")

    def test_load_restores_copies(self, calculated_app):
        record = calculated_app.save("Front wheel")
        calculated_app.set_input("erd", "600")

        assert calculated_app.load(record.id)
        assert calculated_app.state.inputs.erd == "590"
        assert calculated_app.state.results.left == 287.9

        calculated_app.state.results.left = 1.0
        assert calculated_app.store.get(record.id).results.left == 287.9

    def test_load_unknown_id(self, app):
        assert not app.load(42)

    def test_delete(self, calculated_app, notices):
        record = calculated_app.save("Front wheel")
        assert calculated_app.delete(record.id)
        assert calculated_app.state.saved == []
        assert notices[-1] == (translate("alerts.deleted"), NoticeLevel.SUCCESS)

    def test_delete_declined(self, calculated_app):
        record = calculated_app.save("Front wheel")
        prompts = []

        def decline(message):
            prompts.append(message)
            return False

        calculated_app.confirm = decline
        assert not calculated_app.delete(record.id)
        assert prompts == [translate("dialog.deleteConfirm.message")]
        assert len(calculated_app.state.saved) == 1

    def test_delete_unknown_id_is_silent(self, app, notices):
        assert not app.delete(42)
        assert notices == []

    def test_saved_collection_survives_restart(self, tmp_path, example_values):
        storage = JsonFileStore(tmp_path / "storage.json")
        first = SpokeCalculatorApp(storage=storage)
        first.apply_inputs(example_values)
        first.calculate()
        first.save("Front wheel")

        second = SpokeCalculatorApp(storage=JsonFileStore(tmp_path / "storage.json"))
        assert [c.name for c in second.state.saved] == ["Front wheel"]


class TestExportImport:

    def test_export_requires_result(self, app, notices):
        assert app.export() is None
        assert notices[-1][0] == translate("alerts.performCalculationFirst")

    def test_export(self, calculated_app):
        document = json.loads(calculated_app.export())
        assert document["results"] == {"left": 287.9, "right": 287.9}
        assert document["inputs"]["erd"] == "590"

    def test_export_to_directory(self, calculated_app, tmp_path, notices):
        path = calculated_app.export_to_file(tmp_path)
        assert path.exists()
        assert notices[-1] == (translate("alerts.jsonDownloaded"), NoticeLevel.SUCCESS)

    def test_import_round_trip(self, calculated_app, notices):
        text = calculated_app.export()
        other = SpokeCalculatorApp(storage=MemoryStore(), notifier=lambda message, level: notices.append((message, level)))
        assert other.import_json(text)
        assert other.state.inputs.to_dict() == calculated_app.state.inputs.to_dict()
        assert other.state.results.left == 287.9
        assert notices[-1] == (translate("alerts.jsonLoaded"), NoticeLevel.SUCCESS)

    def test_import_keeps_values_as_given(self, app, example_values):
        """Imported values are not reformatted the way user edits are."""
        values = dict(example_values, spokeHoleDiameter="2")
        app.import_json(json.dumps({"inputs": values, "results": {}}))
        assert app.state.inputs.spoke_hole_diameter == "2"

    def test_import_invalid_json(self, calculated_app, notices):
        assert not calculated_app.import_json("{oops")
        assert notices[-1] == (translate("alerts.jsonLoadFailed"), NoticeLevel.ERROR)
        assert calculated_app.state.inputs.erd == "590"

    def test_import_missing_section(self, calculated_app, notices):
        assert not calculated_app.import_json('{"inputs": {}}')
        assert notices[-1] == (translate("alerts.invalidJsonFormat"), NoticeLevel.ERROR)
        assert calculated_app.state.results.left == 287.9

    def test_import_missing_file(self, app, tmp_path, notices):
        assert not app.import_file(tmp_path / "missing.json")
        assert notices[-1][0] == translate("alerts.jsonLoadFailed")

    def test_import_non_utf8_file(self, calculated_app, tmp_path, notices):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"inputs": {"erd": "59\xe9"}, "results": {}}')
        assert not calculated_app.import_file(path)
        assert notices[-1] == (translate("alerts.jsonLoadFailed"), NoticeLevel.ERROR)
        assert calculated_app.state.inputs.erd == "590"
        assert calculated_app.state.results.left == 287.9

    def test_import_undecodable_bytes(self, calculated_app, notices):
        assert not calculated_app.import_json(b'\xff{"inputs": {}, "results": {}}')
        assert notices[-1] == (translate("alerts.jsonLoadFailed"), NoticeLevel.ERROR)
        assert calculated_app.state.results.left == 287.9

    def test_import_file_with_byte_order_mark(self, app, tmp_path, example_values, notices):
        path = tmp_path / "bom.json"
        document = {"inputs": example_values, "results": {"left": 287.9, "right": 287.9}}
        path.write_bytes(codecs.BOM_UTF8 + json.dumps(document).encode("utf-8"))
        assert app.import_file(path)
        assert app.state.inputs.erd == "590"
        assert notices[-1] == (translate("alerts.jsonLoaded"), NoticeLevel.SUCCESS)


class TestPresets:

    def test_load_preset(self, app):
        assert app.load_preset("road-front-28h-2x")
        assert app.state.inputs.erd == "538"
        assert app.state.results.left == 258.1
        assert app.state.selected_preset == "road-front-28h-2x"

    def test_empty_selection_ignored(self, calculated_app):
        assert not calculated_app.load_preset("")
        assert calculated_app.state.inputs.erd == "590"

    def test_unknown_preset(self, app):
        assert not app.load_preset("tandem")

    def test_loaded_preset_is_a_copy(self, app):
        app.load_preset("road-front-28h-2x")
        app.set_input("erd", "540")
        assert app.presets.get("road-front-28h-2x").inputs.erd == "538"

    def test_broken_presets_notify_once(self, memory_store, notices, example_values):
        broken = {"inputs": {"erd": "590"}, "results": {"left": 1, "right": 1}}
        app = SpokeCalculatorApp(
            storage=memory_store,
            notifier=lambda message, level: notices.append((message, level)),
            preset_sources=[("a", broken), ("b", broken), ("c", "{")],
        )
        assert len(app.presets) == 0
        assert notices == [(translate("alerts.presetLoadError"), NoticeLevel.ERROR)]

    def test_preloaded_catalog(self, memory_store):
        catalog = load_presets()
        app = SpokeCalculatorApp(storage=memory_store, presets=catalog)
        assert app.presets is catalog


class TestLanguage:

    def test_notifications_follow_language(self, app, notices):
        app.set_language(Language.JA)
        app.calculate()
        assert notices[-1][0] == translate("alerts.fillAllFields", Language.JA)
        assert notices[-1][0] != translate("alerts.fillAllFields", Language.EN)

    def test_language_is_persisted(self, memory_store):
        SpokeCalculatorApp(storage=memory_store).set_language("ja")
        assert SpokeCalculatorApp(storage=memory_store).state.language == Language.JA

    def test_unknown_stored_language(self):
        app = SpokeCalculatorApp(storage=MemoryStore({"preferredLanguage": "xx"}))
        assert app.state.language == Language.EN

    def test_translate_falls_back_to_key(self):
        assert translate("alerts.noSuchMessage", Language.JA) == "alerts.noSuchMessage"
