"""
Tests for durable storage and the saved-calculation collection.
"""

import json
from datetime import datetime

import pytest

from spokecalc.calculator import compute
from spokecalc.errors import FormatError, ValidationError
from spokecalc.io import (
    CalculationResult,
    JsonFileStore,
    MemoryStore,
    SavedCalculationStore,
    load_calculation,
)


@pytest.fixture
def store(memory_store):
    return SavedCalculationStore(memory_store)


@pytest.fixture
def example_results(example_inputs):
    return compute(example_inputs)


class TestJsonFileStore:

    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileStore(tmp_path / "storage.json").get("anything") is None

    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        JsonFileStore(path).set("preferredLanguage", "ja")
        assert JsonFileStore(path).get("preferredLanguage") == "ja"

    def test_keeps_other_keys(self, tmp_path):
        path = tmp_path / "storage.json"
        store = JsonFileStore(path)
        store.set("a", "1")
        store.set("b", "2")
        assert json.loads(path.read_text()) == {"a": "1", "b": "2"}

    def test_no_temporary_files_left(self, tmp_path):
        JsonFileStore(tmp_path / "storage.json").set("a", "1")
        assert [p.name for p in tmp_path.iterdir()] == ["storage.json"]

    def test_rejects_non_object_file(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[]")
        with pytest.raises(FormatError):
            JsonFileStore(path).get("a")

    def test_rejects_corrupt_file(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{truncated")
        with pytest.raises(FormatError):
            JsonFileStore(path).get("a")


class TestSave:

    def test_save_appends_record(self, store, example_inputs, example_results):
        record = store.save("Front wheel", example_inputs, example_results,
                            now=datetime(2024, 5, 1, 18, 30, 0))
        assert record.name == "Front wheel"
        assert record.results.left == 287.9
        assert record.timestamp == "2024/05/01 18:30:00"
        assert len(store) == 1

    def test_blank_name_rejected(self, store, example_inputs, example_results):
        with pytest.raises(ValidationError):
            store.save("   ", example_inputs, example_results)
        assert len(store) == 0

    def test_incomplete_result_rejected(self, store, example_inputs):
        with pytest.raises(ValidationError):
            store.save("Front wheel", example_inputs, CalculationResult(left=287.9))

    def test_ids_unique_and_increasing(self, store, example_inputs, example_results):
        ids = [store.save(f"Wheel {i}", example_inputs, example_results).id for i in range(5)]
        assert len(set(ids)) == 5
        assert ids == sorted(ids)

    def test_insertion_order(self, store, example_inputs, example_results):
        for name in ("first", "second", "third"):
            store.save(name, example_inputs, example_results)
        assert [c.name for c in store.all()] == ["first", "second", "third"]

    def test_persisted_as_json_array(self, memory_store, store, example_inputs, example_results):
        store.save("Front wheel", example_inputs, example_results)
        data = json.loads(memory_store.get("spokeCalculations"))
        assert isinstance(data, list)
        assert data[0]["name"] == "Front wheel"
        assert data[0]["inputs"]["pitchCircleLeft"] == "45"
        assert data[0]["results"] == {"left": 287.9, "right": 287.9}

    def test_saved_record_isolated_from_working_inputs(self, store, example_inputs, example_results):
        record = store.save("Front wheel", example_inputs, example_results)
        example_results.left = 1.0
        assert store.get(record.id).results.left == 287.9


class TestLoadAndDelete:

    def test_load_returns_independent_copies(self, store, example_inputs, example_results):
        record = store.save("Front wheel", example_inputs, example_results)
        inputs, results = load_calculation(store.get(record.id))
        assert inputs.to_dict() == example_inputs.to_dict()

        results.left = 1.0
        inputs.erd = "1"
        stored = store.get(record.id)
        assert stored.results.left == 287.9
        assert stored.inputs.erd == "590"

    def test_all_returns_copies(self, store, example_inputs, example_results):
        store.save("Front wheel", example_inputs, example_results)
        store.all()[0].name = "changed"
        assert store.all()[0].name == "Front wheel"

    def test_delete(self, store, example_inputs, example_results):
        keep = store.save("keep", example_inputs, example_results)
        drop = store.save("drop", example_inputs, example_results)
        assert store.delete(drop.id)
        assert [c.id for c in store.all()] == [keep.id]

    def test_delete_unknown_id_is_noop(self, memory_store, store, example_inputs, example_results):
        store.save("keep", example_inputs, example_results)
        before = memory_store.get("spokeCalculations")
        assert not store.delete(12345)
        assert memory_store.get("spokeCalculations") == before
        assert len(store) == 1

    def test_delete_twice(self, store, example_inputs, example_results):
        record = store.save("drop", example_inputs, example_results)
        assert store.delete(record.id)
        assert not store.delete(record.id)


class TestReload:

    def test_collection_survives_restart(self, tmp_path, example_inputs, example_results):
        path = tmp_path / "storage.json"
        record = SavedCalculationStore(JsonFileStore(path)).save("Front wheel", example_inputs, example_results)

        reloaded = SavedCalculationStore(JsonFileStore(path))
        assert len(reloaded) == 1
        assert reloaded.get(record.id).name == "Front wheel"

    def test_starts_from_existing_memory_data(self, example_values):
        payload = json.dumps([{
            "id": 1, "name": "old", "inputs": example_values,
            "results": {"left": 287.9, "right": 287.9}, "timestamp": "2024/01/01 00:00:00",
        }])
        store = SavedCalculationStore(MemoryStore({"spokeCalculations": payload}))
        assert store.get(1).name == "old"


class TestCorruptCollection:
    """A damaged collection is reported and left in place."""

    @pytest.mark.parametrize("raw", [
        "[{not json",
        '{"id": 1}',
        '[{"id": "first", "name": "old"}]',
    ])
    def test_corrupt_collection_rejected(self, raw):
        storage = MemoryStore({"spokeCalculations": raw})
        with pytest.raises(FormatError):
            SavedCalculationStore(storage)
        assert storage.get("spokeCalculations") == raw
