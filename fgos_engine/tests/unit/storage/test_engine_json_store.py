from fgos_engine.storage.json_store import JSONKeyValueStore


def test_json_key_value_store_roundtrip(tmp_path):
    path = tmp_path / "nested" / "store.json"
    store = JSONKeyValueStore(path)
    store.set("TECH|2024", {"value": 1})
    store.set("ENERGY|2024", {"value": 2})

    assert store.get("TECH|2024")["value"] == 1
    assert store.keys() == ["ENERGY|2024", "TECH|2024"]

    assert store.delete("TECH|2024") is True
    assert store.delete("TECH|2024") is False
    assert store.get("TECH|2024") is None


def test_writes_leave_no_temp_files(tmp_path):
    store = JSONKeyValueStore(tmp_path / "store.json")
    store.set("a", 1)
    store.set("b", 2)

    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]
