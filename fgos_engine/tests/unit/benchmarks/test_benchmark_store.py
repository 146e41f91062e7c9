from fgos_engine.benchmarks.builder import build_sector_benchmark
from fgos_engine.benchmarks.store import BenchmarkStore


def _benchmarks():
    return {"roic": build_sector_benchmark([float(v) / 100 for v in range(25)])}


def test_benchmark_store_roundtrip(tmp_path):
    store = BenchmarkStore(tmp_path / "benchmarks.json")
    store.save("technology", "2024", _benchmarks())

    fetched = store.fetch("Technology", "2024")
    assert fetched is not None
    assert fetched["roic"] == _benchmarks()["roic"]
    assert store.periods("TECHNOLOGY") == ["2024"]


def test_unknown_period_returns_none(tmp_path):
    store = BenchmarkStore(tmp_path / "benchmarks.json")
    assert store.fetch("Energy", "2020") is None
