"""Benchmark package exports."""
from .builder import BenchmarkBuilder, benchmark_confidence, build_sector_benchmark
from .sector_defaults import SECTOR_DEFAULTS, SectorDefaults, get_sector_defaults, is_reasonable_for_sector
from .store import BenchmarkStore

__all__ = [
    "BenchmarkBuilder",
    "benchmark_confidence",
    "build_sector_benchmark",
    "SECTOR_DEFAULTS",
    "SectorDefaults",
    "get_sector_defaults",
    "is_reasonable_for_sector",
    "BenchmarkStore",
]
