"""Persistence for built sector benchmark snapshots."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from fgos_engine.models import SectorBenchmark
from fgos_engine.storage.json_store import JSONKeyValueStore

logger = logging.getLogger(__name__)


class BenchmarkStore(JSONKeyValueStore):
    def __init__(self, path: Path | str = Path("data/runtime/benchmarks.json")) -> None:
        super().__init__(Path(path))

    @staticmethod
    def _key(sector: str, period: str) -> str:
        return f"{sector.strip().upper()}|{period.strip()}"

    def save(self, sector: str, period: str, benchmarks: Dict[str, SectorBenchmark]) -> None:
        payload = {metric: benchmark.model_dump() for metric, benchmark in benchmarks.items()}
        self.set(self._key(sector, period), payload)
        logger.info("Stored %s benchmarks for %s %s", len(payload), sector, period)

    def fetch(self, sector: str, period: str) -> Optional[Dict[str, SectorBenchmark]]:
        payload = self.get(self._key(sector, period))
        if payload is None:
            return None
        return {metric: SectorBenchmark.model_validate(data) for metric, data in payload.items()}

    def periods(self, sector: str) -> List[str]:
        prefix = f"{sector.strip().upper()}|"
        return [key[len(prefix):] for key in self.keys() if key.startswith(prefix)]
