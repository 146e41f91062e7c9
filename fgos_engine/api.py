"""FastAPI surface for the FGOS scoring and narrative engine."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from fgos_engine.benchmarks import BenchmarkBuilder, BenchmarkStore
from fgos_engine.config import load_engine_settings
from fgos_engine.errors import InvalidInputError
from fgos_engine.evaluate import EvaluationService
from fgos_engine.models import EvaluationRequest, EvaluationResult, PeerComparison, SectorBenchmark

logger = logging.getLogger(__name__)

app = FastAPI(title="FGOS Engine")


class BenchmarkBuildRequest(BaseModel):
    sector: str
    period: str
    samples: Dict[str, List[float]] = Field(default_factory=dict)
    rng_seed: Optional[int] = None


class BenchmarkResponse(BaseModel):
    sector: str
    period: str
    benchmarks: Dict[str, Optional[SectorBenchmark]]


class CompareRequest(BaseModel):
    main: EvaluationRequest
    peer: EvaluationRequest


def get_evaluation_service() -> EvaluationService:
    service = getattr(app.state, "evaluation_service", None)
    if service is None:
        service = EvaluationService(settings=load_engine_settings())
        app.state.evaluation_service = service
    return service


def get_benchmark_store() -> BenchmarkStore:
    store = getattr(app.state, "benchmark_store", None)
    if store is None:
        store = BenchmarkStore()
        app.state.benchmark_store = store
    return store


@app.post("/benchmarks", response_model=BenchmarkResponse)
def build_benchmarks(
    request: BenchmarkBuildRequest,
    service: EvaluationService = Depends(get_evaluation_service),
    store: BenchmarkStore = Depends(get_benchmark_store),
) -> BenchmarkResponse:
    builder = BenchmarkBuilder(service.settings.benchmark, rng_seed=request.rng_seed)
    benchmarks: Dict[str, Optional[SectorBenchmark]] = {
        metric: builder.build(values) for metric, values in request.samples.items()
    }
    built = {metric: benchmark for metric, benchmark in benchmarks.items() if benchmark is not None}
    store.save(request.sector, request.period, built)
    return BenchmarkResponse(sector=request.sector, period=request.period, benchmarks=benchmarks)


@app.get("/benchmarks/{sector}/{period}", response_model=BenchmarkResponse)
def get_benchmarks(
    sector: str,
    period: str,
    store: BenchmarkStore = Depends(get_benchmark_store),
) -> BenchmarkResponse:
    benchmarks = store.fetch(sector, period)
    if benchmarks is None:
        raise HTTPException(status_code=404, detail="Benchmarks not found")
    return BenchmarkResponse(sector=sector, period=period, benchmarks=benchmarks)


@app.post("/evaluate", response_model=EvaluationResult)
def evaluate_entity(
    request: EvaluationRequest,
    service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationResult:
    try:
        return service.evaluate(request)
    except InvalidInputError as exc:
        logger.info("Rejected evaluation for %s: %s", request.metadata.ticker, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/compare", response_model=PeerComparison)
def compare_entities(
    request: CompareRequest,
    service: EvaluationService = Depends(get_evaluation_service),
) -> PeerComparison:
    try:
        return service.compare(request.main, request.peer)
    except InvalidInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
