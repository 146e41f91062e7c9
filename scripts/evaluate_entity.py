#!/usr/bin/env python3
"""Evaluate one entity from an EvaluationRequest JSON file or URL."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv()

from fgos_engine.config import load_engine_settings
from fgos_engine.evaluate import EvaluationService
from fgos_engine.models import EvaluationRequest

logger = logging.getLogger("evaluate_entity")


def fetch_request(url: str, timeout: float = 30.0) -> Dict[str, Any]:
    import requests

    session = requests.Session()
    session.headers.update({
        "User-Agent": "FGOSEngine/0.1",
        "Accept": "application/json",
    })
    response = session.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


def load_request(path: Optional[str], url: Optional[str]) -> EvaluationRequest:
    if url:
        logger.info("Fetching evaluation request from %s", url)
        payload = fetch_request(url)
    else:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return EvaluationRequest.model_validate(payload)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the FGOS engine for a single entity")
    parser.add_argument("request", nargs="?", help="Path to an EvaluationRequest JSON file")
    parser.add_argument("--url", help="Fetch the request JSON over HTTP instead of reading a file")
    parser.add_argument("--profile", help="Engine settings profile (defaults to FGOS_ENGINE_PROFILE)")
    parser.add_argument("--config-dir", help="Directory holding engine profiles")
    parser.add_argument("--seed", type=int, help="Bootstrap seed overriding the request")
    parser.add_argument("--output", help="Write the result here instead of stdout")
    args = parser.parse_args()

    logging.basicConfig(
        level=os.getenv("FGOS_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.request and not args.url:
        parser.error("either a request file or --url is required")

    request = load_request(args.request, args.url)
    if args.seed is not None:
        request = request.model_copy(update={"rng_seed": args.seed})

    settings = load_engine_settings(
        profile=args.profile,
        base_path=Path(args.config_dir) if args.config_dir else None,
    )
    result = EvaluationService(settings=settings).evaluate(request)
    output = json.dumps(result.model_dump(mode="json"), indent=2)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Wrote evaluation for {result.ticker} to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
