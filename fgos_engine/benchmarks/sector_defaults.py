"""Fallback sector reference values used when no peer benchmark is available."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectorDefaults:
    roic: float
    gross_margin: float
    net_margin: float
    debt_to_equity: float


DEFAULT_SECTOR = SectorDefaults(roic=0.10, gross_margin=0.40, net_margin=0.08, debt_to_equity=0.60)

SECTOR_DEFAULTS: Dict[str, SectorDefaults] = {
    "Technology": SectorDefaults(roic=0.15, gross_margin=0.60, net_margin=0.15, debt_to_equity=0.30),
    "Healthcare": SectorDefaults(roic=0.12, gross_margin=0.65, net_margin=0.12, debt_to_equity=0.40),
    "Financial Services": SectorDefaults(roic=0.08, gross_margin=0.45, net_margin=0.18, debt_to_equity=1.5),
    "Financial": SectorDefaults(roic=0.08, gross_margin=0.45, net_margin=0.18, debt_to_equity=1.5),
    "Consumer Cyclical": SectorDefaults(roic=0.10, gross_margin=0.35, net_margin=0.06, debt_to_equity=0.60),
    "Consumer Defensive": SectorDefaults(roic=0.12, gross_margin=0.30, net_margin=0.05, debt_to_equity=0.50),
    "Energy": SectorDefaults(roic=0.06, gross_margin=0.25, net_margin=0.08, debt_to_equity=0.70),
    "Utilities": SectorDefaults(roic=0.05, gross_margin=0.40, net_margin=0.10, debt_to_equity=1.2),
    "Industrials": SectorDefaults(roic=0.09, gross_margin=0.28, net_margin=0.07, debt_to_equity=0.55),
    "Real Estate": SectorDefaults(roic=0.04, gross_margin=0.50, net_margin=0.12, debt_to_equity=1.8),
    "Basic Materials": SectorDefaults(roic=0.07, gross_margin=0.22, net_margin=0.06, debt_to_equity=0.45),
    "Communication Services": SectorDefaults(roic=0.08, gross_margin=0.55, net_margin=0.12, debt_to_equity=0.80),
}


def get_sector_defaults(sector: Optional[str]) -> SectorDefaults:
    """Resolve a sector name: exact, then case-insensitive, then substring match."""

    if not sector or not sector.strip():
        return DEFAULT_SECTOR
    if sector in SECTOR_DEFAULTS:
        return SECTOR_DEFAULTS[sector]

    lowered = sector.strip().lower()
    for name, defaults in SECTOR_DEFAULTS.items():
        if name.lower() == lowered:
            return defaults
    for name, defaults in SECTOR_DEFAULTS.items():
        key = name.lower()
        if key in lowered or lowered in key:
            return defaults

    logger.warning("Unknown sector %r; falling back to default sector values", sector)
    return DEFAULT_SECTOR


def is_reasonable_for_sector(metric: str, value: Optional[float], sector: Optional[str]) -> bool:
    """True when value is within 0.1x-10x of the sector's expected level."""

    if value is None:
        return False
    expected = getattr(get_sector_defaults(sector), metric, None)
    if expected is None:
        raise ValueError(f"No sector default for metric {metric}")
    magnitude = abs(value)
    return expected * 0.1 <= magnitude <= expected * 10
