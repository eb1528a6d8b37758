"""
Utilities for loading the tracking event → shipment status rule table.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import yaml

from spaceledger.db.database import settings
from spaceledger.models.shipment import ShipmentStatus

logger = logging.getLogger(__name__)

DEFAULT_RULES: Dict[str, ShipmentStatus] = {
    "pickup": ShipmentStatus.IN_TRANSIT,
    "delivered": ShipmentStatus.DELIVERED,
}


def _normalize_event_type(value: Optional[str]) -> str:
    if not value:
        return ""
    return value.strip()


@lru_cache()
def load_tracking_rules(path: Optional[str] = None) -> Dict[str, ShipmentStatus]:
    config_path = Path(path or settings.tracking_rules_path)
    if not config_path.exists():
        logger.info(f"No tracking rules at {config_path}, using defaults")
        return dict(DEFAULT_RULES)
    with open(config_path, "r", encoding="utf-8") as fh:
        config = yaml.safe_load(fh) or {}

    rules: Dict[str, ShipmentStatus] = {}
    for event_type, status in (config.get("status_advances") or {}).items():
        key = _normalize_event_type(event_type)
        try:
            rules[key] = ShipmentStatus(status)
        except ValueError:
            raise ValueError(f"Unknown shipment status '{status}' for event type '{event_type}' in {config_path}")
    return rules or dict(DEFAULT_RULES)


def get_status_for_event(event_type: Optional[str]) -> Optional[ShipmentStatus]:
    """Status a tracking event advances its shipment to, or None if it leaves it alone."""
    return load_tracking_rules().get(_normalize_event_type(event_type))
