"""JSON serialization of engine state for observers."""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from .models import RankedArtist, ReminderNotice, TimelineEntry


def timeline_payload(entries: Iterable[TimelineEntry]) -> List[Dict[str, Any]]:
    return [entry.to_dict() for entry in entries]


def ranking_payload(entries: Iterable[RankedArtist]) -> List[Dict[str, Any]]:
    return [entry.to_dict() for entry in entries]


def notices_payload(notices: Iterable[ReminderNotice]) -> List[Dict[str, Any]]:
    return [notice.to_dict() for notice in notices]


def serialize_timeline(entries: Iterable[TimelineEntry]) -> str:
    """Serialize timeline entries into the snapshot string published to observers."""

    return json.dumps(timeline_payload(entries), ensure_ascii=False)
