# gpxtojson/formats/serialize.py
"""
JSON output for gpxtojson

Maps the enriched hierarchy onto plain dicts with stable field names and
writes them with the standard json module.
"""

from __future__ import annotations

import datetime as _dt
import json
from typing import Any, Optional, TextIO

from gpxtojson.analyze.models import Document, Point, Segment, Track


def format_time(dt: Optional[_dt.datetime]) -> Optional[str]:
    """
    Render a timestamp as ISO-8601, writing UTC as Z.

    The offset is kept as given; absent times render as None (JSON null).
    """
    if dt is None:
        return None
    s = dt.isoformat()
    if s.endswith("+00:00"):
        s = s[:-6] + "Z"
    return s


def point_to_dict(p: Point) -> dict[str, Any]:
    return {
        "lat": p.lat,
        "lon": p.lon,
        "elevation": p.elevation,
        "time": format_time(p.time),
        "distance": p.distance,
        "duration": p.duration,
        "speed": p.speed,
        "cumulative_distance": p.cumulative_distance,
        "cumulative_duration": p.cumulative_duration,
    }


def segment_to_dict(s: Segment) -> dict[str, Any]:
    return {
        "start": format_time(s.start),
        "end": format_time(s.end),
        "distance": s.distance,
        "duration": s.duration,
        "speed": s.speed,
        "points": [point_to_dict(p) for p in s.points],
    }


def track_to_dict(t: Track) -> dict[str, Any]:
    return {
        "start": format_time(t.start),
        "end": format_time(t.end),
        "distance": t.distance,
        "duration": t.duration,
        "speed": t.speed,
        "segments": [segment_to_dict(s) for s in t.segments],
    }


def document_to_dict(doc: Document) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if doc.version:
        out["version"] = doc.version
    out.update({
        "start": format_time(doc.start),
        "end": format_time(doc.end),
        "distance": doc.distance,
        "duration": doc.duration,
        "tracks": [track_to_dict(t) for t in doc.tracks],
    })
    return out


def dump_json(doc: Document, fp: TextIO, *, indent: Optional[int] = None) -> None:
    """Write `doc` as a single JSON document followed by a newline."""
    json.dump(document_to_dict(doc), fp, indent=indent, allow_nan=False)
    fp.write("\n")
