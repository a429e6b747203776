# gpxtojson/analyze/models.py
"""
Track hierarchy entities.

Two parallel hierarchies:
  - raw input (what a decoder produces): RawDocument -> RawTrack -> RawSegment -> RawPoint
  - enriched output (what the aggregator produces): Document -> Track -> Segment -> Point

Units: meters, whole seconds, km/h. Child sequences are tuples and every
entity is frozen; nothing is mutated after construction.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Optional


# ---------------------------------------------------------------------------
# Raw input
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RawPoint:
    lat: float
    lon: float
    elevation: float
    time: _dt.datetime


@dataclass(frozen=True)
class RawSegment:
    points: tuple[RawPoint, ...] = ()


@dataclass(frozen=True)
class RawTrack:
    segments: tuple[RawSegment, ...] = ()


@dataclass(frozen=True)
class RawDocument:
    version: str = ""
    tracks: tuple[RawTrack, ...] = ()


# ---------------------------------------------------------------------------
# Enriched output
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Point:
    """
    A GPS fix plus its step from the previous fix in the same segment.

    distance/duration/speed describe the step; cumulative_* are running
    totals from the first point of the segment (both 0 there).
    """

    lat: float
    lon: float
    elevation: float
    time: _dt.datetime
    distance: float = 0.0
    duration: int = 0
    speed: float = 0.0
    cumulative_distance: float = 0.0
    cumulative_duration: int = 0


@dataclass(frozen=True)
class Segment:
    points: tuple[Point, ...] = ()
    start: Optional[_dt.datetime] = None
    end: Optional[_dt.datetime] = None
    distance: float = 0.0
    duration: int = 0
    speed: float = 0.0


@dataclass(frozen=True)
class Track:
    segments: tuple[Segment, ...] = ()
    start: Optional[_dt.datetime] = None
    end: Optional[_dt.datetime] = None
    distance: float = 0.0
    duration: int = 0
    speed: float = 0.0


@dataclass(frozen=True)
class Document:
    """Top-level container. Carries no speed: tracks may be unrelated activities."""

    version: str = ""
    tracks: tuple[Track, ...] = ()
    start: Optional[_dt.datetime] = None
    end: Optional[_dt.datetime] = None
    distance: float = 0.0
    duration: int = 0
