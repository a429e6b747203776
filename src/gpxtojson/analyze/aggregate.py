# gpxtojson/analyze/aggregate.py
"""
Track enrichment for gpxtojson

Bottom-up rollup of a raw track hierarchy:
  points -> segment -> track -> document

Every function here is pure: it reads the raw entities and returns new
enriched ones. No I/O, no shared state.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from gpxtojson.analyze.distance import distance, speed_kmh
from gpxtojson.analyze.models import (
    Document,
    Point,
    RawDocument,
    RawPoint,
    RawSegment,
    RawTrack,
    Segment,
    Track,
)
from gpxtojson.errors import ConfigError, NonMonotonicTimeError

# Policies for a point timestamped before its predecessor
TIME_ORDER_CLAMP = "clamp"
TIME_ORDER_REJECT = "reject"
TIME_ORDER_PASSTHROUGH = "passthrough"
TIME_ORDER_POLICIES = (TIME_ORDER_CLAMP, TIME_ORDER_REJECT, TIME_ORDER_PASSTHROUGH)


def check_time_order(policy: str) -> str:
    if policy not in TIME_ORDER_POLICIES:
        raise ConfigError(
            f"Unknown time order policy: {policy!r} "
            f"(expected one of {', '.join(TIME_ORDER_POLICIES)})"
        )
    return policy


def step_duration(prev: RawPoint, cur: RawPoint, *, index: int, time_order: str) -> int:
    """
    Whole seconds from `prev` to `cur`, truncated toward zero.

    Negative steps are handled according to `time_order`.
    """
    seconds = int((cur.time - prev.time).total_seconds())
    if seconds >= 0:
        return seconds
    if time_order == TIME_ORDER_REJECT:
        raise NonMonotonicTimeError(
            f"Point {index} at {cur.time.isoformat()} is earlier than "
            f"point {index - 1} at {prev.time.isoformat()}"
        )
    if time_order == TIME_ORDER_CLAMP:
        return 0
    return seconds


# ---------------------------------------------------------------------------
# Point level
# ---------------------------------------------------------------------------
def derive_points(
        raw_points: Iterable[RawPoint], *,
        time_order: str = TIME_ORDER_CLAMP,
) -> tuple[Point, ...]:
    """Return enriched points for one segment's ordered raw points."""
    check_time_order(time_order)

    out: list[Point] = []
    prev_raw: RawPoint | None = None

    for i, rp in enumerate(raw_points):
        if prev_raw is None:
            out.append(Point(lat=rp.lat, lon=rp.lon, elevation=rp.elevation, time=rp.time))
        else:
            q = out[-1]
            d_m = distance(rp.lat, rp.lon, prev_raw.lat, prev_raw.lon)
            dt_s = step_duration(prev_raw, rp, index=i, time_order=time_order)
            out.append(Point(
                lat=rp.lat,
                lon=rp.lon,
                elevation=rp.elevation,
                time=rp.time,
                distance=d_m,
                duration=dt_s,
                speed=speed_kmh(d_m, dt_s),
                cumulative_distance=q.cumulative_distance + d_m,
                cumulative_duration=q.cumulative_duration + dt_s,
            ))
        prev_raw = rp

    return tuple(out)


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------
def rollup_segment(points: Sequence[Point]) -> Segment:
    points = tuple(points)
    if not points:
        return Segment()

    first, last = points[0], points[-1]
    return Segment(
        points=points,
        start=first.time,
        end=last.time,
        distance=last.cumulative_distance,
        duration=last.cumulative_duration,
        speed=speed_kmh(last.cumulative_distance, last.cumulative_duration),
    )


def rollup_track(segments: Sequence[Segment]) -> Track:
    """
    Sum segment totals into a track.

    Speed comes from the summed distance and duration, not from averaging
    per-segment speeds.
    """
    segments = tuple(segments)
    if not segments:
        return Track()

    dist = sum((s.distance for s in segments), 0.0)
    dur = sum(s.duration for s in segments)
    return Track(
        segments=segments,
        start=segments[0].start,
        end=segments[-1].end,
        distance=dist,
        duration=dur,
        speed=speed_kmh(dist, dur),
    )


def rollup_document(version: str, tracks: Sequence[Track]) -> Document:
    tracks = tuple(tracks)
    if not tracks:
        return Document(version=version)

    return Document(
        version=version,
        tracks=tracks,
        start=tracks[0].start,
        end=tracks[-1].end,
        distance=sum((t.distance for t in tracks), 0.0),
        duration=sum(t.duration for t in tracks),
    )


# ---------------------------------------------------------------------------
# Whole transform
# ---------------------------------------------------------------------------
def enrich_segment(raw: RawSegment, *, time_order: str = TIME_ORDER_CLAMP) -> Segment:
    return rollup_segment(derive_points(raw.points, time_order=time_order))


def enrich_track(raw: RawTrack, *, time_order: str = TIME_ORDER_CLAMP) -> Track:
    return rollup_track([enrich_segment(s, time_order=time_order) for s in raw.segments])


def enrich(raw: RawDocument, *, time_order: str = TIME_ORDER_CLAMP) -> Document:
    """
    Enrich a raw GPX hierarchy with per-point steps and per-level totals.

    Either returns a fully built Document or raises; nothing partial is
    handed back.
    """
    check_time_order(time_order)
    tracks = [enrich_track(t, time_order=time_order) for t in raw.tracks]
    return rollup_document(raw.version, tracks)
