# gpxtojson/report.py
"""
Plain-text summary of an enriched document, one line per track.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from gpxtojson.analyze.models import Document
from gpxtojson.formats.serialize import format_time


@dataclass(frozen=True)
class SummaryRow:
    track: int
    segments: int
    points: int
    distance_m: float
    duration_s: int
    speed_kmh: float
    start: Optional[str]
    end: Optional[str]


def summary_rows(doc: Document) -> Iterator[SummaryRow]:
    for i, t in enumerate(doc.tracks):
        yield SummaryRow(
            track=i,
            segments=len(t.segments),
            points=sum(len(s.points) for s in t.segments),
            distance_m=t.distance,
            duration_s=t.duration,
            speed_kmh=t.speed,
            start=format_time(t.start),
            end=format_time(t.end),
        )


def print_report(doc: Document, *, tsv: bool) -> None:
    if tsv:
        print("track\tsegments\tpoints\tdistance_m\tduration_s\tspeed_kmh\tstart\tend")
        for r in summary_rows(doc):
            print(
                f"{r.track}\t"
                f"{r.segments}\t"
                f"{r.points}\t"
                f"{r.distance_m:.2f}\t"
                f"{r.duration_s}\t"
                f"{r.speed_kmh:.3f}\t"
                f"{r.start or ''}\t"
                f"{r.end or ''}"
            )
        return

    print(f"version       : {doc.version or '-'}")
    print(f"tracks        : {len(doc.tracks)}")
    print(f"distance (m)  : {doc.distance:.2f}")
    print(f"duration (s)  : {doc.duration}")
    print(f"start         : {format_time(doc.start) or '-'}")
    print(f"end           : {format_time(doc.end) or '-'}")
    for r in summary_rows(doc):
        print(f"\ntrack {r.track}")
        print(f"  segments      : {r.segments}")
        print(f"  points        : {r.points}")
        print(f"  distance (m)  : {r.distance_m:.2f}")
        print(f"  duration (s)  : {r.duration_s}")
        print(f"  speed km/h    : {r.speed_kmh:.3f}")
        print(f"  start         : {r.start or '-'}")
        print(f"  end           : {r.end or '-'}")
