# gpxtojson/formats/gpx.py
"""
GPX decoding for gpxtojson

This module is intentionally format-focused:
- GPX namespace handling (1.1, 1.0, or none)
- safely reading an ElementTree from a path, stream or bytes
- turning <trk>/<trkseg>/<trkpt> into the raw track hierarchy

Key design principle:
  Keep orchestration (argument handling, output) in the CLI, separate from
  GPX parsing here and from the enrichment math in gpxtojson.analyze.
"""

from __future__ import annotations

import datetime as _dt
import math
import re
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union
from xml.etree import ElementTree as ET

from gpxtojson.analyze.models import RawDocument, RawPoint, RawSegment, RawTrack
from gpxtojson.errors import InvalidGpxError
from gpxtojson.util.logging import log

GpxSource = Union[str, Path, bytes, BinaryIO, TextIO]

# Fractional seconds of any length, padded or cut to the 6 digits fromisoformat takes on 3.10
_FRACTION_RE = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


def _namespace(root: ET.Element) -> dict[str, str]:
    """
    Build the namespace map for `root`.

    ElementTree represents namespaced tags internally as
      "{namespace-uri}tag"
    so the root tag tells us which GPX flavour (if any) we are reading.
    """
    tag = root.tag
    if tag.startswith("{"):
        uri, local = tag[1:].split("}", 1)
    else:
        uri, local = "", tag
    if local != "gpx":
        raise InvalidGpxError(f"Not a GPX document (root element is <{local}>)")
    return {"gpx": uri} if uri else {}


def _path(ns: dict[str, str], *tags: str) -> str:
    prefix = "gpx:" if ns else ""
    return "/".join(f"{prefix}{t}" for t in tags)


def _parse_gpx_time(text: str) -> Optional[_dt.datetime]:
    """
    Parse an ISO-8601 timestamp commonly found in GPX <time> nodes.

    Expected examples:
      - "2026-01-02T21:14:44Z"
      - "2026-01-02T21:14:44.123Z"
      - "2026-01-02T21:14:44+01:00"

    Aware times keep their offset. Naive times are taken as UTC so that
    every timestamp in a document can be subtracted from every other.
    """
    if not text:
        return None
    s = text.strip()
    if not s:
        return None

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    s = _FRACTION_RE.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6]:0<6}", s, count=1)

    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)
    return dt


def _parse_float(value: Optional[str], what: str) -> float:
    if value is None:
        raise InvalidGpxError(f"trkpt is missing its {what} attribute")
    try:
        v = float(value)
    except ValueError as e:
        raise InvalidGpxError(f"trkpt has a non-numeric {what}: {value!r}") from e
    if not math.isfinite(v):
        raise InvalidGpxError(f"trkpt has a non-finite {what}: {value!r}")
    return v


def read_gpx(source: GpxSource) -> ET.ElementTree:
    """
    Read GPX into an ElementTree.

    `source` may be a filesystem path, an open file object, or raw bytes.

    Raises:
      InvalidGpxError on malformed XML, OSError if the path cannot be read
    """
    try:
        if isinstance(source, bytes):
            return ET.ElementTree(ET.fromstring(source))
        return ET.parse(source)
    except ET.ParseError as e:
        raise InvalidGpxError(f"Failed to parse GPX: {e}") from e


def _decode_point(trkpt: ET.Element, ns: dict[str, str]) -> Optional[RawPoint]:
    lat = _parse_float(trkpt.get("lat"), "lat")
    lon = _parse_float(trkpt.get("lon"), "lon")

    time = _parse_gpx_time(trkpt.findtext(_path(ns, "time"), default="", namespaces=ns))
    if time is None:
        return None

    ele_text = (trkpt.findtext(_path(ns, "ele"), default="", namespaces=ns) or "").strip()
    elevation = _parse_float(ele_text, "ele") if ele_text else 0.0

    return RawPoint(lat=lat, lon=lon, elevation=elevation, time=time)


def extract_tracks(tree: ET.ElementTree) -> RawDocument:
    """Extract the ordered track -> segment -> point hierarchy from a GPX tree."""
    root = tree.getroot()
    ns = _namespace(root)

    skipped = 0
    tracks: list[RawTrack] = []
    for trk in root.findall(_path(ns, "trk"), ns):
        segments: list[RawSegment] = []
        for trkseg in trk.findall(_path(ns, "trkseg"), ns):
            points: list[RawPoint] = []
            for trkpt in trkseg.findall(_path(ns, "trkpt"), ns):
                p = _decode_point(trkpt, ns)
                if p is None:
                    skipped += 1   # skip points without timestamps
                    continue
                points.append(p)
            segments.append(RawSegment(points=tuple(points)))
        tracks.append(RawTrack(segments=tuple(segments)))

    if skipped:
        log(f"Skipped {skipped} trackpoint(s) without a usable <time>")

    return RawDocument(version=root.get("version", ""), tracks=tuple(tracks))


def decode_gpx(source: GpxSource) -> RawDocument:
    """Read and decode GPX into a RawDocument."""
    return extract_tracks(read_gpx(source))
