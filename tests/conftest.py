import datetime as dt
from pathlib import Path

import pytest

from gpxtojson.analyze.models import RawDocument, RawPoint, RawSegment, RawTrack

T0 = dt.datetime(2024, 5, 1, 8, 0, tzinfo=dt.timezone.utc)


def _raw_point(lat, lon, seconds, ele=0.0) -> RawPoint:
    return RawPoint(lat=lat, lon=lon, elevation=ele, time=T0 + dt.timedelta(seconds=seconds))


@pytest.fixture
def raw_point():
    """Factory: raw_point(lat, lon, seconds_after_T0, ele=0.0)."""
    return _raw_point


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def equator_doc() -> RawDocument:
    """One track, one segment, three points one degree and one hour apart."""
    seg = RawSegment(points=(
        _raw_point(0.0, 0.0, 0),
        _raw_point(0.0, 1.0, 3600),
        _raw_point(0.0, 2.0, 7200),
    ))
    return RawDocument(version="1.1", tracks=(RawTrack(segments=(seg,)),))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep real user config and GPXTOJSON_* variables out of every test."""
    monkeypatch.delenv("GPXTOJSON_TIME_ORDER", raising=False)
    monkeypatch.delenv("GPXTOJSON_INDENT", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
