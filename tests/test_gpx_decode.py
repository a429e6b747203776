import datetime as dt
import io

import pytest

from gpxtojson.errors import InvalidGpxError
from gpxtojson.formats.gpx import decode_gpx

GPX_10 = b"""<?xml version="1.0"?>
<gpx version="1.0" xmlns="http://www.topografix.com/GPX/1/0">
  <trk><trkseg>
    <trkpt lat="45.0" lon="7.0"><ele>300</ele><time>2023-07-01T06:00:00+02:00</time></trkpt>
    <trkpt lat="45.001" lon="7.0"><time>2023-07-01T06:00:30.500+02:00</time></trkpt>
  </trkseg></trk>
</gpx>
"""


def test_decode_sample(sample_gpx_path):
    doc = decode_gpx(sample_gpx_path)

    assert doc.version == "1.1"
    assert len(doc.tracks) == 2

    equator, meridian = doc.tracks
    assert [len(s.points) for s in equator.segments] == [3]
    assert [len(s.points) for s in meridian.segments] == [0, 2]

    p = equator.segments[0].points[1]
    assert (p.lat, p.lon, p.elevation) == (0.0, 1.0, 12.5)
    assert p.time == dt.datetime(2024, 5, 1, 9, 0, tzinfo=dt.timezone.utc)

    # <ele> is optional
    assert meridian.segments[1].points[0].elevation == 0.0


def test_decode_gpx_10_keeps_offsets():
    doc = decode_gpx(GPX_10)
    assert doc.version == "1.0"
    p0, p1 = doc.tracks[0].segments[0].points
    assert p0.elevation == 300.0
    assert p0.time.utcoffset() == dt.timedelta(hours=2)
    assert (p1.time - p0.time).total_seconds() == 30.5


def test_decode_from_stream():
    doc = decode_gpx(io.BytesIO(GPX_10))
    assert len(doc.tracks[0].segments[0].points) == 2


def test_decode_without_namespace():
    doc = decode_gpx(b'<gpx><trk><trkseg><trkpt lat="1" lon="2">'
                     b'<time>2020-01-01T00:00:00</time></trkpt></trkseg></trk></gpx>')
    assert doc.version == ""
    (p,) = doc.tracks[0].segments[0].points
    assert p.time.tzinfo == dt.timezone.utc


def test_points_without_time_are_skipped(capsys):
    doc = decode_gpx(b'<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">'
                     b'<trk><trkseg>'
                     b'<trkpt lat="1" lon="2"/>'
                     b'<trkpt lat="1" lon="2"><time>not a time</time></trkpt>'
                     b'<trkpt lat="1" lon="2"><time>2020-01-01T00:00:00Z</time></trkpt>'
                     b'</trkseg></trk></gpx>')
    assert len(doc.tracks[0].segments[0].points) == 1
    assert "Skipped 2 trackpoint(s)" in capsys.readouterr().err


def test_empty_gpx():
    doc = decode_gpx(b'<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1"/>')
    assert doc.tracks == ()


@pytest.mark.parametrize(
    "payload",
    [
        b"<gpx><trk>",
        b"not xml at all",
        b'<kml xmlns="http://www.opengis.net/kml/2.2"/>',
        b'<gpx><trk><trkseg><trkpt lon="2"><time>2020-01-01T00:00:00Z</time></trkpt></trkseg></trk></gpx>',
        b'<gpx><trk><trkseg><trkpt lat="north" lon="2"><time>2020-01-01T00:00:00Z</time></trkpt></trkseg></trk></gpx>',
        b'<gpx><trk><trkseg><trkpt lat="nan" lon="1"><time>2020-01-01T00:00:00Z</time></trkpt></trkseg></trk></gpx>',
        b'<gpx><trk><trkseg><trkpt lat="0" lon="inf"><time>2020-01-01T00:00:00Z</time></trkpt></trkseg></trk></gpx>',
        b'<gpx><trk><trkseg><trkpt lat="0" lon="1"><ele>-inf</ele><time>2020-01-01T00:00:00Z</time></trkpt></trkseg></trk></gpx>',
    ],
)
def test_invalid_gpx(payload):
    with pytest.raises(InvalidGpxError):
        decode_gpx(payload)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        decode_gpx(tmp_path / "nope.gpx")


@pytest.mark.parametrize(
    "text, micros",
    [
        ("2020-01-01T00:00:00.5Z", 500000),
        ("2020-01-01T00:00:00.25Z", 250000),
        ("2020-01-01T00:00:00.1234567+01:00", 123456),
    ],
)
def test_fractional_seconds_of_any_length(text, micros):
    doc = decode_gpx(f'<gpx><trk><trkseg><trkpt lat="1" lon="2"><time>{text}</time>'
                     f'</trkpt></trkseg></trk></gpx>'.encode())
    (p,) = doc.tracks[0].segments[0].points
    assert p.time.microsecond == micros
