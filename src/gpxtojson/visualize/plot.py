# gpxtojson/visualize/plot.py
"""
Plotting routines for gpxtojson
"""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from gpxtojson.analyze.models import Document


def plot_speed(doc: Document, out_path: Path) -> Path:
    """Save a lon/lat scatter of every point, coloured by its speed (km/h)."""
    lats, lons, speeds = [], [], []
    for t in doc.tracks:
        for s in t.segments:
            for p in s.points:
                lats.append(p.lat)
                lons.append(p.lon)
                speeds.append(p.speed)

    fig = plt.figure(figsize=(8, 6))
    try:
        sc = plt.scatter(lons, lats, c=speeds, s=5, cmap="viridis")
        if speeds:
            plt.colorbar(sc, label="Speed (km/h)")
        plt.xlabel("Longitude")
        plt.ylabel("Latitude")
        plt.title("Track coloured by speed")
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path)
    finally:
        plt.close(fig)
    return out_path
