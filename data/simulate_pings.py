# data/simulate_pings.py
import math
from pathlib import Path
from datetime import datetime, timezone

import numpy as np
import pandas as pd


def simulate_pings(n_rides=50, pings_per_ride=120, seed=42, out_path="data/pings.csv"):
    """
    Headerless CSV of (ride id, lat, lng, epoch seconds), rides one after the
    other. Each ride is a ~10s-cadence random walk with idle stretches and the
    occasional GPS jump for the speed filter to catch.
    """
    rng = np.random.default_rng(seed)
    start = int(datetime(2014, 7, 17, 22, 0, tzinfo=timezone.utc).timestamp())
    rows = []
    for ride_id in range(1, n_rides + 1):
        ts = start + int(rng.integers(0, 6 * 3600))  # some rides cross midnight
        lat, lng = 37.95 + rng.random() / 100, 23.72 + rng.random() / 100
        idle_left = 0
        for _ in range(pings_per_ride):
            dt = int(rng.integers(5, 15))
            if idle_left == 0 and rng.random() < 0.03:
                idle_left = int(rng.integers(3, 12))
            if idle_left > 0:
                speed = rng.uniform(0, 5)
                idle_left -= 1
            else:
                speed = max(0.0, rng.normal(35, 12))
            dist_km = speed * dt / 3600.0
            heading = math.radians(rng.uniform(0, 360))
            lat += math.cos(heading) * dist_km / 110.574
            lng += math.sin(heading) * dist_km / (111.320 * math.cos(math.radians(lat)))
            ts += dt
            if rng.random() < 0.01:
                # GPS glitch: one ping lands a few km away
                rows.append((ride_id, round(lat + rng.uniform(0.02, 0.05), 6), round(lng, 6), ts))
                continue
            rows.append((ride_id, round(lat, 6), round(lng, 6), ts))
        start = ts

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(out, header=False, index=False)
    return len(rows)


if __name__ == "__main__":
    Path("data/pings.csv").unlink(missing_ok=True)
    n = simulate_pings(n_rides=50, pings_per_ride=120)
    print(f"Wrote {n} pings to data/pings.csv")
