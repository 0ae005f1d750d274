# tests/test_simulate.py
from data.simulate_pings import simulate_pings
from fare_estimator.pricing import Tariff
from fare_estimator.records import read_records
from fare_estimator.rides import estimate_fares_from_records


def test_simulated_pings_estimate_one_fare_per_ride(tmp_path):
    path = tmp_path / "pings.csv"
    n = simulate_pings(n_rides=5, pings_per_ride=40, seed=7, out_path=path)
    assert n == 200

    rows = list(read_records(path))
    assert len(rows) == 200

    out = list(estimate_fares_from_records(rows, Tariff(timezone="UTC")))
    assert [e.ride_id for e in out] == [1, 2, 3, 4, 5]
    assert all(e.fare >= 3.47 for e in out)
