"""Generate synthetic listings and neighborhood data for the MPI dashboard."""

import random
from datetime import date, timedelta
from typing import Optional


def _listing(listing_id, name, group, city, state, bedrooms, mpi, occ_30, occ_90,
             market_30="75 %", market_90="78 %"):
    record = {
        "id": listing_id,
        "pms": "airbnb",
        "name": name,
        "group": group,
        "city_name": city,
        "state": state,
        "country": "US",
        "no_of_bedrooms": bedrooms,
        "adjusted_occupancy_past_30": occ_30,
        "adjusted_occupancy_past_90": occ_90,
        "market_adjusted_occupancy_past_30": market_30,
        "market_adjusted_occupancy_past_90": market_90,
    }
    for tf, value in zip([7, 30, 60, 90, 120], mpi):
        record[f"mpi_next_{tf}"] = value
    return record


def generate_sample_listings() -> dict:
    """Listings feed covering every resolution path: precomputed, derived and unavailable."""
    listings = [
        _listing("sample-1", "Catskills Mountain Retreat", "Catskills", "Catskills", "NY", 3,
                 [1.73, 1.8, 1.47, 1.2, 1.1], "85 %", "82 %"),
        _listing("sample-2", "Colorado Mountain Lodge", "Colorado", "Denver", "CO", 4,
                 [0.93, 0.88, 0.89, 1.09, 1.29], "70 %", "75 %", "80 %", "82 %"),
        _listing("sample-3", "Miramar Beach Condo", "Miramar Beach", "Miramar Beach", "FL", 2,
                 [1.15, 1.22, 1.18, 1.05, 0.95], "88 %", "85 %", "72 %", "78 %"),
        _listing("sample-4", "Denver Loft", "Colorado", "Denver", "CO", 2,
                 [None, None, None, None, None], "64 %", "71 %"),
        _listing("sample-5", "Highlands Bungalow", "Colorado", "Denver", "CO", 3,
                 [1.02, None, 0.0, None, None], "77 %", "Unavailable"),
        _listing("sample-6", "Miami Beach Studio", "Florida", "Miami", "FL", 1,
                 [None, None, None, None, None], "91 %", "87.5 %"),
        _listing("sample-7", "Brickell Two Bedroom", "Florida", "Miami", "FL", 2,
                 [None, 1.31, None, 1.12, None], "", ""),
        _listing("sample-8", "Woodstock Cabin", "Catskills", "Woodstock", "NY", 3,
                 [-1, -1, -1, -1, -1], "58 %", "62 %"),
    ]
    return {"listings": listings}


def _month_labels(start: date, count: int):
    labels = []
    year, month = start.year, start.month
    for _ in range(count):
        labels.append(date(year, month, 1).strftime("%b %Y"))
        month += 1
        if month > 12:
            month, year = 1, year + 1
    return labels


def generate_sample_reference(reference_date: Optional[date] = None, days: int = 180) -> dict:
    """Neighborhood payload with the three sections the engine recognizes.

    Category "0" of the daily section carries whole-number placeholder
    occupancy; category "1" carries realistic fractional occupancy.
    """
    rng = random.Random(42)
    today = reference_date or date.today()
    start = today - timedelta(days=7)
    daily_dates = [(start + timedelta(days=i)).isoformat() for i in range(days)]

    def occupancy_series(base, realistic):
        values = []
        for i in range(days):
            seasonal = 8 * ((i % 30) / 30.0)
            v = min(100.0, max(1.0, base + seasonal + rng.uniform(-6, 6)))
            values.append(round(v, 2) if realistic else float(round(v)))
        return values

    def counts(low, high):
        return [rng.randint(low, high) for _ in range(days)]

    future_occ = {
        "0": {"X_values": daily_dates,
              "Y_values": [occupancy_series(62, False), counts(0, 12), counts(0, 4)]},
        "1": {"X_values": daily_dates,
              "Y_values": [occupancy_series(66, True), counts(0, 12), counts(0, 4)]},
    }

    percentile_prices = {
        "0": {"X_values": daily_dates,
              "Y_values": [
                  [round(rng.uniform(120, 160), 2) for _ in range(days)],
                  [round(rng.uniform(170, 220), 2) for _ in range(days)],
                  [round(rng.uniform(230, 320), 2) for _ in range(days)],
              ]},
    }

    history_start = date(today.year - 1, today.month, 1)
    months = _month_labels(history_start, 16)
    market_kpi = {
        "0": {"X_values": months + ["Last 365 Days", "Last 730 Days"],
              "Y_values": [
                  [rng.randint(55, 95) for _ in months] + [72, 70],
                  [rng.randint(150, 260) for _ in months] + [205, 198],
              ]},
    }

    return {
        "data": {
            "Listings Used": 412,
            "currency": "USD",
            "lat": 42.7645,
            "lng": -76.1467,
            "source": "airbnb",
            "Market KPI": {"Category": market_kpi},
            "Future Percentile Prices": {"Category": percentile_prices},
            "Future Occ/New/Canc": {"Category": future_occ},
        }
    }
