import random
import time
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

BASE_DEMAND = 120
DAILY_GROWTH = 5  # slight upward trend


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def mock_time_series(days: int, start: Optional[date] = None, rng: Optional[random.Random] = None) -> List[Dict[str, Any]]:
    """
    Synthetic P10/P50/P90 bands, one row per day:
      p50 = base + jitter, p10 = p50 - 15, p90 = p50 + 25
    with base starting at 120 and rising 5/day, jitter in [0, 20).
    """
    rng = rng or random.Random()
    start = start or date.today()
    rows = []
    base = BASE_DEMAND
    for i in range(days):
        jitter = rng.randrange(20)
        rows.append({
            "date": (start + timedelta(days=i)).isoformat(),
            "p10": base + jitter - 15,
            "p50": base + jitter,
            "p90": base + jitter + 25,
        })
        base += DAILY_GROWTH
    return rows


def mock_forecast(product_id: str, pincode: str, days: int, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    series = mock_time_series(days, rng=rng)
    first = series[0] if series else {"p10": 0, "p50": 0, "p90": 0}
    now = _now_iso()
    return {
        "forecast_id": f"fc_{int(time.time() * 1000)}",
        "product_id": product_id,
        "pincode": pincode,
        "prediction_horizon_days": days,
        "forecast_date": now,
        "predicted_demand": {"p10": first["p10"], "p50": first["p50"], "p90": first["p90"]},
        "time_series": series,
        "confidence_score": 0.88,
        "influencing_factors": ["weather_rain_probability", "weekend_surge", "local_festival"],
        "actionable_insights": [
            "High probability of rain in 48h. Stock extra waterproof packaging.",
            "Local festival detected on Day 3. Increase perishable inventory by 15%.",
            "Competitor out-of-stock trend observed nearby.",
        ],
        "created_at": now,
    }


def mock_stored_forecast(product_id: str, pincode: str) -> Dict[str, Any]:
    now = _now_iso()
    return {
        "forecast_id": "fc_mock",
        "product_id": product_id,
        "pincode": pincode,
        "forecast_date": now,
        "predicted_demand": {"p10": 110, "p50": 140, "p90": 180},
        "confidence_score": 0.9,
        "influencing_factors": ["festival"],
        "created_at": now,
    }
