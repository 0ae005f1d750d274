# fare_estimator/schemas.py
from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Ping(BaseModel):
    model_config = ConfigDict(frozen=True)

    ride_id: int
    lat: float
    lng: float
    ts: int = Field(..., description="Unix epoch seconds")

    @property
    def coords(self) -> Tuple[float, float]:
        return (self.lat, self.lng)


class Segment(BaseModel):
    """Kinematics between two consecutive pings of the same ride."""
    model_config = ConfigDict(frozen=True)

    distance_km: float = Field(ge=0.0)
    duration_s: int = Field(gt=0)
    speed_kmh: float = Field(ge=0.0)
    start_ts: int
    end_ts: int

    @property
    def duration_hours(self) -> float:
        return self.duration_s / 3600.0


class FareEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    ride_id: int
    fare: float = Field(ge=0.0)

    def to_row(self) -> Tuple[str, str]:
        return (str(self.ride_id), f"{self.fare:.4f}")


# ---- API payloads -----------------------------------------------------------

class EstimateReq(BaseModel):
    records: List[List[str]] = Field(..., description="rows of id, lat, lng, epoch seconds")


class FareOut(BaseModel):
    ride_id: int
    fare: str


class EstimateResp(BaseModel):
    count: int
    estimates: List[FareOut]
