# fare_estimator/api.py
from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .parsing import MalformedRecord
from .pricing import DEFAULT_TARIFF
from .rides import estimate_fares_from_records
from .schemas import EstimateReq, EstimateResp, FareOut


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------
app = FastAPI(title="Fare Estimator API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@app.get("/health")
def health():
    return {"ok": True, "version": __version__, "timezone": DEFAULT_TARIFF.timezone}


@app.get("/tariff")
def tariff():
    return DEFAULT_TARIFF.model_dump(mode="json")


@app.post("/estimate", response_model=EstimateResp)
def estimate(req: EstimateReq):
    """Estimate fares for a finite, already ordered batch of raw ping rows."""
    try:
        estimates = list(estimate_fares_from_records(req.records, DEFAULT_TARIFF))
    except MalformedRecord as ex:
        raise HTTPException(status_code=422, detail=str(ex))
    out = [FareOut(ride_id=e.ride_id, fare=e.to_row()[1]) for e in estimates]
    return EstimateResp(count=len(out), estimates=out)
