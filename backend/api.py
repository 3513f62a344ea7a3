"""
FastAPI Backend for the iCOW City Cost Model.

Provides HTTP API access to the city characterizer.
CLI (main.py) continues to work independently.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import sys
import os
import logging
from logging.handlers import RotatingFileHandler

from backend.models.request import (
    EvaluationRequest, BatchEvaluationRequest, SweepRequest, LeverRequest
)
from backend.models.response import (
    EvaluationResponse, BatchEvaluationResponse, SweepResponse
)
from backend.services.evaluation_service import run_evaluation, run_batch
from backend.services.lever_sweep import sweep_lever
from data_models import CityLevers, LeverName
from model_config import build_model_constants
from scenarios import list_scenarios

# ============================================================================
# LOGGING: console plus rotating file
# ============================================================================
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG)
console_handler.setFormatter(logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
))

log_dir = os.environ.get(
    "ICOW_LOG_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "logs"),
)
os.makedirs(log_dir, exist_ok=True)
file_handler = RotatingFileHandler(
    os.path.join(log_dir, "backend.log"), maxBytes=10*1024*1024, backupCount=5
)
file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.addHandler(console_handler)
root_logger.addHandler(file_handler)

logger = logging.getLogger(__name__)
logger.info("Backend API starting - Logging configured to file and console")

app = FastAPI(
    title="iCOW City Cost Model API",
    description="Capital and value-loss costs of coastal adaptation strategies",
    version="1.0.0"
)


LEVER_NAMES = {
    "W": LeverName.WITHDRAWAL,
    "B": LeverName.DIKE_BASE,
    "R": LeverName.RESILIENCY,
    "P": LeverName.RESISTANCE,
    "D": LeverName.DIKE,
}


def _to_levers(request: LeverRequest) -> CityLevers:
    return CityLevers(
        withdrawal_height=request.W,
        dike_base_height=request.B,
        resiliency_height=request.R,
        resistance_fraction=request.P,
        dike_height=request.D,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with clear messages."""
    error_messages = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        error_messages.append(f"{field}: {error['msg']}")

    return JSONResponse(
        status_code=422,
        content={"detail": "; ".join(error_messages)}
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "iCOW City Cost Model API",
        "version": "1.0.0",
        "endpoints": {
            "POST /evaluate": "Evaluate one lever configuration",
            "POST /evaluate/batch": "Evaluate many lever configurations",
            "POST /sweep": "Sweep one lever",
            "GET /scenarios": "List reference scenarios",
            "GET /health": "Health check"
        }
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/scenarios")
async def scenarios():
    """List reference scenarios with their levers."""
    return [
        {
            "name": s.name,
            "description": s.description,
            "surge_height": s.surge_height,
            "levers": dict(zip("WBRPD", s.levers.as_tuple())),
        }
        for s in list_scenarios()
    ]


@app.post("/evaluate", response_model=EvaluationResponse)
def evaluate_endpoint(request: EvaluationRequest):
    """
    Evaluate one lever configuration.

    Out-of-domain levers and invalid constants return 400.
    """
    try:
        return run_evaluation(request.model_dump())
    except ValueError as e:
        logger.warning(f"Rejected evaluation request: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/evaluate/batch", response_model=BatchEvaluationResponse)
def evaluate_batch_endpoint(request: BatchEvaluationRequest):
    """Evaluate many lever configurations, reporting rejected ones."""
    try:
        constants = build_model_constants(request.constants)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return run_batch([_to_levers(lv) for lv in request.levers], constants)


@app.post("/sweep", response_model=SweepResponse)
def sweep_endpoint(request: SweepRequest):
    """Sweep one lever over the requested values."""
    try:
        constants = build_model_constants(request.constants)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    rows = sweep_lever(_to_levers(request.base), LEVER_NAMES[request.lever], request.values, constants)
    return {"lever": request.lever, "rows": rows}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
