"""
Predict function endpoint.

Exposes the engine as a single request/response call: ``{"patientId": ...}``
in, ``{"success": true, ...}`` out with status 200, or ``{"error": ...}``
with status 400 for any engine failure. The endpoint answers CORS preflight
requests itself and attaches permissive CORS headers to every response.
"""
import json
import logging
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import AppException, InputError
from ..auth.dependencies import SessionContext, require_permission
from ..core.permissions import Permission
from .engine import PredictionRun, run_prediction
from .schemas import PredictRequest, PredictResponse, PredictionScore, RecommendationResult
from .store import PredictionStore

# Set up logging
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

# Create API router
router = APIRouter(prefix="/functions/v1", tags=["Predictions"])


def build_predict_response(run: PredictionRun) -> PredictResponse:
    """Convert an engine run into the predict response body."""
    return PredictResponse(
        predictions=[PredictionScore.model_validate(score) for score in run.predictions],
        recommendations=[RecommendationResult.model_validate(outcome) for outcome in run.recommendations],
    )


async def parse_predict_request(request: Request) -> PredictRequest:
    """
    Parse and validate the raw request body.

    Raises:
        InputError: If the body is not JSON or lacks a usable patientId
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InputError("Request body must be valid JSON")

    if not isinstance(payload, dict):
        raise InputError("Request body must be a JSON object")

    try:
        return PredictRequest.model_validate(payload)
    except ValidationError as e:
        raise InputError(f"Invalid patientId: {e.errors()[0]['msg']}")


@router.options("/predict", include_in_schema=False)
def predict_preflight():
    """Answer CORS preflight with an empty body."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post("/predict", response_model=PredictResponse, summary="Generate Risk Predictions")
async def predict_route(
    request: Request,
    ctx: SessionContext = Depends(require_permission(Permission.RUN_PREDICTIONS)),
    db: Session = Depends(get_db)
):
    """
    Run the risk & recommendation engine for one patient record.

    Patients may only run predictions for their own record; doctors for any
    record. Every engine failure is reported as ``{"error": message}`` with
    status 400.
    """
    try:
        predict_request = await parse_predict_request(request)
        run = run_prediction(PredictionStore(db, ctx), predict_request.patient_id)
    except AppException as e:
        logger.error(f"Error in predict function: {e.detail}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": e.detail},
            headers=CORS_HEADERS
        )

    body = build_predict_response(run)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=body.model_dump(mode="json"),
        headers=CORS_HEADERS
    )
