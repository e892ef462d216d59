# quickstock/routes_forecast.py
import json
import logging

from boto3.dynamodb.types import TypeDeserializer
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .aws import aws_client
from .config import Settings, get_settings
from .util.forecasting import mock_forecast, mock_stored_forecast

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/forecast", tags=["forecast"])

_deser = TypeDeserializer()


class ForecastReq(BaseModel):
    product_id: str = Field(..., min_length=1)
    pincode: str = Field(..., min_length=1)
    days: int = Field(7, ge=1, le=90)


@router.post("")
def generate_forecast(req: ForecastReq, settings: Settings = Depends(get_settings)):
    try:
        if not settings.has_aws_credentials:
            log.info("Mocking SageMaker forecast (no AWS credentials)")
            return mock_forecast(req.product_id, req.pincode, req.days)

        resp = aws_client("sagemaker-runtime", settings).invoke_endpoint(
            EndpointName=settings.sagemaker_forecast_endpoint,
            Body=json.dumps({"product_id": req.product_id, "pincode": req.pincode, "days": req.days}),
            ContentType="application/json",
        )
        return json.loads(resp["Body"].read())
    except Exception:
        log.exception("Error generating forecast")
        return JSONResponse(status_code=500, content={"error": "Failed to generate forecast"})


@router.get("/{product_id}/{pincode}")
def get_forecast(product_id: str, pincode: str, settings: Settings = Depends(get_settings)):
    try:
        if not settings.has_aws_credentials:
            log.info("Mocking DynamoDB forecast read (no AWS credentials)")
            return mock_stored_forecast(product_id, pincode)

        resp = aws_client("dynamodb", settings).get_item(
            TableName=settings.dynamodb_forecast_table,
            Key={"product_id": {"S": product_id}, "pincode": {"S": pincode}},
        )
        item = resp.get("Item")
        if not item:
            return JSONResponse(status_code=404, content={"error": "Forecast not found"})
        return {k: _deser.deserialize(v) for k, v in item.items()}
    except Exception:
        log.exception("Error retrieving forecast")
        return JSONResponse(status_code=500, content={"error": "Failed to retrieve forecast"})
