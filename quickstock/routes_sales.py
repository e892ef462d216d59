# quickstock/routes_sales.py
import json
import logging
import time
from typing import Any, Dict, List, Optional

from boto3.dynamodb.types import TypeDeserializer
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from .aws import aws_client
from .config import Settings, get_settings

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sales", tags=["sales"])

_deser = TypeDeserializer()


@router.post("/upload")
def upload_sales(records: List[Dict[str, Any]] = Body(...), settings: Settings = Depends(get_settings)):
    try:
        if not settings.has_aws_credentials:
            log.info("Mocking S3 upload of %d sales rows (no AWS credentials)", len(records))
            return {"message": "Success (Mocked)"}

        file_name = f"sales_data_{int(time.time() * 1000)}.json"
        aws_client("s3", settings).put_object(
            Bucket=settings.s3_raw_data_bucket,
            Key=file_name,
            Body=json.dumps(records),
            ContentType="application/json",
        )
        return {"message": "Data uploaded successfully to S3", "fileName": file_name}
    except Exception:
        log.exception("Error uploading sales data")
        return JSONResponse(status_code=500, content={"error": "Failed to upload sales data"})


@router.get("")
def list_sales(
    pincode: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    settings: Settings = Depends(get_settings),
):
    try:
        if not settings.has_aws_credentials:
            log.info("Mocking DynamoDB sales read (no AWS credentials)")
            return []

        resp = aws_client("dynamodb", settings).query(
            TableName=settings.dynamodb_sales_table,
            KeyConditionExpression="pincode = :pincode AND #ts BETWEEN :start_date AND :end_date",
            ExpressionAttributeNames={"#ts": "timestamp"},
            ExpressionAttributeValues={
                ":pincode": {"S": pincode or ""},
                ":start_date": {"S": start_date or ""},
                ":end_date": {"S": end_date or ""},
            },
        )
        return [{k: _deser.deserialize(v) for k, v in item.items()} for item in resp.get("Items", [])]
    except Exception:
        log.exception("Error fetching sales data")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch sales data"})
