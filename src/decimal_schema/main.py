from typing import List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from decimal_schema.canonical.field import DecimalType
from decimal_schema.inference.numeric_inference import profile_decimal_column
from decimal_schema.observability.logger import generate_request_id, log_event
from decimal_schema.pipeline.converter import FixedDecimalConverter
from decimal_schema.utils.exceptions import AcceleratorError

app = FastAPI(
    title="Decimal Schema Accelerator",
    version="1.0.0"
)


class InferRequest(BaseModel):
    values: List[Optional[Union[str, int]]]


class ConvertRequest(BaseModel):
    value: str
    precision: int
    scale: int


def _error(e: AcceleratorError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "status": "ERROR",
            "error_type": type(e).__name__,
            "message": str(e),
        }
    )


@app.post("/infer-decimal")
def infer_decimal(payload: InferRequest):
    request_id = generate_request_id()
    try:
        profile = profile_decimal_column(payload.values)
    except AcceleratorError as e:
        log_event("DECIMAL_INFERENCE_FAILED", {"request_id": request_id, "message": str(e)})
        raise _error(e)

    decimal_type = profile.pop("decimal_type")
    log_event("DECIMAL_TYPE_INFERRED", {"request_id": request_id, **profile})

    return {
        "status": "SUCCESS",
        "request_id": request_id,
        "decimal_type": decimal_type.to_dict() if decimal_type else None,
        **profile,
    }


@app.post("/convert-decimal")
def convert_decimal(payload: ConvertRequest):
    request_id = generate_request_id()
    try:
        target = DecimalType(precision=payload.precision, scale=payload.scale)
        fixed = FixedDecimalConverter().convert(payload.value, target)
    except AcceleratorError as e:
        log_event("DECIMAL_CONVERSION_FAILED", {"request_id": request_id, "message": str(e)})
        raise _error(e)

    return {
        "status": "SUCCESS",
        "request_id": request_id,
        "mantissa": str(fixed.mantissa),
        "precision": fixed.precision,
        "scale": fixed.scale,
        "value": str(fixed.to_decimal()),
    }
