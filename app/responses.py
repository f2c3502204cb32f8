"""
The catalog's JSON envelope: {"success": bool, "data": ..., "error": "..."}.

Absent fields are omitted rather than sent as null.
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.schemas import ApiResponse


def success(data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    body = ApiResponse(success=True, data=jsonable_encoder(data, by_alias=True, exclude_none=True))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def error(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def bad_request(message: str) -> JSONResponse:
    return error(status.HTTP_400_BAD_REQUEST, message)
