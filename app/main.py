"""
FastAPI application entry point.
Mounts the validation router. Loads env vars.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load .env from project root, regardless of where the app is started from
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from app.config import settings

logging.basicConfig(level=settings.LOG_LEVEL)

from app import responses
from app.router import router

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_TITLE)
app.include_router(router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return responses.error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    message = _first_error_message(exc.errors())
    logger.info("Rejected request to %s: %s", request.url.path, message)
    return responses.bad_request(message)


def _first_error_message(errors) -> str:
    """
    Collapse pydantic's error list into the single message the envelope carries.
    Messages raised by our own validators are passed through untouched.
    """
    if not errors:
        return "Invalid request"
    first = errors[0]

    cause = (first.get("ctx") or {}).get("error")
    if isinstance(cause, ValueError):
        return str(cause)

    msg = str(first.get("msg", "Invalid request"))
    if first.get("type") == "value_error":
        return msg.removeprefix("Value error, ")

    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{field}: {msg}" if field else msg


@app.get("/")
def read_root():
    return {"message": f"{settings.APP_TITLE} is running"}


@app.get("/health")
def health():
    return responses.success({"status": "ok", "environment": settings.ENVIRONMENT})
