"""
HTTP routes for user creation and retrieval.

Every internal error is caught here, logged with its kind, and replaced by a
fixed-message 500 body. Callers never see which stage or line failed.
"""

import logging
from typing import Any

import orjson
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from apps.registrar.pipeline import CreateUserPipeline
from services.api.dependencies import get_pipeline, get_settings_dep, get_store
from utils.config import Settings
from utils.errors import CreateUserError, StoreError
from utils.schemas import ErrorResponse
from utils.store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_FAILED_MESSAGE = "Failed to create user."
RETRIEVE_FAILED_MESSAGE = "Failed to retrieve users."
INVALID_BODY_MESSAGE = "Invalid JSON body."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def _read_payload(request: Request) -> dict[str, Any]:
    """Decode a JSON request body.

    Bodies not sent as ``application/json`` are ignored and read as ``{}``,
    as are empty bodies and top-level arrays.

    Raises:
        ValueError: If a JSON body does not parse or its top level is not
            an object or array
    """
    media_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if media_type != "application/json":
        return {}

    body = await request.body()
    if not body.strip():
        return {}

    payload = orjson.loads(body)
    if not isinstance(payload, (dict, list)):
        raise ValueError(f"top-level JSON value must be an object or array, got {type(payload).__name__}")
    return payload if isinstance(payload, dict) else {}


@router.post("/createUser", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    pipeline: CreateUserPipeline = Depends(get_pipeline),
):
    """Persist a user and return it with the current activity."""
    try:
        payload = await _read_payload(request)
    except ValueError as e:
        logger.warning("Rejected create request with invalid JSON body: %s", str(e))
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_BODY_MESSAGE)

    try:
        result = await pipeline.run(payload)
    except CreateUserError as e:
        logger.error(
            "Create user failed: stage=%s, kind=%s",
            e.stage.value, e.cause.kind,
            extra={"stage": e.stage.value, "kind": e.cause.kind},
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, CREATE_FAILED_MESSAGE)
    except Exception as e:
        logger.error("Create user failed unexpectedly: %s", str(e), exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, CREATE_FAILED_MESSAGE)

    return JSONResponse(status_code=status.HTTP_201_CREATED, content=result.to_dict())


@router.get("/users")
async def list_users(store: RecordStore = Depends(get_store)):
    """Return every stored user in arrival order."""
    try:
        records = await store.list_all()
    except StoreError as e:
        logger.error(
            "Retrieve users failed: kind=%s, error=%s",
            e.kind, str(e),
            extra={"kind": e.kind},
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, RETRIEVE_FAILED_MESSAGE)
    except Exception as e:
        logger.error("Retrieve users failed unexpectedly: %s", str(e), exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, RETRIEVE_FAILED_MESSAGE)

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[record.to_dict() for record in records],
    )


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings_dep)):
    """Health check endpoint."""
    return {"status": "ok", "version": settings.APP_VERSION}
