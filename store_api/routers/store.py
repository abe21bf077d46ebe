from __future__ import annotations

import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from store_api.core.log import get_logger
from store_api.domain.stores import store_from_payload, store_to_payload
from store_api.repositories.store_repository import StoreErrorKind, StoreRepository

router = APIRouter(prefix="/api", tags=["store"])
logger = get_logger(__name__)

_SERVER_ERROR = "An error occurred while processing the request."


def _get_store_repository(request: Request) -> StoreRepository:
    repo = getattr(getattr(request.app, "state", None), "store_repository", None)
    if not repo:
        raise RuntimeError("StoreRepository not configured")
    return repo


@router.get("/store")
async def list_stores(request: Request):
    logger.info("Processing a GET request to retrieve store data.")
    repo = _get_store_repository(request)
    result = await run_in_threadpool(repo.list_all)
    if not result.ok:
        return PlainTextResponse(_SERVER_ERROR, status_code=500)
    return JSONResponse([store_to_payload(store) for store in result.stores])


@router.post("/store")
async def create_store(request: Request):
    logger.info("Processing a POST request to save store data.")
    repo = _get_store_repository(request)
    body = await request.body()
    try:
        store = store_from_payload(json.loads(body or b"null"))
    except (ValueError, RecursionError) as exc:  # malformed or too deeply nested JSON, InvalidStoreError
        logger.info("Rejected store payload: %s", exc)
        return PlainTextResponse("Invalid store data.", status_code=400)

    result = await run_in_threadpool(repo.create, store)
    if result.ok:
        return PlainTextResponse("Store information saved successfully.")
    if result.error is StoreErrorKind.DUPLICATE_KEY:
        return PlainTextResponse(result.message, status_code=409)
    if result.error is StoreErrorKind.INVALID_INPUT:
        return PlainTextResponse("Invalid store data.", status_code=400)
    return PlainTextResponse(_SERVER_ERROR, status_code=500)


@router.api_route("/store", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
def unsupported_method():
    return PlainTextResponse("Invalid HTTP method. Use 'GET' or 'POST'.", status_code=400)
