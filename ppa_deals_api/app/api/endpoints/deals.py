"""
Deal endpoints.

CRUD routes over the in‑memory deal store.  Request bodies may be sent
as JSON or as URL‑encoded forms, so handlers read the raw request and
validate it with ``DealStore.validate`` instead of declaring a body
model.  Failures raise ``DealError`` subclasses which the application
turns into ``400 {"error": ...}`` responses.
"""

import re
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from ppa_deals_api.app.core.db import get_store
from ppa_deals_api.app.core.exceptions import (
    INVALID_ID_MESSAGE,
    DealNotFoundError,
    DealValidationError,
)
from ppa_deals_api.app.schemas.deal import DealCreate, DealListResponse, DealResponse, ErrorResponse
from ppa_deals_api.app.services.deal_service import DealStore

router = APIRouter()

_ERRORS = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_INT_ID = re.compile(r"^\s*[+-]?\d+\s*$")
# Bodies are read by hand (JSON or form), so the payload schema is only
# advertised in the OpenAPI document.
_DEAL_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": DealCreate.model_json_schema()},
            "application/x-www-form-urlencoded": {"schema": DealCreate.model_json_schema()},
        },
    }
}
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _parse_id(raw: str) -> int:
    if not _INT_ID.match(raw):
        raise DealValidationError(INVALID_ID_MESSAGE)
    try:
        return int(raw)
    except ValueError as exc:
        # too many digits for int()
        raise DealValidationError(INVALID_ID_MESSAGE) from exc


async def _read_payload(request: Request) -> Dict[str, Any]:
    """Return the request body as a mapping.

    Malformed JSON and JSON that is not an object are rejected as
    invalid payloads; an unsupported or missing content type yields an
    empty mapping, which then fails validation.
    """
    content_type = request.headers.get("content-type", "").lower()
    if "json" in content_type:
        try:
            body = await request.json()
        except ValueError as exc:
            raise DealValidationError() from exc
        if not isinstance(body, dict):
            raise DealValidationError()
        return body
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return dict(form)
    return {}


@router.get("", response_model=DealListResponse)
async def list_deals(request: Request, store: DealStore = Depends(get_store)) -> DealListResponse:
    """Return deals, filtered by exact match on any query parameters.

    ``GET /api/deals?technology=Solar&country=Spain`` returns deals
    matching both fields.  Unknown field names match nothing.
    """
    filters = dict(request.query_params)
    return DealListResponse(data=store.list(filters))


@router.get("/{deal_id}", response_model=DealListResponse, responses=_ERRORS)
async def get_deal(deal_id: str, store: DealStore = Depends(get_store)) -> DealListResponse:
    """Return a one‑element list holding the requested deal."""
    wanted = _parse_id(deal_id)
    if not store.exists(wanted):
        raise DealNotFoundError()
    return DealListResponse(data=store.get_by_id(wanted))


@router.post(
    "",
    response_model=DealResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    openapi_extra=_DEAL_BODY,
)
async def create_deal(request: Request, store: DealStore = Depends(get_store)) -> DealResponse:
    """Create a deal from a full payload and return it with its new id."""
    payload = await _read_payload(request)
    if not store.validate(payload):
        raise DealValidationError()
    return DealResponse(data=store.create(payload))


@router.patch("/{deal_id}", response_model=DealResponse, responses=_ERRORS, openapi_extra=_DEAL_BODY)
async def update_deal(
    deal_id: str,
    request: Request,
    store: DealStore = Depends(get_store),
) -> DealResponse:
    """Replace every field of an existing deal.

    The id is checked before the payload, so an unknown id reports
    "not found" even when the body is also invalid.
    """
    wanted = _parse_id(deal_id)
    if not store.exists(wanted):
        raise DealNotFoundError()
    payload = await _read_payload(request)
    if not store.validate(payload):
        raise DealValidationError()
    return DealResponse(data=store.update_by_id(wanted, payload))


@router.delete("/{deal_id}", response_model=DealListResponse, responses=_ERRORS)
async def delete_deal(deal_id: str, store: DealStore = Depends(get_store)) -> DealListResponse:
    """Delete a deal and return the remaining collection."""
    wanted = _parse_id(deal_id)
    if not store.exists(wanted):
        raise DealNotFoundError()
    return DealListResponse(data=store.delete_by_id(wanted))
