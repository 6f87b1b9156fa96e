"""
CDR Endpoints
Inbound call ingestion (classify, route, persist) and the CDR list passthrough
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from cdr_gateway.api.v1.dependencies import get_cdr_store, get_routing_engine
from cdr_gateway.domain.errors import FatalIngestionError, PersistenceError
from cdr_gateway.domain.interfaces.cdr_store import CdrStore
from cdr_gateway.domain.services.routing_engine import RoutingDecisionEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cdr", tags=["cdr"])


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message}
    )


@router.post("/create")
async def create_cdr(
    body: Dict[str, Any] = Body(...),
    engine: RoutingDecisionEngine = Depends(get_routing_engine)
):
    """
    Create a CDR for an inbound call.

    The source number is classified and, for VoIP callers, fraud-checked,
    routed to a VoIP-accepting campaign and masked before the record is
    written. Rejected calls are written too, marked ``status: REJECTED``.

    Responses:
        - 200 ``{success: true, data}``: accepted (masked or not)
        - 200 ``{success: false, message, data}``: rejected by policy
        - 400: missing or blank ``src``
        - 500: classification, persistence or timeout failure
    """
    src = body.get("src")
    if src is None or not str(src).strip():
        return _failure(status.HTTP_400_BAD_REQUEST, "Source number (src) is required")

    try:
        outcome = await engine.process(body)
    except FatalIngestionError as e:
        logger.error(f"Error creating CDR record: {e}")
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create CDR record")
    except Exception:
        logger.exception("Unexpected error creating CDR record")
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create CDR record")

    return outcome.to_response()


@router.get("")
async def list_cdrs(
    request: Request,
    store: CdrStore = Depends(get_cdr_store)
):
    """
    List CDR records.

    Query parameters are forwarded to the backend unchanged; line type and
    VoIP annotations are already stored on each record.
    """
    try:
        return await store.list_records(dict(request.query_params))
    except PersistenceError as e:
        logger.error(f"Error fetching CDR records: {e}")
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch CDR records")
