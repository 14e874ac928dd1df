"""Affiliate redirector: /go?to=<key> -> hotel booking link."""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from concierge.affiliates import resolve_affiliate

router = APIRouter(tags=["redirect"])
logger = logging.getLogger(__name__)


@router.api_route("/go", methods=["GET", "HEAD", "POST"])
async def go(request: Request):
    """302 to the affiliate URL for ``?to=``; 400 when the key is missing or unknown."""
    try:
        destination = resolve_affiliate(request.query_params.get("to"))
        if not destination:
            return PlainTextResponse("Missing or invalid ?to= parameter", status_code=400)
        return RedirectResponse(
            destination,
            status_code=302,
            headers={"Cache-Control": "no-store"},
        )
    except Exception as exc:
        logger.error(f"Redirect failed: {exc}")
        return PlainTextResponse("Error", status_code=500)
