"""
Stateless Outreach Relays
/api/outlets and /api/generate: everything the call needs (credential,
profile, targets) travels in the body and nothing is stored. Errors answer
`{error}` like the AI relays.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from prnow.modules.outreach.api.errors import OUTREACH_ERRORS, to_http_exception
from prnow.modules.outreach.dependencies import get_campaign_service, get_intelligence_service
from prnow.modules.outreach.models import Outlet
from prnow.modules.outreach.schemas import (
    GenerateRelayRequest,
    GenerateRelayResponse,
    OutletsRelayRequest,
    OutletsRelayResponse,
)
from prnow.modules.outreach.services import CampaignService, OutreachIntelligenceService
from prnow.shared.models import new_id

router = APIRouter()
logger = logging.getLogger("outreach_relay_api")

MISSING_FIELDS = "Missing required fields"


def _error(e: Exception) -> JSONResponse:
    http_error = to_http_exception(e)
    return JSONResponse({"error": http_error.detail}, status_code=http_error.status_code)


@router.post("/outlets", response_model=OutletsRelayResponse)
async def discover_outlets_relay(
    request: OutletsRelayRequest,
    service: OutreachIntelligenceService = Depends(get_intelligence_service),
):
    """Outlet discovery without the store. Returned outlets carry fresh ids."""
    if request.ai_config is None or request.project_profile is None:
        return JSONResponse({"error": MISSING_FIELDS}, status_code=400)

    try:
        drafts = await service.discover_outlets(
            request.ai_config,
            request.project_profile,
            request.target_niches,
            request.existing_outlet_names(),
        )
    except OUTREACH_ERRORS as e:
        return _error(e)

    return OutletsRelayResponse(outlets=[Outlet(**d.model_dump()) for d in drafts])


@router.post("/generate", response_model=GenerateRelayResponse)
async def generate_relay(
    request: GenerateRelayRequest,
    service: CampaignService = Depends(get_campaign_service),
):
    """
    Draft individual emails for `contacts` and publication emails for
    `outlets` (same per-run caps as campaigns). Drafts are returned, not stored.
    """
    if request.ai_config is None or request.project_profile is None:
        return JSONResponse({"error": MISSING_FIELDS}, status_code=400)
    if not request.contacts and not request.outlets:
        return JSONResponse({"error": MISSING_FIELDS}, status_code=400)

    results = await service.draft_batch(
        request.ai_config,
        request.project_profile,
        request.campaign_id or new_id(),
        request.contacts,
        request.outlets,
        style_guide=request.style_guide,
    )
    return GenerateRelayResponse(emails=results["emails"], errors=results["errors"])
