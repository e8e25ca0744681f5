"""
Campaign Endpoints
Create campaigns, generate their emails and pause/resume them.
"""
import logging

from fastapi import APIRouter, Depends

from prnow.modules.outreach.api.errors import OUTREACH_ERRORS, to_http_exception
from prnow.modules.outreach.dependencies import get_campaign_service, get_store
from prnow.modules.outreach.models import Campaign
from prnow.modules.outreach.repositories import OutreachStore
from prnow.modules.outreach.schemas import (
    CampaignCreateRequest,
    CampaignListResponse,
    CampaignView,
    GenerateCampaignResponse,
)
from prnow.modules.outreach.services import CampaignService

router = APIRouter()
logger = logging.getLogger("campaign_api")


def _campaign_view(store: OutreachStore, campaign: Campaign) -> CampaignView:
    return CampaignView(**campaign.model_dump(), stats=store.campaign_stats(campaign.id))


@router.get("/campaigns", response_model=CampaignListResponse)
async def list_campaigns(store: OutreachStore = Depends(get_store)):
    return CampaignListResponse(campaigns=[_campaign_view(store, c) for c in store.list_campaigns()])


@router.post("/campaigns", response_model=CampaignView, status_code=201)
async def create_campaign(request: CampaignCreateRequest, store: OutreachStore = Depends(get_store)):
    """New campaigns start in `draft`. Target outlets are outlet ids."""
    campaign = store.create_campaign(
        name=request.name,
        frequency=request.frequency,
        target_outlets=request.target_outlets,
        target_niches=request.target_niches,
    )
    logger.info(f"Campaign created: {campaign.name} ({len(campaign.target_outlets)} outlets)")
    return _campaign_view(store, campaign)


@router.get("/campaigns/{campaign_id}", response_model=CampaignView)
async def get_campaign(campaign_id: str, store: OutreachStore = Depends(get_store)):
    try:
        return _campaign_view(store, store.get_campaign(campaign_id))
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.post("/campaigns/{campaign_id}/generate", response_model=GenerateCampaignResponse)
async def generate_campaign_emails(
    campaign_id: str,
    store: OutreachStore = Depends(get_store),
    service: CampaignService = Depends(get_campaign_service),
):
    """
    Draft up to 5 individual emails (contacts at the target outlets) and up
    to 3 publication emails (the target outlets). Drafts land in the outbox
    as `pending_approval`; failed drafts are listed in `errors`.
    """
    try:
        results = await service.generate_campaign_emails(store, campaign_id)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)

    return GenerateCampaignResponse(
        success_count=results["success_count"],
        failed_count=results["failed_count"],
        errors=results["errors"],
        emails=results["emails"],
        campaign=_campaign_view(store, results["campaign"]),
    )


@router.post("/campaigns/{campaign_id}/toggle", response_model=CampaignView)
async def toggle_campaign(campaign_id: str, store: OutreachStore = Depends(get_store)):
    """active -> paused, paused -> active. Any other state answers 409."""
    try:
        return _campaign_view(store, store.toggle_campaign(campaign_id))
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.delete("/campaigns/{campaign_id}", status_code=204)
async def remove_campaign(campaign_id: str, store: OutreachStore = Depends(get_store)):
    """Emails drafted for the campaign stay in the outbox."""
    try:
        store.remove_campaign(campaign_id)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)
