"""
Outlet & Contact Endpoints
Manual outlet management, AI outlet discovery and contact finding.
"""
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from prnow.modules.outreach.api.errors import OUTREACH_ERRORS, to_http_exception
from prnow.modules.outreach.dependencies import get_intelligence_service, get_store
from prnow.modules.outreach.models import Contact, ContactDraft, Outlet, OutletDraft
from prnow.modules.outreach.repositories import OutreachStore
from prnow.modules.outreach.schemas import (
    ContactCreateRequest,
    ContactListResponse,
    DiscoverOutletsRequest,
    OutletCreateRequest,
    OutletListResponse,
)
from prnow.modules.outreach.services import OutreachIntelligenceService

router = APIRouter()
logger = logging.getLogger("outlet_api")


# ============================================
# OUTLETS
# ============================================

@router.get("/outlets", response_model=OutletListResponse)
async def list_outlets(
    filter: Literal["all", "picked", "discovered"] = Query("all"),
    store: OutreachStore = Depends(get_store),
):
    return OutletListResponse(outlets=store.list_outlets(filter))


@router.post("/outlets", response_model=Outlet, status_code=201)
async def add_outlet(request: OutletCreateRequest, store: OutreachStore = Depends(get_store)):
    """Manually added outlets are picked immediately."""
    return store.add_outlet(OutletDraft(**request.model_dump()))


@router.post("/outlets/discover", response_model=OutletListResponse)
async def discover_outlets(
    request: DiscoverOutletsRequest,
    store: OutreachStore = Depends(get_store),
    service: OutreachIntelligenceService = Depends(get_intelligence_service),
):
    """
    Ask the AI for new outlets. Suggestions are stored unpicked; confirm the
    ones you want with POST /outlets/{id}/confirm.
    """
    try:
        config, profile = store.require_setup()
        existing = [o.name for o in store.list_outlets()]
        drafts = await service.discover_outlets(config, profile, request.target_niches, existing)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)

    return OutletListResponse(outlets=store.add_discovered_outlets(drafts))


@router.post("/outlets/{outlet_id}/confirm", response_model=Outlet)
async def confirm_outlet(outlet_id: str, store: OutreachStore = Depends(get_store)):
    try:
        return store.confirm_outlet(outlet_id)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.delete("/outlets/{outlet_id}", status_code=204)
async def remove_outlet(outlet_id: str, store: OutreachStore = Depends(get_store)):
    """Contacts at the outlet are kept."""
    try:
        store.remove_outlet(outlet_id)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.post("/outlets/{outlet_id}/contacts/find", response_model=ContactListResponse)
async def find_contacts(
    outlet_id: str,
    store: OutreachStore = Depends(get_store),
    service: OutreachIntelligenceService = Depends(get_intelligence_service),
):
    """
    Search for real journalists at the outlet and store what was found.
    Needs Anthropic (web search) or a Serper key for other providers.
    """
    try:
        outlet = store.get_outlet(outlet_id)
        config, profile = store.require_setup()
        drafts = await service.find_contacts(config, profile, outlet)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)

    return ContactListResponse(contacts=store.add_contacts(drafts))


# ============================================
# CONTACTS
# ============================================

@router.get("/contacts", response_model=ContactListResponse)
async def list_contacts(
    outlet_id: Optional[str] = Query(None, alias="outletId"),
    store: OutreachStore = Depends(get_store),
):
    return ContactListResponse(contacts=store.list_contacts(outlet_id))


@router.post("/contacts", response_model=Contact, status_code=201)
async def add_contact(request: ContactCreateRequest, store: OutreachStore = Depends(get_store)):
    """Manual add. `outlet` is filled from `outletId` when it names a stored outlet."""
    draft = ContactDraft(**request.model_dump())
    if draft.outlet_id and not draft.outlet:
        try:
            draft.outlet = store.get_outlet(draft.outlet_id).name
        except OUTREACH_ERRORS as e:
            raise to_http_exception(e)
    return store.add_contact(draft)


@router.delete("/contacts/{contact_id}", status_code=204)
async def remove_contact(contact_id: str, store: OutreachStore = Depends(get_store)):
    try:
        store.remove_contact(contact_id)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)
