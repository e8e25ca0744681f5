"""
Outreach Module - API Routers
`router` holds the store API (mounted under /api/v1); `relay_router` holds
the stateless /api/outlets and /api/generate relays.
"""
from fastapi import APIRouter

from prnow.modules.outreach.api import (
    campaign_endpoints,
    email_endpoints,
    outlet_endpoints,
    relay_endpoints,
    setup_endpoints,
)

# Store API
router = APIRouter()

router.include_router(setup_endpoints.router, tags=["Setup"])
router.include_router(outlet_endpoints.router, tags=["Outlets & Contacts"])
router.include_router(campaign_endpoints.router, tags=["Campaigns"])
router.include_router(email_endpoints.router, tags=["Outbox"])

# Stateless relays
relay_router = relay_endpoints.router

__all__ = ["router", "relay_router"]
