"""
Setup Endpoints
AI credential, project profile, email style guide, dashboard counters and
the demo workspace.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from prnow.modules.outreach.api.errors import OUTREACH_ERRORS, to_http_exception
from prnow.modules.outreach.dependencies import get_store
from prnow.modules.outreach.repositories import OutreachStore
from prnow.modules.outreach.schemas import (
    AIConfigView,
    DashboardStatsResponse,
    SetupRequest,
    SetupStateResponse,
    StyleGuideRequest,
    StyleGuideResponse,
)

router = APIRouter()
logger = logging.getLogger("setup_api")


def _setup_view(store: OutreachStore) -> SetupStateResponse:
    state = store.state
    return SetupStateResponse(
        ai_config=AIConfigView.from_config(state.ai_config) if state.ai_config else None,
        project_profile=state.project_profile,
        setup_complete=state.setup_complete,
    )


# ============================================
# SETUP
# ============================================

@router.get("/setup", response_model=SetupStateResponse)
async def get_setup(store: OutreachStore = Depends(get_store)):
    """Current setup. Credentials come back masked."""
    return _setup_view(store)


@router.put("/setup", response_model=SetupStateResponse)
async def save_setup(request: SetupRequest, store: OutreachStore = Depends(get_store)):
    """
    Save the AI config and/or project profile. Each half overwrites the
    stored one wholesale. With `complete=true` both halves must be present.
    """
    if request.ai_config is not None:
        store.set_ai_config(request.ai_config)
    if request.project_profile is not None:
        store.set_project_profile(request.project_profile)

    if request.complete:
        try:
            store.complete_setup()
        except OUTREACH_ERRORS as e:
            raise to_http_exception(e)

    return _setup_view(store)


# ============================================
# STYLE GUIDE
# ============================================

@router.get("/style-guide", response_model=StyleGuideResponse)
async def get_style_guide(store: OutreachStore = Depends(get_store)):
    return StyleGuideResponse(text=store.style_guide)


@router.put("/style-guide", response_model=StyleGuideResponse)
async def update_style_guide(request: StyleGuideRequest, store: OutreachStore = Depends(get_store)):
    """Free text, appended verbatim to every drafting prompt."""
    return StyleGuideResponse(text=store.set_style_guide(request.text))


@router.delete("/style-guide", response_model=StyleGuideResponse)
async def reset_style_guide(store: OutreachStore = Depends(get_store)):
    """Restore the default guide."""
    return StyleGuideResponse(text=store.reset_style_guide())


# ============================================
# DASHBOARD & DEMO
# ============================================

@router.get("/dashboard", response_model=DashboardStatsResponse)
async def get_dashboard(store: OutreachStore = Depends(get_store)):
    return DashboardStatsResponse.model_validate(store.dashboard_stats())


@router.post("/demo", response_model=DashboardStatsResponse)
async def seed_demo(store: OutreachStore = Depends(get_store)):
    """
    Replace outlets, contacts, emails and campaigns with a sample workspace.
    The saved AI config is kept.
    """
    try:
        store.seed_demo_data()
    except OSError as e:
        logger.error(f"Demo seed could not be persisted: {e}")
        raise HTTPException(status_code=500, detail="Could not save demo data")
    return DashboardStatsResponse.model_validate(store.dashboard_stats())
