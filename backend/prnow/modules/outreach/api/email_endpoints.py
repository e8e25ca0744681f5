"""
Outbox Endpoints
Review drafted emails and move them through the approval workflow:
pending_approval -> approved/rejected, approved -> sent -> replied.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from prnow.modules.outreach.api.errors import OUTREACH_ERRORS, to_http_exception
from prnow.modules.outreach.dependencies import get_store
from prnow.modules.outreach.models import OutreachEmail, OutreachStatus, OutreachType
from prnow.modules.outreach.repositories import OutreachStore
from prnow.modules.outreach.schemas import (
    BulkEmailRequest,
    BulkEmailResponse,
    EmailListResponse,
    EmailNotesRequest,
    EmailStatusRequest,
    EmailView,
)

router = APIRouter()
logger = logging.getLogger("outbox_api")


def _email_view(store: OutreachStore, email: OutreachEmail) -> EmailView:
    name, address = store.resolve_recipient(email)
    return EmailView(**email.model_dump(), recipient_name=name, recipient_email=address)


# ============================================
# LIST / DETAIL
# ============================================

@router.get("/emails", response_model=EmailListResponse)
async def list_emails(
    status: Optional[OutreachStatus] = Query(None),
    type: Optional[OutreachType] = Query(None),
    campaign_id: Optional[str] = Query(None, alias="campaignId"),
    store: OutreachStore = Depends(get_store),
):
    """Newest first. Filters combine."""
    emails = store.list_emails(status=status, type=type, campaign_id=campaign_id)
    return EmailListResponse(emails=[_email_view(store, e) for e in emails])


@router.get("/emails/{email_id}", response_model=EmailView)
async def get_email(email_id: str, store: OutreachStore = Depends(get_store)):
    try:
        return _email_view(store, store.get_email(email_id))
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


# ============================================
# BULK ACTIONS
# ============================================

@router.post("/emails/bulk-approve", response_model=BulkEmailResponse)
async def bulk_approve_emails(request: BulkEmailRequest, store: OutreachStore = Depends(get_store)):
    """Approve many at once. Ids that cannot be approved are skipped and reported."""
    return BulkEmailResponse.model_validate(store.bulk_approve_emails(request.email_ids))


@router.post("/emails/bulk-reject", response_model=BulkEmailResponse)
async def bulk_reject_emails(request: BulkEmailRequest, store: OutreachStore = Depends(get_store)):
    return BulkEmailResponse.model_validate(store.bulk_reject_emails(request.email_ids))


# ============================================
# SINGLE EMAIL ACTIONS
# ============================================

@router.post("/emails/{email_id}/approve", response_model=EmailView)
async def approve_email(email_id: str, store: OutreachStore = Depends(get_store)):
    try:
        return _email_view(store, store.approve_email(email_id))
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.post("/emails/{email_id}/reject", response_model=EmailView)
async def reject_email(email_id: str, store: OutreachStore = Depends(get_store)):
    try:
        return _email_view(store, store.reject_email(email_id))
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.patch("/emails/{email_id}/status", response_model=EmailView)
async def update_email_status(
    email_id: str,
    request: EmailStatusRequest,
    store: OutreachStore = Depends(get_store),
):
    """Manual marks, e.g. `sent` after sending from your own mail client."""
    try:
        return _email_view(store, store.update_email_status(email_id, request.status))
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.patch("/emails/{email_id}/notes", response_model=EmailView)
async def update_email_notes(
    email_id: str,
    request: EmailNotesRequest,
    store: OutreachStore = Depends(get_store),
):
    try:
        return _email_view(store, store.update_email_notes(email_id, request.notes))
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)


@router.delete("/emails/{email_id}", status_code=204)
async def remove_email(email_id: str, store: OutreachStore = Depends(get_store)):
    try:
        store.remove_email(email_id)
    except OUTREACH_ERRORS as e:
        raise to_http_exception(e)
