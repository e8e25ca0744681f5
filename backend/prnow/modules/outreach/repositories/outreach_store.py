"""
Outreach Store
All reads and mutations of outlets, contacts, emails and campaigns.

Key patterns:
- Copy-on-write: each mutator deep-copies the current AppState, edits the
  copy and hands it to the repository in one set() call
- Synchronous, last-writer-wins (single writer; an RLock serializes threads)
- No foreign keys: removing an outlet keeps its contacts, removing a
  contact keeps its emails (they fall back to denormalized fields)
- Status changes go through the transition tables in the models
"""
import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from prnow.modules.ai_gateway.models import AIConfig
from prnow.modules.outreach.models import (
    CAMPAIGN_STATUS_TRANSITIONS,
    DEFAULT_STYLE_GUIDE,
    AppState,
    Campaign,
    CampaignFrequency,
    CampaignStats,
    CampaignStatus,
    Contact,
    ContactDraft,
    EmailDraft,
    Outlet,
    OutletDraft,
    OutreachEmail,
    OutreachStatus,
    OutreachType,
    ProjectProfile,
    can_transition,
)
from prnow.modules.outreach.repositories.state_repository import StateRepository
from prnow.shared.core.constants import MANUAL_OUTLET_RELEVANCE_SCORE
from prnow.shared.models import utc_now
from prnow.shared.utils.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
)

logger = logging.getLogger("outreach_store")

T = TypeVar("T")

OUTLET_FILTERS = ("all", "picked", "discovered")


def _find(items: Iterable[T], entity_id: str) -> Optional[T]:
    for item in items:
        if item.id == entity_id:
            return item
    return None


class OutreachStore:
    """
    Entity store for one user session.

    Usage:
        store = OutreachStore(InMemoryStateRepository())
        outlet = store.add_outlet(OutletDraft(name="TechCrunch"))
        store.approve_email(email_id)
    """

    def __init__(self, repo: StateRepository):
        self.repo = repo
        self._lock = threading.RLock()

    @property
    def state(self) -> AppState:
        return self.repo.get()

    def _mutate(self, change: Callable[[AppState], T]) -> T:
        with self._lock:
            state = self.repo.get().model_copy(deep=True)
            result = change(state)
            self.repo.set(state)
            return result

    # ============================================
    # SETUP
    # ============================================

    def set_ai_config(self, config: AIConfig) -> AIConfig:
        def change(state: AppState) -> AIConfig:
            state.ai_config = config
            return config
        logger.info(f"AI provider set to {config.provider.value}")
        return self._mutate(change)

    def set_project_profile(self, profile: ProjectProfile) -> ProjectProfile:
        def change(state: AppState) -> ProjectProfile:
            state.project_profile = profile
            return profile
        return self._mutate(change)

    def require_setup(self) -> Tuple[AIConfig, ProjectProfile]:
        """
        Config + profile needed by every AI operation. Raises before any
        network request is made.
        """
        state = self.state
        if state.ai_config is None or not state.ai_config.api_key:
            raise ConfigurationError("Add an AI provider credential in Setup first.", missing="aiConfig")
        if state.project_profile is None:
            raise ConfigurationError("Describe your project in Setup first.", missing="projectProfile")
        return state.ai_config, state.project_profile

    def complete_setup(self) -> None:
        self.require_setup()

        def change(state: AppState) -> None:
            state.setup_complete = True
        self._mutate(change)

    @property
    def style_guide(self) -> str:
        return self.state.email_style_guide

    def set_style_guide(self, text: str) -> str:
        def change(state: AppState) -> str:
            state.email_style_guide = text
            return text
        return self._mutate(change)

    def reset_style_guide(self) -> str:
        return self.set_style_guide(DEFAULT_STYLE_GUIDE)

    # ============================================
    # OUTLETS
    # ============================================

    def get_outlet(self, outlet_id: str) -> Outlet:
        outlet = _find(self.state.outlets, outlet_id)
        if outlet is None:
            raise EntityNotFoundError("Outlet", outlet_id)
        return outlet

    def list_outlets(self, filter: str = "all") -> List[Outlet]:
        outlets = self.state.outlets
        if filter == "picked":
            return [o for o in outlets if o.is_user_picked]
        if filter == "discovered":
            return [o for o in outlets if o.is_discovered]
        return list(outlets)

    def add_outlet(self, draft: OutletDraft) -> Outlet:
        """Manual add: picked by the user from the start."""
        outlet = Outlet(**draft.model_dump())
        outlet.is_user_picked = True
        outlet.is_discovered = False
        if outlet.relevance_score is None:
            outlet.relevance_score = MANUAL_OUTLET_RELEVANCE_SCORE

        def change(state: AppState) -> Outlet:
            state.outlets.append(outlet)
            return outlet
        return self._mutate(change)

    def add_discovered_outlets(self, drafts: List[OutletDraft]) -> List[Outlet]:
        """Batch insert from discovery. Nothing is picked until confirm_outlet()."""
        outlets = []
        for draft in drafts:
            outlet = Outlet(**draft.model_dump())
            outlet.is_user_picked = False
            outlet.is_discovered = True
            outlets.append(outlet)

        def change(state: AppState) -> List[Outlet]:
            state.outlets.extend(outlets)
            return outlets
        return self._mutate(change)

    def confirm_outlet(self, outlet_id: str) -> Outlet:
        def change(state: AppState) -> Outlet:
            outlet = _find(state.outlets, outlet_id)
            if outlet is None:
                raise EntityNotFoundError("Outlet", outlet_id)
            outlet.is_user_picked = True
            return outlet
        return self._mutate(change)

    def remove_outlet(self, outlet_id: str) -> None:
        """Contacts at this outlet are kept."""
        def change(state: AppState) -> None:
            if _find(state.outlets, outlet_id) is None:
                raise EntityNotFoundError("Outlet", outlet_id)
            state.outlets = [o for o in state.outlets if o.id != outlet_id]
        self._mutate(change)

    # ============================================
    # CONTACTS
    # ============================================

    def get_contact(self, contact_id: str) -> Contact:
        contact = _find(self.state.contacts, contact_id)
        if contact is None:
            raise EntityNotFoundError("Contact", contact_id)
        return contact

    def list_contacts(self, outlet_id: Optional[str] = None) -> List[Contact]:
        if outlet_id is None:
            return list(self.state.contacts)
        return [c for c in self.state.contacts if c.outlet_id == outlet_id]

    def contacts_for_outlets(self, outlet_ids: Iterable[str]) -> List[Contact]:
        wanted = set(outlet_ids)
        return [c for c in self.state.contacts if c.outlet_id in wanted]

    def add_contact(self, draft: ContactDraft) -> Contact:
        return self.add_contacts([draft])[0]

    def add_contacts(self, drafts: List[ContactDraft]) -> List[Contact]:
        contacts = [Contact(**d.model_dump()) for d in drafts]

        def change(state: AppState) -> List[Contact]:
            state.contacts.extend(contacts)
            return contacts
        return self._mutate(change)

    def remove_contact(self, contact_id: str) -> None:
        def change(state: AppState) -> None:
            if _find(state.contacts, contact_id) is None:
                raise EntityNotFoundError("Contact", contact_id)
            state.contacts = [c for c in state.contacts if c.id != contact_id]
        self._mutate(change)

    # ============================================
    # EMAILS
    # ============================================

    def get_email(self, email_id: str) -> OutreachEmail:
        email = _find(self.state.emails, email_id)
        if email is None:
            raise EntityNotFoundError("OutreachEmail", email_id)
        return email

    def list_emails(
        self,
        status: Optional[OutreachStatus] = None,
        type: Optional[OutreachType] = None,
        campaign_id: Optional[str] = None,
    ) -> List[OutreachEmail]:
        emails = self.state.emails
        if status is not None:
            emails = [e for e in emails if e.status == status]
        if type is not None:
            emails = [e for e in emails if e.type == type]
        if campaign_id is not None:
            emails = [e for e in emails if e.campaign_id == campaign_id]
        return list(emails)

    def add_email(self, draft: EmailDraft) -> OutreachEmail:
        return self.add_emails([draft])[0]

    def add_emails(self, drafts: List[EmailDraft]) -> List[OutreachEmail]:
        """Newest first: the batch goes in front of existing emails, in order."""
        emails = [OutreachEmail(**d.model_dump()) for d in drafts]

        def change(state: AppState) -> List[OutreachEmail]:
            state.emails = emails + state.emails
            return emails
        return self._mutate(change)

    @staticmethod
    def _apply_status(email: OutreachEmail, target: OutreachStatus, now: datetime) -> None:
        if not can_transition(email.status, target):
            raise InvalidStatusTransitionError("OutreachEmail", email.id, email.status.value, target.value)

        if target == OutreachStatus.APPROVED:
            # Re-approving keeps the state but re-stamps the time
            email.approved_at = now
        elif target == OutreachStatus.SENT and email.status != OutreachStatus.SENT:
            email.sent_at = now
        email.status = target

    def _transition_one(self, email_id: str, target: OutreachStatus) -> OutreachEmail:
        def change(state: AppState) -> OutreachEmail:
            email = _find(state.emails, email_id)
            if email is None:
                raise EntityNotFoundError("OutreachEmail", email_id)
            self._apply_status(email, target, utc_now())
            return email
        return self._mutate(change)

    def _transition_many(self, email_ids: List[str], target: OutreachStatus) -> Dict[str, Any]:
        """
        Apply one transition to a set of ids in a single write.
        Missing or ineligible ids are skipped and reported, never raised.
        """
        def change(state: AppState) -> Dict[str, Any]:
            results: Dict[str, Any] = {"updated": [], "skipped": []}
            now = utc_now()
            by_id = {e.id: e for e in state.emails}
            for email_id in dict.fromkeys(email_ids):
                email = by_id.get(email_id)
                if email is None:
                    results["skipped"].append({"email_id": email_id, "error": "Email not found"})
                    continue
                try:
                    self._apply_status(email, target, now)
                except InvalidStatusTransitionError as e:
                    results["skipped"].append({"email_id": email_id, "error": e.message})
                    continue
                results["updated"].append(email_id)
            return results

        results = self._mutate(change)
        logger.info(
            f"Bulk {target.value}: {len(results['updated'])} updated, {len(results['skipped'])} skipped"
        )
        return results

    def approve_email(self, email_id: str) -> OutreachEmail:
        return self._transition_one(email_id, OutreachStatus.APPROVED)

    def reject_email(self, email_id: str) -> OutreachEmail:
        return self._transition_one(email_id, OutreachStatus.REJECTED)

    def bulk_approve_emails(self, email_ids: List[str]) -> Dict[str, Any]:
        return self._transition_many(email_ids, OutreachStatus.APPROVED)

    def bulk_reject_emails(self, email_ids: List[str]) -> Dict[str, Any]:
        return self._transition_many(email_ids, OutreachStatus.REJECTED)

    def update_email_status(self, email_id: str, status: OutreachStatus) -> OutreachEmail:
        """Generic setter, used for marking `sent` and `replied` by hand."""
        return self._transition_one(email_id, status)

    def update_email_notes(self, email_id: str, notes: Optional[str]) -> OutreachEmail:
        def change(state: AppState) -> OutreachEmail:
            email = _find(state.emails, email_id)
            if email is None:
                raise EntityNotFoundError("OutreachEmail", email_id)
            email.notes = notes
            return email
        return self._mutate(change)

    def remove_email(self, email_id: str) -> None:
        def change(state: AppState) -> None:
            if _find(state.emails, email_id) is None:
                raise EntityNotFoundError("OutreachEmail", email_id)
            state.emails = [e for e in state.emails if e.id != email_id]
        self._mutate(change)

    def resolve_recipient(self, email: OutreachEmail) -> Tuple[str, str]:
        """
        (name, address) to display. Uses the live contact when it still
        exists, otherwise the fields copied onto the email at draft time.
        """
        if email.contact_id:
            contact = _find(self.state.contacts, email.contact_id)
            if contact is not None:
                return contact.name, contact.email or email.contact_email
        return email.contact_name, email.contact_email

    # ============================================
    # CAMPAIGNS
    # ============================================

    def get_campaign(self, campaign_id: str) -> Campaign:
        campaign = _find(self.state.campaigns, campaign_id)
        if campaign is None:
            raise EntityNotFoundError("Campaign", campaign_id)
        return campaign

    def list_campaigns(self) -> List[Campaign]:
        return list(self.state.campaigns)

    def create_campaign(
        self,
        name: str,
        frequency: CampaignFrequency = CampaignFrequency.DAILY,
        target_outlets: Optional[List[str]] = None,
        target_niches: Optional[List[str]] = None,
        next_run_at: Optional[datetime] = None,
    ) -> Campaign:
        campaign = Campaign(
            name=name.strip(),
            frequency=frequency,
            target_outlets=list(target_outlets or []),
            target_niches=[n.strip() for n in (target_niches or []) if n and n.strip()],
            next_run_at=next_run_at,
        )

        def change(state: AppState) -> Campaign:
            state.campaigns.append(campaign)
            return campaign
        return self._mutate(change)

    def update_campaign_status(self, campaign_id: str, status: CampaignStatus) -> Campaign:
        def change(state: AppState) -> Campaign:
            campaign = _find(state.campaigns, campaign_id)
            if campaign is None:
                raise EntityNotFoundError("Campaign", campaign_id)
            if campaign.status != status and status not in CAMPAIGN_STATUS_TRANSITIONS[campaign.status]:
                raise InvalidStatusTransitionError("Campaign", campaign_id, campaign.status.value, status.value)
            campaign.status = status
            return campaign
        return self._mutate(change)

    def activate_campaign(self, campaign_id: str) -> Campaign:
        return self.update_campaign_status(campaign_id, CampaignStatus.ACTIVE)

    def toggle_campaign(self, campaign_id: str) -> Campaign:
        """active -> paused, paused -> active."""
        current = self.get_campaign(campaign_id).status
        if current == CampaignStatus.ACTIVE:
            return self.update_campaign_status(campaign_id, CampaignStatus.PAUSED)
        if current == CampaignStatus.PAUSED:
            return self.update_campaign_status(campaign_id, CampaignStatus.ACTIVE)
        raise InvalidStatusTransitionError("Campaign", campaign_id, current.value, "toggle")

    def remove_campaign(self, campaign_id: str) -> None:
        """Its emails stay in the outbox."""
        def change(state: AppState) -> None:
            if _find(state.campaigns, campaign_id) is None:
                raise EntityNotFoundError("Campaign", campaign_id)
            state.campaigns = [c for c in state.campaigns if c.id != campaign_id]
        self._mutate(change)

    def campaign_stats(self, campaign_id: str) -> CampaignStats:
        emails = [e for e in self.state.emails if e.campaign_id == campaign_id]
        return CampaignStats(
            total_sent=sum(1 for e in emails if e.status == OutreachStatus.SENT),
            total_approved=sum(1 for e in emails if e.status == OutreachStatus.APPROVED),
            total_pending=sum(1 for e in emails if e.status == OutreachStatus.PENDING_APPROVAL),
        )

    # ============================================
    # DASHBOARD
    # ============================================

    def dashboard_stats(self) -> Dict[str, int]:
        state = self.state

        def count(status: OutreachStatus) -> int:
            return sum(1 for e in state.emails if e.status == status)

        return {
            "totalCampaigns": len(state.campaigns),
            "activeCampaigns": sum(1 for c in state.campaigns if c.status == CampaignStatus.ACTIVE),
            "emailsPending": count(OutreachStatus.PENDING_APPROVAL),
            "emailsApproved": count(OutreachStatus.APPROVED),
            "emailsSent": count(OutreachStatus.SENT),
            "emailsReplied": count(OutreachStatus.REPLIED),
            "outletsTargeted": len(state.outlets),
            "contactsReached": len(state.contacts),
        }

    # ============================================
    # DEMO DATA
    # ============================================

    def seed_demo_data(self) -> AppState:
        """
        Replace everything except the AI config with a small sample workspace,
        including emails in every status (the only place `sent`/`replied`
        appear without a manual mark).
        """
        from prnow.modules.outreach.demo_data import build_demo_state

        def change(state: AppState) -> AppState:
            demo = build_demo_state()
            demo.ai_config = state.ai_config
            demo.email_style_guide = state.email_style_guide
            for field_name in AppState.model_fields:
                setattr(state, field_name, getattr(demo, field_name))
            return state

        logger.info("Seeding demo data")
        return self._mutate(change)
