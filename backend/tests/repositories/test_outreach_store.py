# backend/tests/repositories/test_outreach_store.py
"""
OutreachStore tests.

Covers:
1. Outlet lifecycle (manual add, discovery, confirm)
2. Email state machine: forward-only, terminal states, idempotence
3. Bulk approve/reject with partial eligibility
4. Campaign transitions and derived counters
5. Setup guard and style guide
6. Weak references (removing outlets/contacts)
"""
import pytest

from prnow.modules.outreach.models import (
    CampaignStatus,
    ContactDraft,
    DEFAULT_STYLE_GUIDE,
    EmailDraft,
    OutletDraft,
    OutreachStatus,
    OutreachType,
)
from prnow.shared.utils.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
)


def make_email(store, campaign_id="camp-1", contact_id=None, contact_name="Alex", contact_email="alex@x.com"):
    return store.add_email(EmailDraft(
        campaign_id=campaign_id,
        contact_id=contact_id,
        contact_name=contact_name,
        contact_email=contact_email,
        outlet_name="TechCrunch",
        type=OutreachType.INDIVIDUAL,
        subject="Pitch",
        body="Hi",
    ))


# ============================================
# OUTLETS
# ============================================

def test_manual_outlet_is_picked_with_default_relevance(memory_store):
    outlet = memory_store.add_outlet(OutletDraft(name="Wired", is_discovered=True))

    assert outlet.is_user_picked is True
    assert outlet.is_discovered is False
    assert outlet.relevance_score == 80
    assert memory_store.list_outlets("picked") == [outlet]


def test_discovered_outlets_stay_unpicked_until_confirmed(memory_store):
    a, b = memory_store.add_discovered_outlets([
        OutletDraft(name="Wired", is_user_picked=True),
        OutletDraft(name="Verge"),
    ])

    assert not a.is_user_picked and a.is_discovered
    assert memory_store.list_outlets("picked") == []

    confirmed = memory_store.confirm_outlet(b.id)
    again = memory_store.confirm_outlet(b.id)

    assert confirmed.is_user_picked and again.is_user_picked
    assert [o.name for o in memory_store.list_outlets("picked")] == ["Verge"]
    assert len(memory_store.list_outlets("discovered")) == 2


def test_confirm_unknown_outlet_raises(memory_store):
    with pytest.raises(EntityNotFoundError):
        memory_store.confirm_outlet("missing")


def test_removing_outlet_keeps_its_contacts(memory_store):
    outlet = memory_store.add_outlet(OutletDraft(name="Wired"))
    memory_store.add_contacts([ContactDraft(name="Jo", outlet="Wired", outlet_id=outlet.id)])

    memory_store.remove_outlet(outlet.id)

    assert memory_store.list_outlets() == []
    assert [c.name for c in memory_store.contacts_for_outlets([outlet.id])] == ["Jo"]


# ============================================
# EMAIL STATE MACHINE
# ============================================

def test_new_emails_are_pending_and_newest_first(memory_store):
    first = make_email(memory_store)
    second = make_email(memory_store)

    assert first.status == OutreachStatus.PENDING_APPROVAL
    assert [e.id for e in memory_store.list_emails()] == [second.id, first.id]


def test_bulk_approve_updates_exactly_the_given_ids(memory_store):
    a, b, c = (make_email(memory_store) for _ in range(3))

    results = memory_store.bulk_approve_emails([a.id, c.id])

    assert results["updated"] == [a.id, c.id]
    assert results["skipped"] == []
    assert memory_store.get_email(a.id).status == OutreachStatus.APPROVED
    assert memory_store.get_email(b.id).status == OutreachStatus.PENDING_APPROVAL
    assert memory_store.get_email(c.id).status == OutreachStatus.APPROVED
    assert memory_store.get_email(a.id).approved_at is not None


def test_bulk_reject_skips_ineligible_and_missing_ids(memory_store):
    a, b = make_email(memory_store), make_email(memory_store)
    memory_store.approve_email(b.id)
    memory_store.update_email_status(b.id, OutreachStatus.SENT)

    results = memory_store.bulk_reject_emails([a.id, b.id, "missing"])

    assert results["updated"] == [a.id]
    assert [s["email_id"] for s in results["skipped"]] == [b.id, "missing"]
    assert memory_store.get_email(b.id).status == OutreachStatus.SENT


def test_rejected_email_cannot_be_approved(memory_store):
    email = make_email(memory_store)
    memory_store.reject_email(email.id)

    with pytest.raises(InvalidStatusTransitionError):
        memory_store.approve_email(email.id)
    assert memory_store.get_email(email.id).status == OutreachStatus.REJECTED


def test_sent_email_cannot_go_back(memory_store):
    email = make_email(memory_store)
    memory_store.approve_email(email.id)
    sent = memory_store.update_email_status(email.id, OutreachStatus.SENT)

    assert sent.sent_at is not None
    for target in (OutreachStatus.APPROVED, OutreachStatus.PENDING_APPROVAL, OutreachStatus.REJECTED):
        with pytest.raises(InvalidStatusTransitionError):
            memory_store.update_email_status(email.id, target)

    replied = memory_store.update_email_status(email.id, OutreachStatus.REPLIED)
    assert replied.status == OutreachStatus.REPLIED
    assert replied.sent_at == sent.sent_at


def email_in_status(store, status):
    """Walk a fresh email forward through the allowed path to `status`."""
    email = make_email(store)
    path = {
        OutreachStatus.REJECTED: [OutreachStatus.REJECTED],
        OutreachStatus.APPROVED: [OutreachStatus.APPROVED],
        OutreachStatus.REPLIED: [OutreachStatus.APPROVED, OutreachStatus.SENT, OutreachStatus.REPLIED],
    }[status]
    for step in path:
        store.update_email_status(email.id, step)
    return store.get_email(email.id)


TERMINAL_MOVES = [
    (terminal, target)
    for terminal in (OutreachStatus.REJECTED, OutreachStatus.REPLIED)
    for target in OutreachStatus
    if target != terminal
]


@pytest.mark.parametrize("terminal,target", TERMINAL_MOVES)
def test_terminal_email_rejects_every_other_status(memory_store, terminal, target):
    email = email_in_status(memory_store, terminal)

    with pytest.raises(InvalidStatusTransitionError):
        memory_store.update_email_status(email.id, target)
    assert memory_store.get_email(email.id) == email


@pytest.mark.parametrize("terminal", [OutreachStatus.REJECTED, OutreachStatus.REPLIED])
def test_terminal_email_is_skipped_by_bulk_and_single_mutators(memory_store, terminal):
    email = email_in_status(memory_store, terminal)

    bulk_mutators = [memory_store.bulk_approve_emails]
    if terminal == OutreachStatus.REPLIED:
        # re-rejecting a rejected email is an idempotent no-op, not a skip
        bulk_mutators.append(memory_store.bulk_reject_emails)

    for bulk in bulk_mutators:
        result = bulk([email.id])
        assert result["updated"] == []
        assert [s["email_id"] for s in result["skipped"]] == [email.id]

    if terminal == OutreachStatus.REPLIED:
        with pytest.raises(InvalidStatusTransitionError):
            memory_store.reject_email(email.id)
    with pytest.raises(InvalidStatusTransitionError):
        memory_store.approve_email(email.id)
    assert memory_store.get_email(email.id) == email


def test_approved_email_cannot_be_rejected(memory_store):
    email = email_in_status(memory_store, OutreachStatus.APPROVED)

    with pytest.raises(InvalidStatusTransitionError):
        memory_store.reject_email(email.id)
    result = memory_store.bulk_reject_emails([email.id])

    assert result["updated"] == []
    assert result["skipped"][0]["email_id"] == email.id
    assert memory_store.get_email(email.id).status == OutreachStatus.APPROVED


def test_pending_email_cannot_be_marked_sent(memory_store):
    email = make_email(memory_store)
    with pytest.raises(InvalidStatusTransitionError):
        memory_store.update_email_status(email.id, OutreachStatus.SENT)


def test_approve_is_idempotent_and_restamps(memory_store):
    email = make_email(memory_store)

    first = memory_store.approve_email(email.id)
    second = memory_store.approve_email(email.id)

    assert first.status == second.status == OutreachStatus.APPROVED
    assert second.approved_at >= first.approved_at


def test_reject_is_idempotent(memory_store):
    email = make_email(memory_store)
    memory_store.reject_email(email.id)
    assert memory_store.reject_email(email.id).status == OutreachStatus.REJECTED


def test_resolve_recipient_prefers_live_contact(memory_store):
    contact = memory_store.add_contact(ContactDraft(name="Alex Kim", email="alex@new.com"))
    email = make_email(memory_store, contact_id=contact.id, contact_name="Alex", contact_email="alex@old.com")

    assert memory_store.resolve_recipient(email) == ("Alex Kim", "alex@new.com")

    memory_store.remove_contact(contact.id)
    assert memory_store.resolve_recipient(email) == ("Alex", "alex@old.com")


def test_notes_and_remove(memory_store):
    email = make_email(memory_store)
    assert memory_store.update_email_notes(email.id, "Follow up Friday").notes == "Follow up Friday"

    memory_store.remove_email(email.id)
    with pytest.raises(EntityNotFoundError):
        memory_store.get_email(email.id)


def test_list_emails_filters_combine(memory_store):
    a, b = make_email(memory_store), make_email(memory_store, campaign_id="camp-2")
    memory_store.approve_email(b.id)

    assert memory_store.list_emails(status=OutreachStatus.APPROVED) == [memory_store.get_email(b.id)]
    assert memory_store.list_emails(type=OutreachType.PUBLICATION) == []
    assert [e.id for e in memory_store.list_emails(campaign_id="camp-1")] == [a.id]


# ============================================
# CAMPAIGNS
# ============================================

def test_campaign_lifecycle(memory_store):
    campaign = memory_store.create_campaign("Launch", target_outlets=["o1"], target_niches=["AI", " "])
    assert campaign.status == CampaignStatus.DRAFT
    assert campaign.target_niches == ["AI"]

    with pytest.raises(InvalidStatusTransitionError):
        memory_store.toggle_campaign(campaign.id)

    assert memory_store.activate_campaign(campaign.id).status == CampaignStatus.ACTIVE
    assert memory_store.toggle_campaign(campaign.id).status == CampaignStatus.PAUSED
    assert memory_store.toggle_campaign(campaign.id).status == CampaignStatus.ACTIVE

    with pytest.raises(InvalidStatusTransitionError):
        memory_store.update_campaign_status(campaign.id, CampaignStatus.DRAFT)


def test_campaign_stats_are_derived_from_emails(memory_store):
    campaign = memory_store.create_campaign("Launch")
    a, b, c = (make_email(memory_store, campaign_id=campaign.id) for _ in range(3))
    make_email(memory_store, campaign_id="other")
    memory_store.approve_email(a.id)
    memory_store.approve_email(b.id)
    memory_store.update_email_status(b.id, OutreachStatus.SENT)

    stats = memory_store.campaign_stats(campaign.id)

    assert (stats.total_sent, stats.total_approved, stats.total_pending) == (1, 1, 1)


def test_removing_campaign_keeps_emails(memory_store):
    campaign = memory_store.create_campaign("Launch")
    email = make_email(memory_store, campaign_id=campaign.id)

    memory_store.remove_campaign(campaign.id)

    assert memory_store.list_campaigns() == []
    assert memory_store.get_email(email.id).campaign_id == campaign.id


# ============================================
# SETUP
# ============================================

def test_require_setup_needs_config_and_profile(memory_store, anthropic_config, sample_profile):
    with pytest.raises(ConfigurationError) as exc:
        memory_store.require_setup()
    assert exc.value.missing == "aiConfig"

    memory_store.set_ai_config(anthropic_config)
    with pytest.raises(ConfigurationError) as exc:
        memory_store.complete_setup()
    assert exc.value.missing == "projectProfile"

    memory_store.set_project_profile(sample_profile)
    memory_store.complete_setup()
    assert memory_store.state.setup_complete is True
    assert memory_store.require_setup() == (anthropic_config, sample_profile)


def test_style_guide_set_and_reset(memory_store):
    assert memory_store.style_guide == DEFAULT_STYLE_GUIDE
    memory_store.set_style_guide("Short and plain.")
    assert memory_store.style_guide == "Short and plain."
    assert memory_store.reset_style_guide() == DEFAULT_STYLE_GUIDE


def test_mutations_do_not_touch_previous_snapshots(memory_store):
    before = memory_store.state
    memory_store.add_outlet(OutletDraft(name="Wired"))
    assert before.outlets == []
    assert len(memory_store.state.outlets) == 1


def test_dashboard_and_demo_seed(configured_store, anthropic_config):
    state = configured_store.seed_demo_data()

    stats = configured_store.dashboard_stats()
    assert state.ai_config == anthropic_config
    assert stats["totalCampaigns"] == 1
    assert stats["emailsSent"] == 1
    assert stats["emailsReplied"] == 1
    assert stats["emailsPending"] == 1
    assert stats["outletsTargeted"] == 3
