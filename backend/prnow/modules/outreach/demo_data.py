"""
Sample workspace for trying the app without an AI key.
"""
from datetime import timedelta

from prnow.modules.outreach.models import (
    AppState,
    Campaign,
    CampaignFrequency,
    CampaignStatus,
    Contact,
    Outlet,
    OutletType,
    OutreachEmail,
    OutreachStatus,
    OutreachType,
    ProjectProfile,
)
from prnow.shared.models import utc_now


def build_demo_state() -> AppState:
    now = utc_now()

    profile = ProjectProfile(
        name="Tidepool",
        tagline="Offline-first notes for field researchers",
        brief=(
            "Tidepool syncs structured field notes, photos and GPS tracks across "
            "devices without a network connection."
        ),
        achievements=["12,000 monthly active researchers", "Used by 40 university labs"],
        website="https://tidepool.example.com",
        category="Productivity / Science",
    )

    outlets = [
        Outlet(
            name="The Verge", type=OutletType.PUBLICATION, niche="Consumer tech",
            url="https://www.theverge.com", audience_size="35M monthly",
            relevance_score=72, is_user_picked=True, is_discovered=False,
        ),
        Outlet(
            name="Nature Careers", type=OutletType.PUBLICATION, niche="Research tools",
            url="https://www.nature.com/naturecareers", audience_size="3M monthly",
            relevance_score=88, is_user_picked=True, is_discovered=True,
        ),
        Outlet(
            name="Field Notes Weekly", type=OutletType.NEWSLETTER, niche="Field science",
            audience_size="18K subscribers", relevance_score=91,
            is_user_picked=False, is_discovered=True,
        ),
    ]

    contacts = [
        Contact(
            name="Jordan Reyes", email="jordan.reyes@example.com", role="Senior Reporter",
            outlet=outlets[0].name, outlet_id=outlets[0].id, beat="Apps and software",
        ),
        Contact(
            name="Sam Okafor", email="", role="Editor",
            outlet=outlets[1].name, outlet_id=outlets[1].id, beat="Lab technology",
        ),
    ]

    campaign = Campaign(
        name="Launch week",
        frequency=CampaignFrequency.ONCE,
        status=CampaignStatus.ACTIVE,
        target_outlets=[o.id for o in outlets[:2]],
        target_niches=["Research tools", "Consumer tech"],
        created_at=now - timedelta(days=3),
    )

    def email(contact: Contact, status: OutreachStatus, subject: str, **extra) -> OutreachEmail:
        return OutreachEmail(
            campaign_id=campaign.id,
            contact_id=contact.id,
            contact_name=contact.name,
            contact_email=contact.email,
            outlet_name=contact.outlet,
            type=OutreachType.INDIVIDUAL,
            subject=subject,
            body=f"Hi {contact.name},\n\n{profile.brief}\n\nWould you be open to a quick look?\n\nBest regards",
            status=status,
            **extra,
        )

    emails = [
        email(contacts[0], OutreachStatus.PENDING_APPROVAL, "Field notes that work without signal"),
        email(contacts[1], OutreachStatus.APPROVED, "A note-taking tool built for lab fieldwork",
              approved_at=now - timedelta(days=1)),
        email(contacts[0], OutreachStatus.SENT, "Tidepool: offline-first notes",
              approved_at=now - timedelta(days=2), sent_at=now - timedelta(days=2)),
        email(contacts[1], OutreachStatus.REPLIED, "40 labs now take notes offline",
              approved_at=now - timedelta(days=3), sent_at=now - timedelta(days=3),
              notes="Asked for a demo next week"),
        OutreachEmail(
            campaign_id=campaign.id,
            contact_name="Editorial Team",
            contact_email="tips@theverge.example.com",
            outlet_name=outlets[0].name,
            type=OutreachType.PUBLICATION,
            subject="Story pitch: Tidepool",
            body="Dear Editorial Team,\n\n" + profile.brief + "\n\nRegards",
            status=OutreachStatus.REJECTED,
            email_is_placeholder=True,
        ),
    ]

    return AppState(
        project_profile=profile,
        setup_complete=True,
        outlets=outlets,
        contacts=contacts,
        emails=emails,
        campaigns=[campaign],
    )
