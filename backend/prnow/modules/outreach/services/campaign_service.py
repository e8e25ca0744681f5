"""
Campaign Service
Batch email drafting for a campaign.

Drafts run in a bounded pool (asyncio.Semaphore, DRAFT_CONCURRENCY wide).
One failed draft never aborts the batch: results are reported as
{success_count, failed_count, errors, emails} and every successful draft is
stored as soon as it completes.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from prnow.modules.ai_gateway.models import AIConfig
from prnow.modules.outreach.models import (
    CampaignStatus,
    Contact,
    EmailDraft,
    Outlet,
    OutreachType,
    ProjectProfile,
)
from prnow.modules.outreach.repositories import OutreachStore
from prnow.modules.outreach.services.outreach_intelligence_service import (
    OutreachIntelligenceService,
    outreach_intelligence_service,
)
from prnow.shared.core.config import settings
from prnow.shared.core.constants import MAX_INDIVIDUAL_DRAFTS_PER_RUN, MAX_PUBLICATION_DRAFTS_PER_RUN
from prnow.shared.utils.exceptions import InvalidStatusTransitionError

logger = logging.getLogger("campaign_service")

# Campaigns in these states may be (re)generated; paused ones must be resumed first
GENERATABLE_STATUSES = {CampaignStatus.DRAFT, CampaignStatus.ACTIVE}

DraftCallback = Callable[[EmailDraft], Any]


class CampaignService:

    def __init__(
        self,
        intelligence: Optional[OutreachIntelligenceService] = None,
        concurrency: Optional[int] = None,
    ):
        self.intelligence = intelligence or outreach_intelligence_service
        self.concurrency = max(1, concurrency or settings.DRAFT_CONCURRENCY)

    async def draft_batch(
        self,
        config: AIConfig,
        profile: ProjectProfile,
        campaign_id: str,
        contacts: List[Contact],
        outlets: List[Outlet],
        style_guide: Optional[str] = None,
        on_draft: Optional[DraftCallback] = None,
    ) -> Dict[str, Any]:
        """
        Draft one individual email per contact and one publication email per
        outlet (capped per run). Nothing is stored unless `on_draft` does it.
        """
        contacts = contacts[:MAX_INDIVIDUAL_DRAFTS_PER_RUN]
        outlets = outlets[:MAX_PUBLICATION_DRAFTS_PER_RUN]
        semaphore = asyncio.Semaphore(self.concurrency)
        results: Dict[str, Any] = {"success_count": 0, "failed_count": 0, "errors": [], "emails": []}

        async def run_one(
            kind: OutreachType,
            target_id: str,
            target_name: str,
            make_draft: Callable[[], Awaitable[EmailDraft]],
        ) -> None:
            async with semaphore:
                try:
                    draft = await make_draft()
                except Exception as e:
                    logger.error(f"{kind.value} draft for {target_name} failed: {e}")
                    results["failed_count"] += 1
                    results["errors"].append({
                        "type": kind.value,
                        "target_id": target_id,
                        "target_name": target_name,
                        "error": str(e),
                    })
                    return

            stored = on_draft(draft) if on_draft is not None else draft
            results["success_count"] += 1
            results["emails"].append(stored)

        tasks = [
            run_one(
                OutreachType.INDIVIDUAL, contact.id, contact.name,
                lambda c=contact: self.intelligence.draft_individual_email(
                    config, profile, c, campaign_id, style_guide
                ),
            )
            for contact in contacts
        ] + [
            run_one(
                OutreachType.PUBLICATION, outlet.id, outlet.name,
                lambda o=outlet: self.intelligence.draft_publication_email(
                    config, profile, o, campaign_id, style_guide
                ),
            )
            for outlet in outlets
        ]

        logger.info(
            f"Drafting {len(contacts)} individual + {len(outlets)} publication emails "
            f"(concurrency {self.concurrency})"
        )
        await asyncio.gather(*tasks)
        logger.info(f"Drafting complete: {results['success_count']} success, {results['failed_count']} failed")
        return results

    async def generate_campaign_emails(self, store: OutreachStore, campaign_id: str) -> Dict[str, Any]:
        """
        Draft emails for every contact at the campaign's target outlets plus
        one editorial pitch per target outlet, store them, then activate the
        campaign unless every attempted draft failed.
        """
        campaign = store.get_campaign(campaign_id)
        if campaign.status not in GENERATABLE_STATUSES:
            raise InvalidStatusTransitionError(
                "Campaign", campaign_id, campaign.status.value, CampaignStatus.ACTIVE.value
            )
        config, profile = store.require_setup()

        target_ids = set(campaign.target_outlets)
        contacts = store.contacts_for_outlets(target_ids)
        outlets = [o for o in store.list_outlets() if o.id in target_ids]

        results = await self.draft_batch(
            config,
            profile,
            campaign_id,
            contacts,
            outlets,
            style_guide=store.style_guide,
            on_draft=store.add_email,
        )

        if results["success_count"] or not results["failed_count"]:
            campaign = store.activate_campaign(campaign_id)
        else:
            logger.warning(f"Campaign {campaign_id}: every draft failed, status left as {campaign.status.value}")

        results["campaign"] = campaign
        return results


# Singleton instance for easy import
campaign_service = CampaignService()
