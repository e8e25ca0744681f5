"""
Outreach Intelligence Service
Discovers outlets, finds contacts and drafts pitch emails through the
completion gateway.

Key patterns:
- Pure operations: nothing here touches the store; callers persist results
- Malformed model output never raises: parse_or_default + per-field coercion,
  drafting falls back to templated emails (_get_fallback_*)
- Provider HTTP/transport errors propagate to the caller untouched
- Contact finding is verified-only: web-search tool (Anthropic) or Serper
  results; no search capability -> CapabilityMismatchError before any call
"""
import logging
import re
from typing import Any, Dict, List, Optional

from prnow.modules.ai_gateway.models import AIConfig, CompletionOptions
from prnow.modules.ai_gateway.services.completion_gateway import CompletionGateway, completion_gateway
from prnow.modules.ai_gateway.services.search_client import SearchClient, search_client
from prnow.modules.outreach.models import (
    Contact,
    ContactDraft,
    EmailDraft,
    Outlet,
    OutletDraft,
    OutletType,
    OutreachStatus,
    OutreachType,
    ProjectProfile,
)
from prnow.modules.outreach.services.prompts import (
    build_contact_search_queries,
    build_contacts_from_results_prompt,
    build_contacts_web_search_prompt,
    build_discover_prompt,
    build_individual_email_prompt,
    build_publication_email_prompt,
)
from prnow.shared.core.constants import SEARCH_MAX_TOKENS
from prnow.shared.utils.exceptions import CapabilityMismatchError
from prnow.shared.utils.json_utils import (
    coerce_optional_str,
    coerce_score,
    coerce_str,
    expect_dict,
    expect_list,
    parse_or_default,
)

logger = logging.getLogger("outreach_intelligence_service")

EDITORIAL_TEAM = "Editorial Team"
PLACEHOLDER_EMAIL_DOMAIN = ".example.com"
SEARCH_KEY_REQUIRED_MESSAGE = "Search API key required. Add a Serper API key in Setup to find real contacts."


def publication_placeholder_email(outlet_name: str) -> str:
    """tips@<letters of the name>.example.com, e.g. "Tech Crunch!" -> tips@techcrunch.example.com"""
    slug = re.sub(r"[^a-z]", "", (outlet_name or "").lower()) or "outlet"
    return f"tips@{slug}{PLACEHOLDER_EMAIL_DOMAIN}"


def _is_placeholder_address(address: str) -> bool:
    return "@" in address and address.lower().endswith(PLACEHOLDER_EMAIL_DOMAIN)


class OutreachIntelligenceService:
    """
    LLM-backed PR research and copywriting.

    Usage:
        service = OutreachIntelligenceService()
        outlets = await service.discover_outlets(config, profile, ["AI"], [])
        email = await service.draft_individual_email(config, profile, contact, campaign_id)
    """

    def __init__(
        self,
        gateway: Optional[CompletionGateway] = None,
        search: Optional[SearchClient] = None,
    ):
        self.gateway = gateway or completion_gateway
        self.search = search or search_client

    # ============================================
    # OUTLET DISCOVERY
    # ============================================

    async def discover_outlets(
        self,
        config: AIConfig,
        profile: ProjectProfile,
        target_niches: List[str],
        existing_outlet_names: List[str],
    ) -> List[OutletDraft]:
        """
        Suggest new outlets. Results come back unpicked; names already in
        `existing_outlet_names` (or repeated in the response) are dropped.
        """
        system_prompt, user_prompt = build_discover_prompt(profile, target_niches, existing_outlet_names)
        text = await self.gateway.complete(config, system_prompt, user_prompt)

        items = expect_list(parse_or_default(text, []), key="outlets")
        seen = {name.strip().lower() for name in existing_outlet_names if name}
        drafts: List[OutletDraft] = []

        for item in items:
            draft = self._coerce_outlet(item)
            if draft is None:
                continue
            key = draft.name.lower()
            if key in seen:
                logger.info(f"Skipping duplicate outlet suggestion: {draft.name}")
                continue
            seen.add(key)
            drafts.append(draft)

        logger.info(f"Discovered {len(drafts)} new outlets ({len(items)} suggested)")
        return drafts

    @staticmethod
    def _coerce_outlet(item: Any) -> Optional[OutletDraft]:
        if not isinstance(item, dict):
            return None

        try:
            outlet_type = OutletType(coerce_str(item.get("type")).lower())
        except ValueError:
            outlet_type = OutletType.PUBLICATION

        return OutletDraft(
            name=coerce_str(item.get("name"), "Unknown"),
            type=outlet_type,
            niche=coerce_str(item.get("niche")),
            url=coerce_optional_str(item.get("url")),
            audience_size=coerce_optional_str(item.get("audienceSize", item.get("audience_size"))),
            relevance_score=coerce_score(item.get("relevanceScore", item.get("relevance_score"))),
            is_user_picked=False,
            is_discovered=True,
        )

    # ============================================
    # CONTACT FINDING
    # ============================================

    async def find_contacts(
        self,
        config: AIConfig,
        profile: ProjectProfile,
        outlet: Outlet,
    ) -> List[ContactDraft]:
        """
        Find real journalists/editors at `outlet`.

        - Provider with a web-search tool: one search-augmented completion
        - Otherwise, with a Serper key: two searches, then a completion over
          the formatted results; emails not present in the results are blanked
        - Otherwise: CapabilityMismatchError, no request is made
        """
        search_context: Optional[str] = None

        if self.gateway.supports_search(config.provider):
            system_prompt, user_prompt = build_contacts_web_search_prompt(profile, outlet)
            options = CompletionOptions(want_search=True, max_tokens=SEARCH_MAX_TOKENS)
            text = await self.gateway.complete(config, system_prompt, user_prompt, options)

        elif config.search_api_key:
            blocks = []
            for query in build_contact_search_queries(profile, outlet):
                blocks.append(await self.search.search_text(config.search_api_key, query))
            search_context = "\n\n".join(blocks)

            system_prompt, user_prompt = build_contacts_from_results_prompt(profile, outlet, search_context)
            text = await self.gateway.complete(config, system_prompt, user_prompt)

        else:
            raise CapabilityMismatchError("contact search", config.provider.value, SEARCH_KEY_REQUIRED_MESSAGE)

        items = expect_list(parse_or_default(text, []), key="contacts")
        contacts = [
            contact for contact in (self._coerce_contact(item, outlet, search_context) for item in items)
            if contact is not None
        ]
        logger.info(f"Found {len(contacts)} contacts at {outlet.name}")
        return contacts

    @staticmethod
    def _coerce_contact(item: Any, outlet: Outlet, search_context: Optional[str]) -> Optional[ContactDraft]:
        if not isinstance(item, dict):
            return None

        name = coerce_str(item.get("name"), "Unknown")
        email = coerce_str(item.get("email"))
        if email and search_context is not None and email.lower() not in search_context.lower():
            logger.info(f"Dropping unverified email for {name} at {outlet.name}")
            email = ""

        return ContactDraft(
            name=name,
            email=email,
            role=coerce_str(item.get("role")),
            outlet=outlet.name,
            outlet_id=outlet.id,
            beat=coerce_optional_str(item.get("beat")),
            linked_in=coerce_optional_str(item.get("linkedIn", item.get("linked_in"))),
        )

    # ============================================
    # EMAIL DRAFTING
    # ============================================

    async def draft_individual_email(
        self,
        config: AIConfig,
        profile: ProjectProfile,
        contact: Contact,
        campaign_id: str,
        style_guide: Optional[str] = None,
    ) -> EmailDraft:
        """Personal pitch to one journalist. Unusable output -> templated email."""
        system_prompt, user_prompt = build_individual_email_prompt(profile, contact, style_guide)
        text = await self.gateway.complete(config, system_prompt, user_prompt)

        fallback = self._get_fallback_individual_email(profile, contact)
        parsed = expect_dict(parse_or_default(text, {}))
        if not parsed:
            logger.warning(f"Unparseable draft for {contact.name}, using fallback email")

        return EmailDraft(
            campaign_id=campaign_id,
            contact_id=contact.id,
            contact_name=contact.name,
            contact_email=contact.email,
            outlet_name=contact.outlet,
            type=OutreachType.INDIVIDUAL,
            subject=coerce_str(parsed.get("subject"), fallback["subject"]),
            body=coerce_str(parsed.get("body"), fallback["body"]),
            status=OutreachStatus.PENDING_APPROVAL,
        )

    async def draft_publication_email(
        self,
        config: AIConfig,
        profile: ProjectProfile,
        outlet: Outlet,
        campaign_id: str,
        style_guide: Optional[str] = None,
    ) -> EmailDraft:
        """
        Editorial pitch to an outlet's tips inbox. The address is always a
        placeholder on .example.com; the model may only suggest another one
        on that same domain.
        """
        placeholder = publication_placeholder_email(outlet.name)
        system_prompt, user_prompt = build_publication_email_prompt(profile, outlet, placeholder, style_guide)
        text = await self.gateway.complete(config, system_prompt, user_prompt)

        fallback = self._get_fallback_publication_email(profile)
        parsed = expect_dict(parse_or_default(text, {}))
        if not parsed:
            logger.warning(f"Unparseable draft for {outlet.name}, using fallback email")

        proposed = coerce_str(parsed.get("contactEmail"))
        contact_email = proposed if _is_placeholder_address(proposed) else placeholder

        return EmailDraft(
            campaign_id=campaign_id,
            contact_id=None,
            contact_name=coerce_str(parsed.get("contactName"), EDITORIAL_TEAM),
            contact_email=contact_email,
            outlet_name=outlet.name,
            type=OutreachType.PUBLICATION,
            subject=coerce_str(parsed.get("subject"), fallback["subject"]),
            body=coerce_str(parsed.get("body"), fallback["body"]),
            status=OutreachStatus.PENDING_APPROVAL,
            email_is_placeholder=True,
        )

    # ============================================
    # FALLBACKS
    # ============================================

    @staticmethod
    def _headline(profile: ProjectProfile) -> str:
        return f"{profile.name}: {profile.tagline}" if profile.tagline else profile.name

    def _get_fallback_individual_email(self, profile: ProjectProfile, contact: Contact) -> Dict[str, str]:
        """Templated pitch used when the model output is unusable"""
        return {
            "subject": f"Covering {self._headline(profile)}",
            "body": (
                f"Hi {contact.name},\n\n"
                f"I'm reaching out about {profile.name}. {profile.brief}\n\n"
                f"Would love to discuss further.\n\n"
                f"Best regards"
            ),
        }

    def _get_fallback_publication_email(self, profile: ProjectProfile) -> Dict[str, str]:
        data_points = ""
        if profile.achievements:
            data_points = "Key data points:\n" + "\n".join(f"- {a}" for a in profile.achievements) + "\n\n"
        return {
            "subject": f"Story pitch: {self._headline(profile)}",
            "body": (
                f"Dear {EDITORIAL_TEAM},\n\n"
                f"We'd like to share a story about {profile.name}. {profile.brief}\n\n"
                f"{data_points}"
                f"We'd welcome the opportunity to discuss this further.\n\n"
                f"Regards"
            ),
        }


# Singleton instance for easy import
outreach_intelligence_service = OutreachIntelligenceService()
