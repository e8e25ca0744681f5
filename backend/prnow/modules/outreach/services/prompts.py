"""
Prompt builders for the outreach operations.

Every builder returns (system_prompt, user_prompt). The response shape each
prompt asks for is what the matching coercion in
outreach_intelligence_service expects.
"""
from typing import List, Optional, Tuple

from prnow.modules.outreach.models import Contact, Outlet, ProjectProfile
from prnow.shared.core.constants import DISCOVERY_MAX_OUTLETS, DISCOVERY_MIN_OUTLETS

Prompt = Tuple[str, str]


# ============================================
# SYSTEM PROMPTS
# ============================================

DISCOVER_SYSTEM_PROMPT = (
    "You are a PR research assistant. Given a project profile and target niches, suggest "
    "relevant media outlets, blogs, newsletters, podcasts, and YouTube channels that might "
    "cover this project. Focus on a mix of large outlets and smaller niche ones. Return JSON array."
)

CONTACTS_SYSTEM_PROMPT = (
    "You are a PR research assistant. Extract real journalist/editor contact information from "
    "web search results. Only include contacts you can verify from the search results. Do NOT "
    "make up or hallucinate any names, emails, or roles. If you cannot find real contacts, "
    "return an empty array. For emails, only include ones that actually appeared in the search results."
)

INDIVIDUAL_SYSTEM_PROMPT = (
    "You are a PR copywriter. Draft a personalized, compelling pitch email to a journalist. "
    "Be concise, relevant to their beat, and lead with value. Don't be salesy, be human and "
    "direct. The email should feel like it was written specifically for this person."
)

PUBLICATION_SYSTEM_PROMPT = (
    "You are a PR copywriter. Draft a publication-level pitch email. This goes to an editorial "
    "team or tips inbox, so it should be more formal and newsworthy than an individual pitch. "
    "Focus on the story angle, not just the product. Include data points and a clear hook."
)


def with_style_guide(system_prompt: str, style_guide: Optional[str]) -> str:
    """Append the user's style guide verbatim."""
    if not style_guide or not style_guide.strip():
        return system_prompt
    return f"{system_prompt}\n\nFollow this writing style guide:\n{style_guide}"


def _project_block(profile: ProjectProfile) -> str:
    return (
        f"Project: {profile.name}\n"
        f"Tagline: {profile.tagline}\n"
        f"Brief: {profile.brief}\n"
        f"Key achievements: {'; '.join(profile.achievements)}\n"
        f"Website: {profile.website or 'N/A'}"
    )


# ============================================
# BUILDERS
# ============================================

def build_discover_prompt(
    profile: ProjectProfile,
    target_niches: List[str],
    existing_outlet_names: List[str],
) -> Prompt:
    existing = ", ".join(existing_outlet_names) if existing_outlet_names else "None"
    user_prompt = f"""Project: {profile.name}
Description: {profile.brief}
Category: {profile.category}
Target niches: {', '.join(target_niches)}
Already targeting: {existing}

Return a JSON array of {DISCOVERY_MIN_OUTLETS}-{DISCOVERY_MAX_OUTLETS} NEW outlets (not already listed) with this shape:
[{{"name": "...", "type": "publication|blog|podcast|newsletter|youtube", "niche": "...", "url": "...", "audienceSize": "...", "relevanceScore": 0-100}}]

Only return the JSON array, no other text."""
    return DISCOVER_SYSTEM_PROMPT, user_prompt


def _contacts_output_format(outlet: Outlet) -> str:
    return f"""Return a JSON array (can be empty if no real contacts found):
[{{"name": "...", "email": "...", "role": "...", "outlet": "{outlet.name}", "outletId": "{outlet.id}", "beat": "...", "linkedIn": "..."}}]

Only return the JSON array, no other text."""


def build_contact_search_queries(profile: ProjectProfile, outlet: Outlet) -> List[str]:
    return [
        f"{outlet.name} journalist editor contact email {outlet.niche}".strip(),
        f"{outlet.name} staff writers reporters {profile.category}".strip(),
    ]


def build_contacts_from_results_prompt(
    profile: ProjectProfile,
    outlet: Outlet,
    search_context: str,
) -> Prompt:
    user_prompt = f"""I need to find real journalists/editors at {outlet.name} who cover {outlet.niche or profile.category}.

Here are web search results:
---
{search_context}
---

From ONLY the information in the search results above, extract real contacts. Do NOT invent any details.
If an email is not visible in the results, set email to an empty string.

{_contacts_output_format(outlet)}"""
    return CONTACTS_SYSTEM_PROMPT, user_prompt


def build_contacts_web_search_prompt(profile: ProjectProfile, outlet: Outlet) -> Prompt:
    """For providers with a built-in web-search tool: the model runs the searches."""
    system_prompt = CONTACTS_SYSTEM_PROMPT.replace("from web search results", "using web search")
    user_prompt = f"""Search the web for real journalists/editors at {outlet.name} who cover {outlet.niche or profile.category}.
{f"Outlet website: {outlet.url}" if outlet.url else ""}

Only report people and emails you actually found in search results. Do NOT invent any details.
If an email is not visible in the results, set email to an empty string.

{_contacts_output_format(outlet)}"""
    return system_prompt, user_prompt


def build_individual_email_prompt(
    profile: ProjectProfile,
    contact: Contact,
    style_guide: Optional[str] = None,
) -> Prompt:
    user_prompt = f"""{_project_block(profile)}

Contact: {contact.name}, {contact.role} at {contact.outlet}
Their beat: {contact.beat or 'General'}

Write the pitch email. Return JSON:
{{"subject": "...", "body": "..."}}

Only return the JSON, no other text."""
    return with_style_guide(INDIVIDUAL_SYSTEM_PROMPT, style_guide), user_prompt


def build_publication_email_prompt(
    profile: ProjectProfile,
    outlet: Outlet,
    placeholder_email: str,
    style_guide: Optional[str] = None,
) -> Prompt:
    user_prompt = f"""{_project_block(profile)}

Publication: {outlet.name} ({outlet.type.value}, niche: {outlet.niche})

Write a formal pitch for the editorial team. Return JSON:
{{"subject": "...", "body": "...", "contactName": "Editorial Team", "contactEmail": "{placeholder_email}"}}

Only return the JSON, no other text."""
    return with_style_guide(PUBLICATION_SYSTEM_PROMPT, style_guide), user_prompt
