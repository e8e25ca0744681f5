"""
Centralized Constants for the PR Now backend.
All hardcoded values should be defined here for easy maintenance.
"""

# ============================================
# AI PROVIDER ENDPOINTS
# ============================================
ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_API_VERSION = "2023-06-01"
OPENAI_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
GOOGLE_GENERATE_CONTENT_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

# Serper web search (contact finding for providers without a search tool)
SERPER_SEARCH_URL = "https://google.serper.dev/search"
SERPER_RESULTS_PER_QUERY = 10

# ============================================
# AI MODEL CONFIGURATION
# ============================================
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_GOOGLE_MODEL = "gemini-2.0-flash"

DEFAULT_MAX_TOKENS = 2048
SEARCH_MAX_TOKENS = 4096

ANTHROPIC_WEB_SEARCH_TOOL_TYPE = "web_search_20250305"
ANTHROPIC_WEB_SEARCH_MAX_USES = 5

# ============================================
# CAMPAIGN GENERATION LIMITS
# ============================================
MAX_INDIVIDUAL_DRAFTS_PER_RUN = 5
MAX_PUBLICATION_DRAFTS_PER_RUN = 3

# ============================================
# OUTLETS
# ============================================
MANUAL_OUTLET_RELEVANCE_SCORE = 80
DISCOVERY_MIN_OUTLETS = 5
DISCOVERY_MAX_OUTLETS = 8

# ============================================
# PERSISTED STATE
# ============================================
STATE_SCHEMA_VERSION = 1
