"""
Custom Exceptions for PR Now.

Provider and transport failures propagate out of the domain operations; the
HTTP layer is the terminal catch point and maps each type to a status code.
Malformed model output has no exception here: the structured-output parser
absorbs it with a fallback value.
"""
from typing import Optional


class ConfigurationError(Exception):
    """
    Raised when an operation needs an AI credential or a project profile
    that has not been configured yet. Checked before any network request.
    """
    def __init__(self, message: str = None, missing: Optional[str] = None):
        self.missing = missing
        self.message = message or f"Missing configuration: {missing or 'setup incomplete'}."
        super().__init__(self.message)


class ProviderHTTPError(Exception):
    """
    Raised when a provider (or the search API) answers with a non-2xx status.
    Carries the status code and the raw body text so relays can forward both.
    """
    def __init__(self, provider: str, status_code: int, body: str):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        self.message = f"{provider} API error: {status_code}"
        super().__init__(self.message)


class ProviderTransportError(Exception):
    """Raised when the provider could not be reached at all (DNS, connect, timeout)."""
    def __init__(self, provider: str, reason: str = ""):
        self.provider = provider
        self.reason = reason
        self.message = f"Could not reach {provider} API" + (f": {reason}" if reason else "")
        super().__init__(self.message)


class UnsupportedProviderError(Exception):
    """Raised by the gateway for a provider it has no adapter for."""
    def __init__(self, provider: str):
        self.provider = provider
        self.message = f"Unknown provider: {provider}"
        super().__init__(self.message)


class CapabilityMismatchError(Exception):
    """
    Raised when an operation needs a capability the configured provider lacks,
    e.g. contact search without a web-search tool or a search API key.
    The message is meant to be shown to the user as-is.
    """
    def __init__(self, capability: str, provider: str, message: str = None):
        self.capability = capability
        self.provider = provider
        self.message = message or f"{provider} does not support {capability}."
        super().__init__(self.message)


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist in the store."""
    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.message = f"{entity_type} with ID {entity_id} not found."
        super().__init__(self.message)


class InvalidStatusTransitionError(Exception):
    """
    Raised when a status mutator would move an entity backwards or out of a
    terminal state.

    Example:
        An email in `rejected` cannot be approved.
        A `sent` email cannot go back to `approved`.
    """
    def __init__(self, entity_type: str, entity_id: str, current: str, target: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.current = current
        self.target = target
        self.message = f"{entity_type} {entity_id} cannot move from '{current}' to '{target}'."
        super().__init__(self.message)
