"""
Shared Utility Functions
"""
from prnow.shared.utils.json_utils import (
    safe_json_parse,
    strip_code_fence,
    parse_or_default,
    expect_list,
    expect_dict,
    coerce_str,
    coerce_optional_str,
    coerce_score,
)
from prnow.shared.utils.exceptions import (
    ConfigurationError,
    ProviderHTTPError,
    ProviderTransportError,
    UnsupportedProviderError,
    CapabilityMismatchError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
)
from prnow.shared.utils.http_client import http_client_manager

__all__ = [
    "safe_json_parse",
    "strip_code_fence",
    "parse_or_default",
    "expect_list",
    "expect_dict",
    "coerce_str",
    "coerce_optional_str",
    "coerce_score",
    # Exceptions
    "ConfigurationError",
    "ProviderHTTPError",
    "ProviderTransportError",
    "UnsupportedProviderError",
    "CapabilityMismatchError",
    "EntityNotFoundError",
    "InvalidStatusTransitionError",
    "http_client_manager",
]
