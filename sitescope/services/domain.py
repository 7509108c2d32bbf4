"""Domain input validation and URL normalization."""

import re

from sitescope.exceptions import InvalidDomainError, MissingParameterError

DOMAIN_PATTERN = re.compile(r"[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}(?:/.*)?")
SCHEME_PATTERN = re.compile(r"^https?://")

MISSING_DOMAIN_MESSAGE = "Domain parameter is required"
INVALID_DOMAIN_MESSAGE = "Invalid domain format provided"


def has_scheme(domain: str) -> bool:
    return domain.startswith("http://") or domain.startswith("https://")


def validate_domain(domain: str | None) -> str:
    """Check a raw domain string and return the absolute URL to analyze.

    Accepts bare hosts (``example.com``), hosts with a path, or full
    ``http(s)://`` URLs. The pattern is deliberately loose: it only rejects
    input that can't be a hostname, not every invalid one.
    """
    if not domain:
        raise MissingParameterError(MISSING_DOMAIN_MESSAGE)
    if not DOMAIN_PATTERN.fullmatch(SCHEME_PATTERN.sub("", domain, count=1)):
        raise InvalidDomainError(INVALID_DOMAIN_MESSAGE)
    return domain if has_scheme(domain) else f"https://{domain}"
