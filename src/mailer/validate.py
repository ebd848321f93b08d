"""
Syntactic validators for request fields and settings.

Every predicate is ``str -> bool`` and rejects leading or trailing whitespace
unconditionally. Patterns are matched with ``re.fullmatch`` so a trailing
newline can never slip past an anchored ``$``.
"""

from __future__ import annotations

import re

AWS_REGIONS: frozenset[str] = frozenset(
    {
        "ap-northeast-1",
        "ap-northeast-2",
        "ap-south-1",
        "ap-southeast-1",
        "ap-southeast-2",
        "ca-central-1",
        "eu-central-1",
        "eu-west-1",
        "eu-west-2",
        "sa-east-1",
        "us-east-1",
        "us-east-2",
        "us-west-1",
        "us-west-2",
    }
)

PROVIDERS: frozenset[str] = frozenset({"mock", "ses", "smtp"})

SENDGRID_API_KEY_LENGTH = 69

_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"

_EMAIL_ADDRESS = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]{1,64}"
    rf"@{_LABEL}(?:\.{_LABEL})+"
)
_HOSTNAME = re.compile(rf"{_LABEL}(?:\.{_LABEL})*")
_IPV4 = re.compile(r"[0-9]{1,3}(?:\.[0-9]{1,3}){3}")
_NUMERIC_LABELS = re.compile(r"[0-9.]+")
_BASE_URI = re.compile(
    r"https?://[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*(?::[0-9]{1,5})?/(?:[A-Za-z0-9._~-]+/)*"
)
_AWS_ACCESS = re.compile(r"[A-Z0-9]+")
_AWS_SECRET = re.compile(r"[A-Za-z0-9+/=]+")
_SENDGRID_API_KEY = re.compile(rf"[A-Za-z0-9._]{{{SENDGRID_API_KEY_LENGTH}}}")


def _is_trimmed(value: str) -> bool:
    return bool(value) and value == value.strip()


def _matches(pattern: re.Pattern[str], value: str) -> bool:
    return _is_trimmed(value) and pattern.fullmatch(value) is not None


def email_address(value: str) -> bool:
    """Validate a bare email address (no display name, no angle brackets)."""
    return _matches(_EMAIL_ADDRESS, value)


def host(value: str) -> bool:
    """Validate a hostname or dotted-quad IPv4 literal without port or path.

    All-numeric values must be a dotted quad with every octet in 0-255.
    """
    if _matches(_NUMERIC_LABELS, value):
        return _IPV4.fullmatch(value) is not None and all(
            int(octet) <= 255 for octet in value.split(".")
        )
    return _matches(_HOSTNAME, value)


def base_uri(value: str) -> bool:
    """Validate an http(s) base URI.

    The URI must end with exactly one ``/`` and carry no query string or
    fragment. Path segments cannot contain ``:``, so a nested URI such as
    ``http://a/http://b/`` is rejected.
    """
    return _matches(_BASE_URI, value)


def provider(value: str) -> bool:
    """Validate a provider name, case-sensitive."""
    return value in PROVIDERS


def sender_name(value: str) -> bool:
    """Validate a sender display name: printable, no ``@``."""
    return _is_trimmed(value) and value.isprintable() and "@" not in value


def aws_region(value: str) -> bool:
    """Validate an AWS region against the supported allow-list."""
    return value in AWS_REGIONS


def aws_access(value: str) -> bool:
    return _matches(_AWS_ACCESS, value)


def aws_secret(value: str) -> bool:
    return _matches(_AWS_SECRET, value)


def sendgrid_api_key(value: str) -> bool:
    return _matches(_SENDGRID_API_KEY, value)
