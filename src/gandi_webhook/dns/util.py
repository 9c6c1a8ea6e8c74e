"""DNS name helpers."""

from __future__ import annotations

from gandi_webhook.errors import DomainSplitError


def get_domain_and_entry(resolved_fqdn: str, resolved_zone: str) -> tuple[str, str]:
    """Return (entry, domain) for a challenge.

    Both arguments end with a dot. The entry is the FQDN with the zone suffix
    removed (e.g. "_acme-challenge.foo"), the domain is the zone without its
    trailing dot. An FQDN outside the zone is passed through unchanged.
    """
    entry = resolved_fqdn.removesuffix(resolved_zone).removesuffix(".")
    domain = resolved_zone.removesuffix(".")
    return entry, domain


def extract_root_and_subdomain(domain: str, entry: str) -> tuple[str, str]:
    """Split a zone into (root, subdomain) for the LiveDNS API.

    The root is always the last two labels of the domain; the subdomain is the
    entry followed by every label in front of the root. Multi-label public
    suffixes are not recognised: "example.co.uk" yields root "co.uk".

    Args:
        domain: Zone name without trailing dot (e.g. "a.b.example.com").
        entry: Record name relative to the zone (e.g. "_acme-challenge").

    Returns:
        Tuple of (root, subdomain), e.g. ("example.com", "_acme-challenge.a.b").
    """
    parts = domain.strip(".").split(".")
    if len(parts) < 2:
        raise DomainSplitError(f"Domain '{domain}' has no root domain")
    root = ".".join(parts[-2:])
    subdomain = ".".join([entry.strip("."), *parts[:-2]])
    return root, subdomain
