"""Exceptions raised by the solver and the Gandi LiveDNS client."""

from __future__ import annotations


class SolverError(Exception):
    """Base class for failures surfaced to the challenge-issuance controller."""


class ConfigDecodeError(SolverError):
    """The per-issuer solver config is not valid JSON of the expected shape."""


class SecretLookupError(SolverError):
    """The referenced Kubernetes Secret could not be read."""


class KeyNotFoundError(SecretLookupError):
    """The Secret exists but does not hold the referenced data key."""


class CredentialStoreConnectionError(SolverError):
    """A Kubernetes API client could not be constructed."""


class DomainSplitError(SolverError):
    """A zone has too few labels to derive a root domain from."""


class RecordLookupError(SolverError):
    """Looking up the TXT record failed for a reason other than absence."""


class RecordWriteError(SolverError):
    """Gandi rejected a create, update or delete call."""


class DnsApiError(Exception):
    """Error response (or transport failure) from the Gandi LiveDNS API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RecordNotFoundError(DnsApiError):
    """The requested record does not exist (HTTP 404)."""
