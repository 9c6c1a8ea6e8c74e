"""Abstract base class for DNS record clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Self

from gandi_webhook.models import DomainRecord


class DnsRecordClient(ABC):
    """Interface for the record operations the solver needs from a DNS provider.

    ``fqdn`` is always the root domain the records live under (e.g.
    "example.com") and ``name`` is relative to it (e.g. "_acme-challenge.foo").
    """

    def close(self) -> None:
        """Release resources. Override in subclasses that hold open connections."""

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @abstractmethod
    def get_record(self, fqdn: str, name: str, record_type: str) -> DomainRecord:
        """Return the record set, raising RecordNotFoundError when it does not exist."""

    @abstractmethod
    def create_record(self, fqdn: str, name: str, record_type: str, ttl: int, values: list[str]) -> None:
        """Create a new record set."""

    @abstractmethod
    def update_record(self, fqdn: str, name: str, record_type: str, ttl: int, values: list[str]) -> None:
        """Replace the TTL and values of an existing record set."""

    @abstractmethod
    def delete_record(self, fqdn: str, name: str, record_type: str) -> None:
        """Delete a record set."""
