"""DNS record clients used by the solver."""

from __future__ import annotations

from gandi_webhook.dns.base import DnsRecordClient
from gandi_webhook.dns.gandi import GandiLiveDnsClient

__all__ = ["DnsRecordClient", "GandiLiveDnsClient"]
