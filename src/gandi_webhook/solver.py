"""Gandi DNS-01 solver — presents and cleans up ACME challenge TXT records."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from kubernetes import client

from gandi_webhook.config import WebhookConfig
from gandi_webhook.dns.base import DnsRecordClient
from gandi_webhook.dns.gandi import GandiLiveDnsClient
from gandi_webhook.dns.util import extract_root_and_subdomain, get_domain_and_entry
from gandi_webhook.errors import DnsApiError, RecordLookupError, RecordNotFoundError, RecordWriteError, SolverError
from gandi_webhook.models import ChallengeRequest, DomainRecord, SolverConfig
from gandi_webhook.secret_store import SecretStore

logger = logging.getLogger(__name__)

SOLVER_NAME = "gandi"

# Gandi rejects TTLs below this value
GANDI_MIN_TTL = 300

_RECORD_TYPE = "TXT"


class GandiDnsSolver:
    """cert-manager webhook solver backed by Gandi LiveDNS.

    Present and CleanUp are safe to call repeatedly for the same challenge.
    Nothing is locked between concurrent calls; the calling controller
    issues one challenge per domain at a time.

    Only a missing record (HTTP 404) counts as absent. Any other lookup
    failure raises RecordLookupError instead of creating or skipping.
    """

    def __init__(
        self,
        config: WebhookConfig,
        _dns_client_factory: Callable[..., DnsRecordClient] | None = None,
    ) -> None:
        self._config = config
        self._dns_client_factory = _dns_client_factory or GandiLiveDnsClient
        self._secret_store: SecretStore | None = None

    def name(self) -> str:
        """Name used on the Issuer resource to select this solver within the group."""
        return SOLVER_NAME

    def initialize(
        self,
        kube_client_config: client.Configuration | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Build the Kubernetes client used to read API key Secrets.

        ``stop_event`` is accepted for interface parity; there is no
        background work to stop.
        """
        logger.debug("Initializing %s solver for group %s", SOLVER_NAME, self._config.group_name)
        self._secret_store = SecretStore.from_kube_config(kube_client_config)

    def present(self, ch: ChallengeRequest) -> None:
        """Ensure a TXT record holding ``ch.key`` exists for the challenge."""
        logger.debug(
            "Present: namespace=%s, zone=%s, fqdn=%s", ch.resource_namespace, ch.resolved_zone, ch.resolved_fqdn
        )
        with self._dns_client(ch) as dns_client:
            root, subdomain = self._root_and_subdomain(ch)
            record = self._lookup(dns_client, root, subdomain)

            if record is None:
                logger.debug("No TXT record for %s.%s, creating one with value %r", subdomain, root, ch.key)
                try:
                    dns_client.create_record(root, subdomain, _RECORD_TYPE, GANDI_MIN_TTL, [ch.key])
                except DnsApiError as err:
                    raise RecordWriteError(f"unable to create TXT record: {err}") from err
                return

            current = "".join(record.values)
            if current == f'"{ch.key}"':
                logger.debug("TXT record %s.%s already holds the challenge key", subdomain, root)
                return

            logger.debug("TXT record %s.%s holds %s, updating to %r", subdomain, root, current, ch.key)
            try:
                dns_client.update_record(root, subdomain, _RECORD_TYPE, GANDI_MIN_TTL, [ch.key])
            except DnsApiError as err:
                raise RecordWriteError(f"unable to update TXT record: {err}") from err

    def cleanup(self, ch: ChallengeRequest) -> None:
        """Delete the challenge TXT record if it exists.

        The record is deleted whatever its current value.
        """
        logger.debug(
            "CleanUp: namespace=%s, zone=%s, fqdn=%s", ch.resource_namespace, ch.resolved_zone, ch.resolved_fqdn
        )
        with self._dns_client(ch) as dns_client:
            root, subdomain = self._root_and_subdomain(ch)
            if self._lookup(dns_client, root, subdomain) is None:
                logger.debug("No TXT record for %s.%s, nothing to clean up", subdomain, root)
                return

            try:
                dns_client.delete_record(root, subdomain, _RECORD_TYPE)
            except DnsApiError as err:
                raise RecordWriteError(f"unable to delete TXT record: {err}") from err

    def _dns_client(self, ch: ChallengeRequest) -> DnsRecordClient:
        """Decode the issuer config, fetch the API key and build a Gandi client for it."""
        if self._secret_store is None:
            raise SolverError(f"{SOLVER_NAME} solver has not been initialized")

        try:
            cfg = SolverConfig.from_json(ch.config)
        except SolverError as err:
            raise type(err)(f"unable to load config: {err}") from err
        logger.debug("Decoded configuration %s", cfg)

        try:
            api_key = self._secret_store.get_secret_value(ch.resource_namespace, cfg.api_key_secret_ref)
        except SolverError as err:
            raise type(err)(f"unable to get API key: {err}") from err

        return self._dns_client_factory(
            api_key,
            api_url=self._config.gandi_api_url,
            debug=False,
            dry_run=False,
        )

    @staticmethod
    def _root_and_subdomain(ch: ChallengeRequest) -> tuple[str, str]:
        entry, domain = get_domain_and_entry(ch.resolved_fqdn, ch.resolved_zone)
        root, subdomain = extract_root_and_subdomain(domain, entry)
        logger.debug("Resolved entry=%s, domain=%s to root=%s, subdomain=%s", entry, domain, root, subdomain)
        return root, subdomain

    @staticmethod
    def _lookup(dns_client: DnsRecordClient, root: str, subdomain: str) -> DomainRecord | None:
        try:
            return dns_client.get_record(root, subdomain, _RECORD_TYPE)
        except RecordNotFoundError:
            return None
        except DnsApiError as err:
            raise RecordLookupError(f"unable to look up TXT record: {err}") from err
