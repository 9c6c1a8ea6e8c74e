"""Gandi LiveDNS client — look up, create, update and delete record sets via the v5 REST API."""

from __future__ import annotations

import logging

import httpx

from gandi_webhook.dns.base import DnsRecordClient
from gandi_webhook.errors import DnsApiError, RecordNotFoundError
from gandi_webhook.models import DomainRecord

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.gandi.net/v5/livedns"


def _error_message(resp: httpx.Response) -> str:
    """Build a readable message from a LiveDNS error body."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        cause = body.get("cause")
        message = f"{cause}: {body['message']}" if cause else body["message"]
    else:
        message = resp.text or resp.reason_phrase
    return f"{resp.status_code} {message}"


class GandiLiveDnsClient(DnsRecordClient):
    """DNS record client backed by the Gandi LiveDNS API, scoped to one API key."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        debug: bool = False,
        dry_run: bool = False,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._debug = debug
        headers = {"Authorization": f"Apikey {api_key}"}
        if dry_run:
            headers["Dry-Run"] = "1"
        self._client = _http_client or httpx.Client(headers=headers, timeout=30)

    def _request(self, method: str, path: str, json: dict | None = None) -> httpx.Response:
        url = f"{self._api_url}{path}"
        if self._debug:
            logger.debug("LiveDNS request: %s %s %s", method, url, json)
        try:
            resp = self._client.request(method, url, json=json)
        except httpx.HTTPError as err:
            raise DnsApiError(f"{method} {url} failed: {err}") from err
        if self._debug:
            logger.debug("LiveDNS response: %s %s", resp.status_code, resp.text)

        if resp.status_code == 404:
            raise RecordNotFoundError(_error_message(resp), status_code=404)
        if resp.is_error:
            raise DnsApiError(_error_message(resp), status_code=resp.status_code)
        return resp

    def get_record(self, fqdn: str, name: str, record_type: str) -> DomainRecord:
        resp = self._request("GET", f"/domains/{fqdn}/records/{name}/{record_type}")
        try:
            return DomainRecord.from_dict(resp.json())
        except (ValueError, KeyError, TypeError) as err:
            raise DnsApiError(f"unexpected LiveDNS response: {err}") from err

    def create_record(self, fqdn: str, name: str, record_type: str, ttl: int, values: list[str]) -> None:
        self._request(
            "POST",
            f"/domains/{fqdn}/records",
            json={
                "rrset_name": name,
                "rrset_type": record_type,
                "rrset_ttl": ttl,
                "rrset_values": list(values),
            },
        )
        logger.info("Created %s record %s.%s", record_type, name, fqdn)

    def update_record(self, fqdn: str, name: str, record_type: str, ttl: int, values: list[str]) -> None:
        self._request(
            "PUT",
            f"/domains/{fqdn}/records/{name}/{record_type}",
            json={"rrset_ttl": ttl, "rrset_values": list(values)},
        )
        logger.info("Updated %s record %s.%s", record_type, name, fqdn)

    def delete_record(self, fqdn: str, name: str, record_type: str) -> None:
        self._request("DELETE", f"/domains/{fqdn}/records/{name}/{record_type}")
        logger.info("Deleted %s record %s.%s", record_type, name, fqdn)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
