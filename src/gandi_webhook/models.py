"""Data classes exchanged between the webhook transport, the solver and Gandi."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from gandi_webhook.errors import ConfigDecodeError


@dataclass(frozen=True)
class ChallengeRequest:
    """A single DNS-01 challenge handed to the solver by cert-manager.

    Both ``resolved_fqdn`` and ``resolved_zone`` end with a trailing dot.
    ``config`` holds the per-issuer solver config as raw JSON bytes, or
    ``None`` when the issuer sets no config.
    """

    resolved_fqdn: str
    resolved_zone: str
    key: str
    resource_namespace: str = ""
    uid: str = ""
    action: str = ""
    type: str = "dns-01"
    dns_name: str = ""
    allow_ambient_credentials: bool = False
    config: bytes | None = None

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "action": self.action,
            "type": self.type,
            "dnsName": self.dns_name,
            "key": self.key,
            "resourceNamespace": self.resource_namespace,
            "resolvedFQDN": self.resolved_fqdn,
            "resolvedZone": self.resolved_zone,
            "allowAmbientCredentials": self.allow_ambient_credentials,
            "config": json.loads(self.config) if self.config else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ChallengeRequest:
        raw_config = data.get("config")
        return cls(
            uid=data.get("uid", ""),
            action=data.get("action", ""),
            type=data.get("type", "dns-01"),
            dns_name=data.get("dnsName", ""),
            key=data["key"],
            resource_namespace=data.get("resourceNamespace", ""),
            resolved_fqdn=data["resolvedFQDN"],
            resolved_zone=data["resolvedZone"],
            allow_ambient_credentials=bool(data.get("allowAmbientCredentials", False)),
            config=json.dumps(raw_config).encode() if raw_config is not None else None,
        )


@dataclass(frozen=True)
class SecretKeySelector:
    """Reference to one data key of a Secret in the challenge's namespace."""

    name: str = ""
    key: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> SecretKeySelector:
        fields = {}
        for field_name in ("name", "key"):
            value = data.get(field_name)
            if value is None:
                value = ""
            elif not isinstance(value, str):
                raise ConfigDecodeError(f"error decoding solver config: apiKeySecretRef.{field_name} must be a string")
            fields[field_name] = value
        return cls(**fields)


@dataclass(frozen=True)
class SolverConfig:
    """Per-issuer config set in ``issuer.spec.acme.dns01.webhook.config``."""

    api_key_secret_ref: SecretKeySelector = field(default_factory=SecretKeySelector)

    @classmethod
    def from_json(cls, raw: bytes | str | None) -> SolverConfig:
        """Decode the raw issuer config; absent config yields the zero value."""
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
        except ValueError as err:
            raise ConfigDecodeError(f"error decoding solver config: {err}") from err
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigDecodeError(f"error decoding solver config: expected an object, got {type(data).__name__}")

        ref = data.get("apiKeySecretRef")
        if ref is None:
            return cls()
        if not isinstance(ref, dict):
            raise ConfigDecodeError("error decoding solver config: apiKeySecretRef must be an object")
        return cls(api_key_secret_ref=SecretKeySelector.from_dict(ref))


@dataclass(frozen=True)
class DomainRecord:
    """A LiveDNS resource record set."""

    name: str
    type: str
    ttl: int
    values: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> DomainRecord:
        return cls(
            name=data["rrset_name"],
            type=data["rrset_type"],
            ttl=int(data.get("rrset_ttl", 0)),
            values=tuple(data.get("rrset_values") or ()),
        )


@dataclass(frozen=True)
class ChallengeResponse:
    """Outcome of a Present or CleanUp call, as reported back to cert-manager."""

    uid: str
    success: bool
    message: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"uid": self.uid, "success": self.success}
        if self.message is not None:
            result["status"] = {"message": self.message}
        return result
