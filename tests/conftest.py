"""Shared test fixtures for gandi-webhook."""

import json

import pytest

from gandi_webhook.config import WebhookConfig
from gandi_webhook.models import ChallengeRequest


@pytest.fixture
def webhook_config() -> WebhookConfig:
    return WebhookConfig(group_name="acme.example.com", gandi_api_url="https://api.test/v5/livedns")


@pytest.fixture
def make_challenge():
    def _make(**overrides) -> ChallengeRequest:
        defaults = {
            "uid": "uid-1",
            "action": "Present",
            "resolved_fqdn": "_acme-challenge.foo.example.com.",
            "resolved_zone": "example.com.",
            "key": "abc123",
            "resource_namespace": "cert-manager",
            "config": json.dumps({"apiKeySecretRef": {"name": "gandi-credentials", "key": "api-token"}}).encode(),
        }
        defaults.update(overrides)
        return ChallengeRequest(**defaults)

    return _make
