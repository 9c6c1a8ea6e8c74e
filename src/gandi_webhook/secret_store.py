"""Kubernetes Secret lookup for the Gandi API key."""

from __future__ import annotations

import base64
import binascii
import logging

from kubernetes import client
from kubernetes import config as kube_config
from kubernetes.client.rest import ApiException

from gandi_webhook.errors import CredentialStoreConnectionError, KeyNotFoundError, SecretLookupError
from gandi_webhook.models import SecretKeySelector

logger = logging.getLogger(__name__)


def build_core_v1_api(configuration: client.Configuration | None = None) -> client.CoreV1Api:
    """Construct a CoreV1Api client.

    Uses ``configuration`` when given. Otherwise the in-cluster service
    account config is tried first, then the local kubeconfig.
    """
    try:
        if configuration is None:
            configuration = client.Configuration()
            try:
                kube_config.load_incluster_config(client_configuration=configuration)
            except kube_config.ConfigException:
                logger.debug("Not running in-cluster, falling back to kubeconfig")
                kube_config.load_kube_config(client_configuration=configuration)
        return client.CoreV1Api(client.ApiClient(configuration))
    except Exception as err:
        raise CredentialStoreConnectionError(f"unable to get k8s client: {err}") from err


class SecretStore:
    """Reads single data keys out of namespaced Secrets.

    The underlying client is created once at solver initialization and is
    only read from afterwards, so one instance is shared by all challenges.
    """

    def __init__(self, core_v1: client.CoreV1Api) -> None:
        self._core_v1 = core_v1

    @classmethod
    def from_kube_config(cls, configuration: client.Configuration | None = None) -> SecretStore:
        return cls(build_core_v1_api(configuration))

    def get_secret_value(self, namespace: str, selector: SecretKeySelector) -> str:
        """Return the decoded value of ``selector.key`` in Secret ``selector.name``."""
        logger.debug("Loading secret `%s` with key `%s`", selector.name, selector.key)

        if not selector.name:
            raise SecretLookupError("unable to get secret: apiKeySecretRef.name is not set")

        try:
            secret = self._core_v1.read_namespaced_secret(selector.name, namespace)
        except ApiException as err:
            raise SecretLookupError(f"unable to get secret `{selector.name}`; {err.status} {err.reason}") from err

        data = secret.data or {}
        if selector.key not in data:
            raise KeyNotFoundError(f'key "{selector.key}" not found in secret "{namespace}/{selector.name}"')

        try:
            return base64.b64decode(data[selector.key], validate=True).decode()
        except (binascii.Error, UnicodeDecodeError) as err:
            raise SecretLookupError(
                f'key "{selector.key}" in secret "{namespace}/{selector.name}" is not valid base64 text'
            ) from err
