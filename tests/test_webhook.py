"""Tests for the ChallengePayload dispatcher and entry point."""

import io
import json
from unittest.mock import MagicMock, patch

import pytest

from gandi_webhook.errors import CredentialStoreConnectionError, RecordWriteError
from gandi_webhook.webhook import handle_payload, main


def _payload(action="Present", **request_overrides):
    request = {
        "uid": "6b7e2f",
        "action": action,
        "type": "dns-01",
        "dnsName": "foo.example.com",
        "key": "abc123",
        "resourceNamespace": "cert-manager",
        "resolvedFQDN": "_acme-challenge.foo.example.com.",
        "resolvedZone": "example.com.",
        "allowAmbientCredentials": False,
        "config": {"apiKeySecretRef": {"name": "gandi-credentials", "key": "api-token"}},
    }
    request.update(request_overrides)
    return {"apiVersion": "acme.cert-manager.io/v1alpha1", "kind": "ChallengePayload", "request": request}


class TestHandlePayload:
    def test_present_dispatches_and_succeeds(self):
        solver = MagicMock()

        result = handle_payload(solver, _payload("Present"))

        solver.present.assert_called_once()
        solver.cleanup.assert_not_called()
        request = solver.present.call_args.args[0]
        assert request.resolved_fqdn == "_acme-challenge.foo.example.com."
        assert result == {
            "apiVersion": "acme.cert-manager.io/v1alpha1",
            "kind": "ChallengePayload",
            "response": {"uid": "6b7e2f", "success": True},
        }

    def test_cleanup_dispatches(self):
        solver = MagicMock()

        result = handle_payload(solver, _payload("CleanUp"))

        solver.cleanup.assert_called_once()
        solver.present.assert_not_called()
        assert result["response"]["success"] is True

    def test_solver_error_becomes_failed_response(self):
        solver = MagicMock()
        solver.present.side_effect = RecordWriteError("unable to create TXT record: 403 Forbidden")

        result = handle_payload(solver, _payload("Present"))

        assert result["response"] == {
            "uid": "6b7e2f",
            "success": False,
            "status": {"message": "unable to create TXT record: 403 Forbidden"},
        }

    def test_unknown_action_fails(self):
        solver = MagicMock()

        result = handle_payload(solver, _payload("Refresh"))

        assert result["response"]["success"] is False
        assert "unsupported challenge action" in result["response"]["status"]["message"]
        solver.present.assert_not_called()
        solver.cleanup.assert_not_called()

    def test_unexpected_errors_propagate(self):
        solver = MagicMock()
        solver.present.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            handle_payload(solver, _payload("Present"))


class TestMain:
    def test_missing_group_name_aborts(self, monkeypatch, capsys):
        monkeypatch.delenv("GROUP_NAME", raising=False)

        assert main([]) == 2
        assert "GROUP_NAME" in capsys.readouterr().err

    @patch("gandi_webhook.webhook.GandiDnsSolver")
    def test_reads_payload_and_writes_response(self, mock_solver_cls, monkeypatch, capsys):
        monkeypatch.setenv("GROUP_NAME", "acme.example.com")
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(_payload("Present"))))
        mock_solver_cls.return_value.name.return_value = "gandi"

        assert main([]) == 0

        mock_solver_cls.return_value.initialize.assert_called_once_with()
        mock_solver_cls.return_value.present.assert_called_once()
        out = json.loads(capsys.readouterr().out)
        assert out["response"] == {"uid": "6b7e2f", "success": True}

    @patch("gandi_webhook.webhook.GandiDnsSolver")
    def test_failed_challenge_exits_non_zero(self, mock_solver_cls, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("GROUP_NAME", "acme.example.com")
        payload_file = tmp_path / "payload.json"
        payload_file.write_text(json.dumps(_payload("CleanUp")))
        mock_solver_cls.return_value.name.return_value = "gandi"
        mock_solver_cls.return_value.cleanup.side_effect = RecordWriteError("unable to delete TXT record: 500")

        assert main(["--payload", str(payload_file)]) == 1

        out = json.loads(capsys.readouterr().out)
        assert out["response"]["success"] is False

    @patch("gandi_webhook.webhook.GandiDnsSolver")
    def test_initialize_failure_exits_non_zero(self, mock_solver_cls, monkeypatch):
        monkeypatch.setenv("GROUP_NAME", "acme.example.com")
        mock_solver_cls.return_value.initialize.side_effect = CredentialStoreConnectionError(
            "unable to get k8s client: no config"
        )

        assert main([]) == 1
        mock_solver_cls.return_value.present.assert_not_called()
