"""Webhook entry point — dispatch cert-manager ChallengePayload documents to the solver."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Protocol

from gandi_webhook.config import load_config
from gandi_webhook.errors import SolverError
from gandi_webhook.models import ChallengeRequest, ChallengeResponse
from gandi_webhook.solver import GandiDnsSolver

logger = logging.getLogger(__name__)

API_VERSION = "acme.cert-manager.io/v1alpha1"
KIND = "ChallengePayload"


class Solver(Protocol):
    def name(self) -> str: ...

    def present(self, ch: ChallengeRequest) -> None: ...

    def cleanup(self, ch: ChallengeRequest) -> None: ...


def handle_payload(solver: Solver, payload: dict) -> dict:
    """Run the action named in a ChallengePayload and return the response payload."""
    request = ChallengeRequest.from_dict(payload["request"])
    logger.info("%s %s for %s via %s", request.action, request.uid, request.resolved_fqdn, solver.name())

    try:
        if request.action == "Present":
            solver.present(request)
        elif request.action == "CleanUp":
            solver.cleanup(request)
        else:
            raise SolverError(f"unsupported challenge action: {request.action!r}")
    except SolverError as err:
        logger.error("%s %s failed: %s", request.action, request.uid, err)
        response = ChallengeResponse(uid=request.uid, success=False, message=str(err))
    else:
        response = ChallengeResponse(uid=request.uid, success=True)

    return {
        "apiVersion": payload.get("apiVersion", API_VERSION),
        "kind": payload.get("kind", KIND),
        "response": response.to_dict(),
    }


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Solve one ACME DNS-01 ChallengePayload against Gandi LiveDNS.",
    )
    parser.add_argument(
        "--payload",
        default=None,
        help="ChallengePayload JSON file (default: read from stdin)",
    )
    return parser.parse_args(argv)


def _read_payload(path: str | None) -> dict:
    if path is None:
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        config = load_config()
    except ValueError as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        stream=sys.stderr,
    )

    solver = GandiDnsSolver(config)
    try:
        solver.initialize()
    except SolverError as err:
        logger.error("Unable to initialize solver: %s", err)
        return 1

    payload = _read_payload(args.payload)
    result = handle_payload(solver, payload)
    json.dump(result, sys.stdout)
    sys.stdout.write("\n")
    return 0 if result["response"]["success"] else 1


if __name__ == "__main__":
    sys.exit(main())
