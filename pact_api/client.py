"""High-level client for a Pact server's /api/v1 endpoints."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any

import requests

from .command import mk_public_send, prepare_exec_cmd
from .errors import MissingEndpoint
from .types import Envelope, ExecCmd, ListenRequest, PollRequest, PollResult

_LOG = logging.getLogger(__name__)


def _as_exec_cmd(cmd: ExecCmd | Mapping[str, Any]) -> ExecCmd:
    return cmd if isinstance(cmd, ExecCmd) else ExecCmd.from_dict(cmd)


def _build(cmd: ExecCmd) -> Envelope:
    return prepare_exec_cmd(
        cmd.key_pairs, cmd.nonce, cmd.pact_code, cmd.env_data, cmd.meta, cmd.network_id
    )


class PactClient:
    """Builds envelopes and exchanges them with one Pact server.

    Every call is a single POST. Nothing is retried; HTTP status errors are
    raised as ``requests.HTTPError`` and other transport failures as raised
    by ``requests``.
    """

    def __init__(self, api_host: str, timeout: float | None = None):
        """
        Args:
            api_host: Base URL of the Pact server, e.g. ``http://localhost:8080``.
            timeout: Optional per-request timeout in seconds; unbounded if None.

        Raises:
            MissingEndpoint: If *api_host* is empty.
        """
        if not api_host:
            raise MissingEndpoint("No apiHost provided")
        self.api_host = api_host.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "PactClient":
        """Build from ``PACT_API_HOST`` and optional ``PACT_HTTP_TIMEOUT``."""
        timeout = os.environ.get("PACT_HTTP_TIMEOUT")
        return cls(
            api_host=os.environ.get("PACT_API_HOST", ""),
            timeout=float(timeout) if timeout else None,
        )

    def send(self, exec_cmds: ExecCmd | Sequence[ExecCmd]) -> dict:
        """Build and sign one or more exec commands and submit them as a batch.

        Returns:
            The server's response, normally ``{"requestKeys": [...]}``.
        """
        if isinstance(exec_cmds, (ExecCmd, Mapping)):
            exec_cmds = [exec_cmds]
        envelopes = [_build(_as_exec_cmd(c)) for c in exec_cmds]
        return self.send_signed(envelopes)

    def send_signed(self, envelopes: Envelope | Sequence[Envelope]) -> dict:
        """Submit already signed envelopes (e.g. from a wallet)."""
        body = mk_public_send(envelopes)
        _LOG.info("send %d cmd(s) to %s", len(body["cmds"]), self.api_host)
        return self._post("/api/v1/send", body)

    def local(self, exec_cmd: ExecCmd) -> Any:
        """Execute one command on the server node only, without submitting it."""
        envelope = _build(_as_exec_cmd(exec_cmd))
        return self._post("/api/v1/local", envelope).get("result")

    def poll(self, poll_req: PollRequest) -> list[PollResult]:
        """Fetch results for request keys; keys without results are absent."""
        data = self._post("/api/v1/poll", poll_req)
        return [
            PollResult(reqKey=res.get("reqKey"), result=res.get("result"))
            for res in data.values()
        ]

    def listen(self, listen_req: ListenRequest) -> Any:
        """Block until the addressed command has a result and return it."""
        return self._post("/api/v1/listen", listen_req).get("result")

    # -- internal helpers --

    def _post(self, path: str, data: Mapping[str, Any]) -> Any:
        url = f"{self.api_host}{path}"
        _LOG.debug("POST %s", url)
        resp = requests.post(url, json=data, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()
