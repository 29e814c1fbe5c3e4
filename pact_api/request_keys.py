"""Derive poll and listen request bodies from signed envelopes."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import InvalidArgument, MissingField
from .types import Envelope, ListenRequest, PollRequest

_LOG = logging.getLogger(__name__)


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _request_keys(envelopes: Envelope | Sequence[Envelope]) -> list[str]:
    if isinstance(envelopes, Mapping):
        envelopes = [envelopes]
    if isinstance(envelopes, (str, bytes)) or not isinstance(envelopes, Sequence):
        raise InvalidArgument(f"expected a list of commands: {envelopes!r}")
    if not envelopes:
        raise InvalidArgument("expected at least one command")
    if not all(isinstance(e, Mapping) and "hash" in e for e in envelopes):
        raise InvalidArgument(
            f'malformed object, expected "hash" key in every cmd: {envelopes!r}'
        )
    return _unique([e["hash"] for e in envelopes])


def poll_request(envelopes: Envelope | Sequence[Envelope]) -> PollRequest:
    """Unique request keys of *envelopes*, in first-occurrence order."""
    return PollRequest(requestKeys=_request_keys(envelopes))


def listen_request(envelopes: Envelope | Sequence[Envelope]) -> ListenRequest:
    """Listen body for the first command of *envelopes*.

    Listen addresses a single request key. Any further commands in the batch
    are dropped; a warning is logged when that happens.
    """
    keys = _request_keys(envelopes)
    if len(keys) > 1:
        _LOG.warning(
            "listen request built from a batch of %d commands; only %s is kept",
            len(keys),
            keys[0],
        )
    return ListenRequest(listen=keys[0])


def _cmds_of(send_msg: Mapping[str, Any]) -> Any:
    if not isinstance(send_msg, Mapping) or "cmds" not in send_msg:
        raise MissingField(f"expected key 'cmds' in object: {send_msg!r}")
    return send_msg["cmds"]


def poll_request_from_exec(send_msg: Mapping[str, Any]) -> PollRequest:
    """Poll body for a ``{"cmds": [...]}`` send message."""
    return poll_request(_cmds_of(send_msg))


def listen_request_from_exec(send_msg: Mapping[str, Any]) -> ListenRequest:
    """Listen body for the first command of a ``{"cmds": [...]}`` send message."""
    return listen_request(_cmds_of(send_msg))
