#!/usr/bin/env python3
"""Demo: sign a two-signer command, run it locally, then submit and listen.

Prerequisites
─────────────
1. A Pact server reachable at PACT_API_HOST (e.g. `pact -s config.yaml`)

Optional env:
     PACT_HTTP_TIMEOUT     – per-request timeout in seconds

Usage:
    python scripts/demo_local.py ["(+ 1 2)"]
"""

from __future__ import annotations

import logging
import sys
import time

from pact_api import (
    ExecCmd,
    PactClient,
    gen_key_pair,
    listen_request,
    mk_meta,
    prepare_exec_cmd,
)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    code = sys.argv[1] if len(sys.argv) > 1 else "(+ 1 2)"
    client = PactClient.from_env()

    alice, bob = gen_key_pair(), gen_key_pair()
    meta = mk_meta("", "0", 0.00001, 1000, int(time.time()), 600)

    print(f"API host         = {client.api_host}")
    print(f"Alice            = {alice.public_key}")
    print(f"Bob              = {bob.public_key}")
    print()

    # 1) local execution, nothing is submitted
    print("--- local ---")
    result = client.local(ExecCmd(pact_code=code, key_pairs=[alice, bob], meta=meta))
    print(f"result           = {result}")
    print()

    # 2) sign with both keys, submit, then wait for the result
    print("--- send ---")
    envelope = prepare_exec_cmd([alice, bob], None, code, {}, meta)
    print(f"request key      = {envelope['hash']}")
    print(f"signatures       = {len(envelope['sigs'])}")
    client.send_signed(envelope)

    print("--- listen ---")
    print(f"result           = {client.listen(listen_request(envelope))}")


if __name__ == "__main__":
    main()
