# fandom_oracle/client.py
"""
Fandom Oracle - Reference Verifier Client

This client:
- fetches the enclave public key from /health_check
- requests signed metrics from /process_data
- rebuilds the canonical IntentMessage bytes and verifies the Ed25519 signature

Design goals:
- explicit trust boundary (optionally pin the expected public key)
- explicit failure modes
- no retries, no caching

Usage:
    python -m fandom_oracle.client "Chainsaw Man" --oracle http://127.0.0.1:3000
"""

import argparse
import sys
from typing import Optional

import requests

from fandom_oracle.feeds.myanimelist import MetricRecord
from fandom_oracle.intent import IntentMessage, IntentScope
from fandom_oracle.keys import load_verify_key
from fandom_oracle.signer import verify_message

TIMEOUT = 30


def fetch_pubkey(base_url: str) -> str:
    resp = requests.get(f"{base_url}/health_check", timeout=TIMEOUT)
    resp.raise_for_status()
    return resp.json()["pk"]


def request_metrics(base_url: str, name: str) -> dict:
    resp = requests.post(
        f"{base_url}/process_data",
        json={"payload": {"name": name}},
        timeout=TIMEOUT,
    )
    if resp.status_code != 200:
        raise RuntimeError(f"Oracle returned {resp.status_code}: {resp.text}")
    return resp.json()


def verify_envelope(envelope: dict, pubkey_hex: str) -> IntentMessage:
    """
    Verify a /process_data response body. Returns the decoded message.

    Raises RuntimeError on a malformed body, a wrong scope or an invalid signature.
    """
    try:
        message = IntentMessage.from_dict(envelope["response"], MetricRecord)
        signature = bytes.fromhex(envelope["signature"])
        verify_key = load_verify_key(pubkey_hex)
    except (KeyError, TypeError, ValueError) as e:
        raise RuntimeError(f"Malformed oracle response: {e!r}") from e

    if message.intent != IntentScope.PROCESS_DATA:
        raise RuntimeError(f"Unexpected intent scope: {message.intent}")
    if not verify_message(message, signature, verify_key):
        raise RuntimeError("Signature verification failed")
    return message


def resolve(base_url: str, name: str, expected_pubkey: Optional[str] = None) -> IntentMessage:
    pubkey_hex = fetch_pubkey(base_url)
    if expected_pubkey and pubkey_hex != expected_pubkey:
        raise RuntimeError(f"Enclave pubkey mismatch: got {pubkey_hex}, expected {expected_pubkey}")
    return verify_envelope(request_metrics(base_url, name), pubkey_hex)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fetch and verify signed fandom metrics")
    parser.add_argument("name", help="Anime title to query")
    parser.add_argument("--oracle", default="http://127.0.0.1:3000")
    parser.add_argument("--pubkey", default=None, help="Pin the expected enclave public key (hex)")
    args = parser.parse_args(argv)

    try:
        message = resolve(args.oracle, args.name, args.pubkey)
    except (requests.RequestException, RuntimeError) as e:
        print(f"  ✗ Oracle failed: {e}")
        return 1

    m = message.data
    print(f"  Title:       {m.title}")
    print(f"  Rating:      {m.external_average_rating}")
    print(f"  Popularity:  #{m.external_popularity_rank}")
    print(f"  Members:     {m.external_member_count:,}")
    print(f"  Timestamp:   {message.timestamp_ms}")
    print("  ✓ Signature: VALID")
    return 0


if __name__ == "__main__":
    sys.exit(main())
