# fandom_oracle/signer.py
"""
Intent signer: wraps a payload into a signed IntentMessage envelope.
"""

import logging
from typing import Optional, TypeVar

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from fandom_oracle.intent import IntentMessage, IntentScope, SignedEnvelope
from fandom_oracle.keys import generate_enclave_key, public_key_hex

T = TypeVar("T")

log = logging.getLogger(__name__)


class IntentSigner:
    def __init__(self, signing_key: Optional[SigningKey] = None):
        self._sk = signing_key or generate_enclave_key()

    @property
    def verify_key(self) -> VerifyKey:
        return self._sk.verify_key

    @property
    def public_key_hex(self) -> str:
        return public_key_hex(self._sk)

    def sign(self, payload: T, timestamp_ms: int, scope: IntentScope) -> SignedEnvelope[T]:
        message = IntentMessage(intent=scope, timestamp_ms=timestamp_ms, data=payload)
        signed = self._sk.sign(message.to_bytes())
        log.debug(f"Signed intent scope={scope.name} ts={timestamp_ms}")
        return SignedEnvelope(response=message, signature=signed.signature)


def verify_message(message: IntentMessage, signature: bytes, verify_key: VerifyKey) -> bool:
    """Check a signature against the canonical bytes of `message`."""
    try:
        verify_key.verify(message.to_bytes(), signature)
        return True
    except (BadSignatureError, ValueError):
        return False


def verify(envelope: SignedEnvelope, verify_key: VerifyKey) -> bool:
    return verify_message(envelope.response, envelope.signature, verify_key)
