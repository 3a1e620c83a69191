# fandom_oracle/intent.py
"""
Intent messages and their canonical encoding.

A signature always covers the whole IntentMessage (scope + timestamp + data),
never the data alone, so a payload signed for one purpose or moment cannot be
replayed as another.

Canonical bytes are BCS (Binary Canonical Serialization), the layout on-chain
Move verifiers rebuild before checking an Ed25519 signature:

  u8   intent scope
  u64  timestamp_ms (little-endian)
  ...  payload struct, fields in declaration order
       str   -> ULEB128 length + UTF-8 bytes
       float -> f64 little-endian
       int   -> i64 little-endian
       bool  -> u8
"""

import dataclasses
import json
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Generic, Type, TypeVar

from fandom_oracle.errors import SerializationError

T = TypeVar("T")


class IntentScope(IntEnum):
    PROCESS_DATA = 0


# ── BCS encoding ──────────────────────────────────────────────────────────────

def _uleb128(n: int) -> bytes:
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def bcs_encode(value: Any) -> bytes:
    """Encode a scalar or a flat dataclass in BCS."""
    if isinstance(value, bool):
        return struct.pack("<B", int(value))
    if isinstance(value, IntEnum):
        return struct.pack("<B", int(value))
    if isinstance(value, int):
        return struct.pack("<q", value)
    if isinstance(value, float):
        return struct.pack("<d", value)
    if isinstance(value, str):
        raw = value.encode("utf-8")
        return _uleb128(len(raw)) + raw
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return b"".join(
            bcs_encode(getattr(value, f.name)) for f in dataclasses.fields(value)
        )
    raise TypeError(f"cannot BCS-encode {type(value).__name__}")


# ── Messages ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class IntentMessage(Generic[T]):
    intent: IntentScope
    timestamp_ms: int
    data: T

    def to_bytes(self) -> bytes:
        return (
            struct.pack("<B", int(self.intent))
            + struct.pack("<Q", self.timestamp_ms)
            + bcs_encode(self.data)
        )

    def to_dict(self) -> dict:
        return {
            "intent": int(self.intent),
            "timestamp_ms": self.timestamp_ms,
            "data": dataclasses.asdict(self.data),
        }

    @classmethod
    def from_dict(cls, raw: dict, payload_type: Type[T]) -> "IntentMessage[T]":
        return cls(
            intent=IntentScope(raw["intent"]),
            timestamp_ms=int(raw["timestamp_ms"]),
            data=payload_type(**raw["data"]),
        )


@dataclass(frozen=True)
class SignedEnvelope(Generic[T]):
    response: IntentMessage[T]
    signature: bytes

    def to_dict(self) -> dict:
        return {
            "response": self.response.to_dict(),
            "signature": self.signature.hex(),
        }

    def to_json(self) -> str:
        try:
            return json.dumps(self.to_dict(), separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise SerializationError(f"serialize failed: {e}") from e

    @classmethod
    def from_json(cls, text: str, payload_type: Type[T]) -> "SignedEnvelope[T]":
        try:
            raw = json.loads(text)
            return cls(
                response=IntentMessage.from_dict(raw["response"], payload_type),
                signature=bytes.fromhex(raw["signature"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"cache deserialize failed: {e}") from e
