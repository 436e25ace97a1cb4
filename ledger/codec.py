"""Text encodings used at the service boundary.

Keys travel as base58 (no checksum), signatures and instruction payloads as
standard base64. The two alphabets are never interchangeable: a base64
signature fed to a key decoder fails, and vice versa.
"""

import base64
import binascii

import base58
from solders.pubkey import Pubkey
from solders.signature import Signature

from .constants import PUBKEY_LEN, SIGNATURE_LEN
from .errors import InvalidEncoding


# Longest base58 text for 32 and 64 bytes
MAX_PUBKEY_TEXT_LEN = 44
MAX_SECRET_TEXT_LEN = 88


def _b58decode(text: str, max_len: int) -> bytes:
    # Length is checked before decoding
    if len(text) > max_len:
        raise InvalidEncoding(f"Encoded key longer than {max_len} characters")
    if text != text.strip():
        raise InvalidEncoding("Encoded key has surrounding whitespace")
    try:
        return base58.b58decode(text)
    except ValueError as e:
        raise InvalidEncoding(str(e)) from e


def encode_pubkey(pubkey: Pubkey) -> str:
    return str(pubkey)


def decode_pubkey(text: str) -> Pubkey:
    try:
        raw = _b58decode(text, MAX_PUBKEY_TEXT_LEN)
    except InvalidEncoding as e:
        raise InvalidEncoding("Invalid base58 public key") from e
    if len(raw) != PUBKEY_LEN:
        raise InvalidEncoding("Invalid base58 public key")
    return Pubkey(raw)


def encode_secret(secret_bytes: bytes) -> str:
    return base58.b58encode(secret_bytes).decode("ascii")


def decode_secret(text: str) -> bytes:
    """Decode a base58 secret key.

    Only the alphabet is checked here; the 64-byte length and the
    secret/public consistency are the keypair constructor's concern.
    """
    try:
        return _b58decode(text, MAX_SECRET_TEXT_LEN)
    except InvalidEncoding as e:
        raise InvalidEncoding("Invalid base58 secret key") from e


def encode_signature(signature: Signature) -> str:
    return base64.b64encode(bytes(signature)).decode("ascii")


def decode_signature(text: str) -> Signature:
    try:
        raw = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding("Invalid base64 signature") from e
    if len(raw) != SIGNATURE_LEN:
        raise InvalidEncoding("Invalid signature length")
    return Signature.from_bytes(raw)


def encode_payload(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


__all__ = [
    "encode_pubkey",
    "decode_pubkey",
    "encode_secret",
    "decode_secret",
    "encode_signature",
    "decode_signature",
    "encode_payload",
]
