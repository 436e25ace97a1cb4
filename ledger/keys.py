import logging
import os

from solders.keypair import Keypair

from .codec import decode_secret, encode_secret
from .constants import PUBKEY_LEN, SECRET_KEY_LEN
from .errors import InvalidKey


SEED_LEN = 32


def generate() -> Keypair:
    """Create a fresh Ed25519 keypair from 32 bytes of OS randomness.

    An exhausted or unavailable entropy source raises from ``os.urandom``
    and is deliberately not caught: without randomness no key can be made.
    """
    seed = os.urandom(SEED_LEN)
    return Keypair.from_seed(seed)


def from_secret_bytes(raw: bytes) -> Keypair:
    """Rebuild a keypair from its 64-byte ``secret(32) || public(32)`` form.

    The public half is recomputed from the secret and must match the
    embedded one, so a tampered or unrelated suffix is rejected.
    """
    raw = bytes(raw)
    if len(raw) != SECRET_KEY_LEN:
        raise InvalidKey("Invalid secret key length")
    keypair = Keypair.from_seed(raw[:SEED_LEN])
    if bytes(keypair.pubkey()) != raw[SEED_LEN:SEED_LEN + PUBKEY_LEN]:
        logging.debug("Rejected secret key: embedded public key does not match")
        raise InvalidKey("Invalid keypair from secret key")
    return keypair


def secret_bytes(keypair: Keypair) -> bytes:
    return bytes(keypair)


def keypair_from_base58(text: str) -> Keypair:
    return from_secret_bytes(decode_secret(text))


def keypair_to_base58(keypair: Keypair) -> str:
    return encode_secret(secret_bytes(keypair))
