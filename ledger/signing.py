from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from .codec import encode_signature
from .keys import keypair_from_base58


def sign(keypair: Keypair, message: bytes) -> Signature:
    """Ed25519 signature over ``message``; deterministic for a given key."""
    return keypair.sign_message(bytes(message))


def verify(signature: Signature, pubkey: Pubkey, message: bytes) -> bool:
    """Check ``signature`` against ``pubkey`` and ``message``.

    Never raises: a signature that is not a valid curve point, or has a
    non-canonical scalar, is simply reported as invalid, the same way the
    ledger runtime treats it.
    """
    return signature.verify(pubkey, bytes(message))


class EphemeralSigner:
    """In-memory signer built from a base58 secret for the span of one request."""

    def __init__(self, private_key_base58: str):
        self._keypair = keypair_from_base58(private_key_base58)

    @property
    def pubkey_str(self) -> str:
        return str(self._keypair.pubkey())

    def sign(self, message: bytes) -> Signature:
        return sign(self._keypair, message)

    def sign_b64(self, message: bytes) -> str:
        return encode_signature(self.sign(message))
