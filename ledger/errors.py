class LedgerError(Exception):
    """Base class for every recoverable failure raised by the ledger core."""


class InvalidEncoding(LedgerError):
    """Malformed base58/base64 text or wrong decoded length."""


class InvalidKey(LedgerError):
    """Secret/public key mismatch or malformed key bytes."""


class InvalidAmount(LedgerError):
    pass


class InvalidSeeds(LedgerError):
    """Seeds rejected by program address creation (too many, too long, or on curve)."""


class NoAddressFound(LedgerError):
    pass


class BuildError(LedgerError):
    """Instruction assembly failed for a reason not otherwise classified."""
