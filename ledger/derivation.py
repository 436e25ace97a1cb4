"""Program-derived addresses.

A program-derived address is the sha256 of its seeds, the owning program id
and a fixed marker, kept only when the digest is *not* a valid Ed25519 point.
Off-curve addresses have no private key, so only the owning program can sign
for them.
"""

import hashlib
from typing import List, Sequence, Tuple

from solders.pubkey import Pubkey

from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MAX_SEED_LEN,
    MAX_SEEDS,
    PDA_MARKER,
    TOKEN_PROGRAM_ID,
)
from .errors import InvalidSeeds, NoAddressFound


def _check_seeds(seeds: Sequence[bytes], limit: int = MAX_SEEDS) -> List[bytes]:
    if len(seeds) > limit:
        raise InvalidSeeds(f"At most {limit} seeds allowed, got {len(seeds)}")
    checked = [bytes(s) for s in seeds]
    for seed in checked:
        if len(seed) > MAX_SEED_LEN:
            raise InvalidSeeds(f"Seed of {len(seed)} bytes exceeds {MAX_SEED_LEN}")
    return checked


def _hash_address(seeds: Sequence[bytes], program_id: Pubkey) -> Pubkey:
    hasher = hashlib.sha256()
    for seed in seeds:
        hasher.update(seed)
    hasher.update(bytes(program_id))
    hasher.update(PDA_MARKER)
    return Pubkey(hasher.digest())


def create_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Pubkey:
    address = _hash_address(_check_seeds(seeds), program_id)
    if address.is_on_curve():
        raise InvalidSeeds("Derived address lies on the ed25519 curve")
    return address


def find_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Tuple[Pubkey, int]:
    """Search bump seeds from 255 down to 0 and return the first off-curve address.

    The bump is appended as one extra single-byte seed, so the caller's own
    seeds may number at most ``MAX_SEEDS - 1``.
    """
    checked = _check_seeds(seeds, limit=MAX_SEEDS - 1)
    for bump in range(255, -1, -1):
        address = _hash_address(checked + [bytes([bump])], program_id)
        if not address.is_on_curve():
            return address, bump
    raise NoAddressFound(f"No viable bump seed found for program {program_id}")


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Address of the account holding ``mint`` tokens for ``owner``."""
    address, _bump = find_program_address(
        [bytes(owner), bytes(token_program_id), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return address
