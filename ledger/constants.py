from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.sysvar import RENT as RENT_SYSVAR_ID


TOKEN_PROGRAM_ID: Pubkey = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID: Pubkey = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")

# Appended to every program address preimage
PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEEDS = 16
MAX_SEED_LEN = 32

PUBKEY_LEN = 32
SECRET_KEY_LEN = 64
SIGNATURE_LEN = 64

U64_MAX = 2**64 - 1

__all__ = [
    "SYSTEM_PROGRAM_ID",
    "RENT_SYSVAR_ID",
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "PDA_MARKER",
    "MAX_SEEDS",
    "MAX_SEED_LEN",
    "PUBKEY_LEN",
    "SECRET_KEY_LEN",
    "SIGNATURE_LEN",
    "U64_MAX",
]
