"""Instruction descriptors for the system and token programs.

Every builder returns a ``solders`` ``Instruction``: program id, ordered
account metas and the raw payload the target program decodes. Account order
is part of each program's interface and must not change.
"""

from typing import Any, Dict, Optional

from borsh_construct import CStruct, Option, U64, U8
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer

from .codec import encode_payload
from .constants import RENT_SYSVAR_ID, TOKEN_PROGRAM_ID, U64_MAX
from .derivation import get_associated_token_address
from .errors import BuildError, InvalidAmount, LedgerError


# Token program instruction tags
INITIALIZE_MINT = 0
TRANSFER = 3
MINT_TO = 7

InitializeMintLayout = CStruct(
    "instruction" / U8,
    "decimals" / U8,
    "mint_authority" / U8[32],
    "freeze_authority" / Option(U8[32]),
)
AmountLayout = CStruct(
    "instruction" / U8,
    "amount" / U64,
)

# The all-zero key can never produce a signature
_NULL_KEY = Pubkey.default()


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount("Amount must be an integer")
    if amount <= 0:
        raise InvalidAmount("Amount must be greater than 0")
    if amount > U64_MAX:
        raise InvalidAmount("Amount exceeds u64 range")
    return amount


def _associated(owner: Pubkey, mint: Pubkey) -> Pubkey:
    try:
        return get_associated_token_address(owner, mint)
    except LedgerError as e:
        raise BuildError(f"Failed to derive associated token account: {e}") from e


def _amount_payload(tag: int, amount: int) -> bytes:
    return AmountLayout.build({"instruction": tag, "amount": amount})


def build_value_transfer(from_pubkey: Pubkey, to_pubkey: Pubkey, lamports: int) -> Instruction:
    """System program transfer of ``lamports`` from ``from_pubkey`` to ``to_pubkey``.

    The funding account is marked signer because the runtime requires it;
    this service only describes the instruction and never collects that
    signature.
    """
    _check_amount(lamports)
    return transfer(TransferParams(from_pubkey=from_pubkey, to_pubkey=to_pubkey, lamports=lamports))


def build_initialize_mint(
    mint: Pubkey,
    mint_authority: Pubkey,
    decimals: int,
    freeze_authority: Optional[Pubkey] = None,
) -> Instruction:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= 255:
        raise BuildError(f"Unsupported decimals: {decimals!r}")
    if mint_authority == _NULL_KEY:
        raise BuildError("Mint authority cannot be the default public key")
    if freeze_authority is not None and freeze_authority == _NULL_KEY:
        raise BuildError("Freeze authority cannot be the default public key")

    data = InitializeMintLayout.build({
        "instruction": INITIALIZE_MINT,
        "decimals": decimals,
        "mint_authority": list(bytes(mint_authority)),
        "freeze_authority": None if freeze_authority is None else list(bytes(freeze_authority)),
    })

    accounts = [
        AccountMeta(pubkey=mint, is_signer=False, is_writable=True),
        AccountMeta(pubkey=RENT_SYSVAR_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(TOKEN_PROGRAM_ID, data, accounts)


def build_mint_to(mint: Pubkey, destination_owner: Pubkey, authority: Pubkey, amount: int) -> Instruction:
    """Mint ``amount`` base units into ``destination_owner``'s associated account."""
    _check_amount(amount)
    destination = _associated(destination_owner, mint)
    accounts = [
        AccountMeta(pubkey=mint, is_signer=False, is_writable=True),
        AccountMeta(pubkey=destination, is_signer=False, is_writable=True),
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),
    ]
    return Instruction(TOKEN_PROGRAM_ID, _amount_payload(MINT_TO, amount), accounts)


def build_token_transfer(
    source_owner: Pubkey,
    destination_owner: Pubkey,
    mint: Pubkey,
    amount: int,
) -> Instruction:
    """Move ``amount`` of ``mint`` between the two owners' associated accounts."""
    _check_amount(amount)
    source = _associated(source_owner, mint)
    destination = _associated(destination_owner, mint)
    accounts = [
        AccountMeta(pubkey=source, is_signer=False, is_writable=True),
        AccountMeta(pubkey=destination, is_signer=False, is_writable=True),
        AccountMeta(pubkey=source_owner, is_signer=True, is_writable=False),
    ]
    return Instruction(TOKEN_PROGRAM_ID, _amount_payload(TRANSFER, amount), accounts)


def describe(ix: Instruction) -> Dict[str, Any]:
    """Render an instruction to JSON-friendly primitives."""
    return {
        "program_id": str(ix.program_id),
        "accounts": [
            {
                "pubkey": str(meta.pubkey),
                "is_signer": meta.is_signer,
                "is_writable": meta.is_writable,
            }
            for meta in ix.accounts
        ],
        "instruction_data": encode_payload(bytes(ix.data)),
    }
