import base64
import struct

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ledger import instructions
from ledger.constants import (
    RENT_SYSVAR_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    U64_MAX,
)
from ledger.derivation import get_associated_token_address
from ledger.errors import BuildError, InvalidAmount, NoAddressFound


def _key() -> Pubkey:
    return Keypair().pubkey()


def _flags(ix):
    return [(meta.pubkey, meta.is_signer, meta.is_writable) for meta in ix.accounts]


def test_value_transfer_layout():
    source, dest = _key(), _key()
    ix = instructions.build_value_transfer(source, dest, 1_000_000)

    assert ix.program_id == SYSTEM_PROGRAM_ID
    assert _flags(ix) == [(source, True, True), (dest, False, True)]
    assert bytes(ix.data) == struct.pack("<IQ", 2, 1_000_000)


def test_initialize_mint_layout_without_freeze_authority():
    mint, authority = _key(), _key()
    ix = instructions.build_initialize_mint(mint, authority, 6)

    assert ix.program_id == TOKEN_PROGRAM_ID
    assert _flags(ix) == [(mint, False, True), (RENT_SYSVAR_ID, False, False)]
    assert bytes(ix.data) == bytes([0, 6]) + bytes(authority) + b"\x00"
    assert len(ix.data) == 35


def test_initialize_mint_layout_with_freeze_authority():
    mint, authority, freeze = _key(), _key(), _key()
    ix = instructions.build_initialize_mint(mint, authority, 9, freeze)

    assert bytes(ix.data) == bytes([0, 9]) + bytes(authority) + b"\x01" + bytes(freeze)
    assert len(ix.data) == 67


@pytest.mark.parametrize("decimals", [-1, 256, 1.5, True])
def test_initialize_mint_rejects_decimals(decimals):
    with pytest.raises(BuildError):
        instructions.build_initialize_mint(_key(), _key(), decimals)


def test_initialize_mint_rejects_default_authority():
    with pytest.raises(BuildError):
        instructions.build_initialize_mint(_key(), Pubkey.default(), 6)
    with pytest.raises(BuildError):
        instructions.build_initialize_mint(_key(), _key(), 6, Pubkey.default())


def test_mint_to_role_order_and_flags():
    mint, owner, authority = _key(), _key(), _key()
    ix = instructions.build_mint_to(mint, owner, authority, 1)
    destination = get_associated_token_address(owner, mint)

    assert ix.program_id == TOKEN_PROGRAM_ID
    assert _flags(ix) == [
        (mint, False, True),
        (destination, False, True),
        (authority, True, False),
    ]
    assert ix.accounts[0].pubkey != destination
    assert bytes(ix.data) == b"\x07" + (1).to_bytes(8, "little")


def test_token_transfer_role_order_and_flags():
    mint, source_owner, dest_owner = _key(), _key(), _key()
    ix = instructions.build_token_transfer(source_owner, dest_owner, mint, 250)

    assert _flags(ix) == [
        (get_associated_token_address(source_owner, mint), False, True),
        (get_associated_token_address(dest_owner, mint), False, True),
        (source_owner, True, False),
    ]
    assert bytes(ix.data) == struct.pack("<BQ", 3, 250)


def test_max_amount_is_little_endian_u64():
    ix = instructions.build_mint_to(_key(), _key(), _key(), U64_MAX)
    assert bytes(ix.data) == b"\x07" + b"\xff" * 8


@pytest.mark.parametrize("build", [
    lambda amount: instructions.build_value_transfer(_key(), _key(), amount),
    lambda amount: instructions.build_mint_to(_key(), _key(), _key(), amount),
    lambda amount: instructions.build_token_transfer(_key(), _key(), _key(), amount),
])
@pytest.mark.parametrize("amount", [0, -5, U64_MAX + 1])
def test_amount_guard_is_uniform(build, amount):
    with pytest.raises(InvalidAmount):
        build(amount)


def test_zero_amount_message():
    with pytest.raises(InvalidAmount, match="greater than 0"):
        instructions.build_token_transfer(_key(), _key(), _key(), 0)


def test_derivation_failure_becomes_build_error(monkeypatch):
    def exhausted(owner, mint):
        raise NoAddressFound("exhausted")

    monkeypatch.setattr(instructions, "get_associated_token_address", exhausted)

    with pytest.raises(BuildError):
        instructions.build_mint_to(_key(), _key(), _key(), 5)
    with pytest.raises(BuildError):
        instructions.build_token_transfer(_key(), _key(), _key(), 5)


def test_describe():
    mint, owner, authority = _key(), _key(), _key()
    ix = instructions.build_mint_to(mint, owner, authority, 42)
    described = instructions.describe(ix)

    assert described["program_id"] == str(TOKEN_PROGRAM_ID)
    assert [a["pubkey"] for a in described["accounts"]] == [str(m.pubkey) for m in ix.accounts]
    assert described["accounts"][2] == {"pubkey": str(authority), "is_signer": True, "is_writable": False}
    assert base64.b64decode(described["instruction_data"]) == struct.pack("<BQ", 7, 42)


def test_initialize_mint_payload_parses_with_layout():
    mint, authority, freeze = _key(), _key(), _key()
    ix = instructions.build_initialize_mint(mint, authority, 2, freeze)
    parsed = instructions.InitializeMintLayout.parse(bytes(ix.data))

    assert parsed.instruction == instructions.INITIALIZE_MINT
    assert parsed.decimals == 2
    assert bytes(parsed.mint_authority) == bytes(authority)
    assert bytes(parsed.freeze_authority) == bytes(freeze)


def test_amount_payload_parses_with_layout():
    ix = instructions.build_token_transfer(_key(), _key(), _key(), 123456789)
    parsed = instructions.AmountLayout.parse(bytes(ix.data))

    assert parsed.instruction == instructions.TRANSFER
    assert parsed.amount == 123456789
