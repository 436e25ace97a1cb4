import functools
import json
import logging
from typing import Any, Awaitable, Callable, Dict

from aiohttp import web

from ledger import codec, instructions, keys, signing
from ledger.errors import LedgerError

from .metrics import (
    INSTRUCTIONS_BUILT,
    KEYPAIRS_GENERATED,
    MESSAGES_SIGNED,
    SIGNATURES_VERIFIED,
    RequestTimer,
)
from .responses import ApiResponse, Failure, Success, render
from .validation import (
    ValidationError,
    optional_string,
    parse_pubkey,
    require_amount,
    require_string,
    require_u8,
)


Handler = Callable[[web.Request], Awaitable[ApiResponse]]


async def read_body(request: web.Request) -> Dict[str, Any]:
    if not request.can_read_body:
        return {}
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError, LookupError) as e:
        raise ValidationError("Invalid JSON body") from e
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON body")
    return body


def envelope(route: str) -> Callable[[Handler], Callable[[web.Request], Awaitable[web.Response]]]:
    """Render a handler's result (or its validation/ledger error) as a JSON envelope."""

    def decorator(handler: Handler):
        @functools.wraps(handler)
        async def wrapper(request: web.Request) -> web.Response:
            timer = RequestTimer(route)
            try:
                result = await handler(request)
            except (ValidationError, LedgerError) as e:
                logging.warning(f"{route} rejected: {e}")
                result = Failure(str(e))
            except Exception:
                timer.finish("error")
                raise
            timer.finish("success" if isinstance(result, Success) else "failure")
            return render(result)

        return wrapper

    return decorator


@envelope("/keypair")
async def generate_keypair(request: web.Request) -> ApiResponse:
    keypair = keys.generate()
    KEYPAIRS_GENERATED.inc()
    return Success({
        "pubkey": str(keypair.pubkey()),
        "secret": keys.keypair_to_base58(keypair),
    })


@envelope("/message/sign")
async def sign_message(request: web.Request) -> ApiResponse:
    body = await read_body(request)
    message = require_string(body, "message")
    secret = require_string(body, "secret")

    signer = signing.EphemeralSigner(secret)
    signature = signer.sign_b64(message.encode("utf-8"))
    MESSAGES_SIGNED.inc()

    return Success({
        "signature": signature,
        "public_key": signer.pubkey_str,
        "message": message,
    })


@envelope("/message/verify")
async def verify_message(request: web.Request) -> ApiResponse:
    body = await read_body(request)
    message = require_string(body, "message")
    signature_b64 = require_string(body, "signature")
    pubkey_str = require_string(body, "pubkey")

    signature = codec.decode_signature(signature_b64)
    pubkey = codec.decode_pubkey(pubkey_str)
    valid = signing.verify(signature, pubkey, message.encode("utf-8"))
    SIGNATURES_VERIFIED.labels(valid=str(valid).lower()).inc()

    return Success({
        "valid": valid,
        "message": message,
        "pubkey": pubkey_str,
    })


@envelope("/token/create")
async def create_token(request: web.Request) -> ApiResponse:
    body = await read_body(request)
    mint_authority_str = require_string(body, "mintAuthority")
    mint_str = require_string(body, "mint")
    freeze_authority_str = optional_string(body, "freezeAuthority")
    decimals = require_u8(body, "decimals")

    mint_authority = parse_pubkey(mint_authority_str, "mintAuthority")
    mint = parse_pubkey(mint_str, "mint")
    freeze_authority = None
    if freeze_authority_str is not None:
        freeze_authority = parse_pubkey(freeze_authority_str, "freezeAuthority")

    ix = instructions.build_initialize_mint(mint, mint_authority, decimals, freeze_authority)
    INSTRUCTIONS_BUILT.labels(kind="initialize_mint").inc()
    return Success(instructions.describe(ix))


@envelope("/token/mint")
async def mint_token(request: web.Request) -> ApiResponse:
    body = await read_body(request)
    mint_str = require_string(body, "mint")
    destination_str = require_string(body, "destination")
    authority_str = require_string(body, "authority")
    amount = require_amount(body, "amount")

    mint = parse_pubkey(mint_str, "mint")
    destination = parse_pubkey(destination_str, "destination")
    authority = parse_pubkey(authority_str, "authority")

    ix = instructions.build_mint_to(mint, destination, authority, amount)
    INSTRUCTIONS_BUILT.labels(kind="mint_to").inc()
    return Success(instructions.describe(ix))


@envelope("/send/sol")
async def send_sol(request: web.Request) -> ApiResponse:
    body = await read_body(request)
    from_str = require_string(body, "from")
    to_str = require_string(body, "to")
    lamports = require_amount(body, "lamports")

    from_pubkey = parse_pubkey(from_str, "from")
    to_pubkey = parse_pubkey(to_str, "to")

    ix = instructions.build_value_transfer(from_pubkey, to_pubkey, lamports)
    INSTRUCTIONS_BUILT.labels(kind="system_transfer").inc()
    described = instructions.describe(ix)

    return Success({
        "program_id": described["program_id"],
        "accounts": [account["pubkey"] for account in described["accounts"]],
        "instruction_data": described["instruction_data"],
    })


@envelope("/send/token")
async def send_token(request: web.Request) -> ApiResponse:
    body = await read_body(request)
    destination_str = require_string(body, "destination")
    mint_str = require_string(body, "mint")
    owner_str = require_string(body, "owner")
    amount = require_amount(body, "amount")

    destination = parse_pubkey(destination_str, "destination")
    mint = parse_pubkey(mint_str, "mint")
    owner = parse_pubkey(owner_str, "owner")

    ix = instructions.build_token_transfer(owner, destination, mint, amount)
    INSTRUCTIONS_BUILT.labels(kind="token_transfer").inc()
    described = instructions.describe(ix)

    return Success({
        "program_id": described["program_id"],
        "accounts": [
            {"pubkey": account["pubkey"], "isSigner": account["is_signer"]}
            for account in described["accounts"]
        ],
        "instruction_data": described["instruction_data"],
    })


def register_routes(app: web.Application) -> None:
    app.router.add_post("/keypair", generate_keypair)
    app.router.add_post("/message/sign", sign_message)
    app.router.add_post("/message/verify", verify_message)
    app.router.add_post("/token/create", create_token)
    app.router.add_post("/token/mint", mint_token)
    app.router.add_post("/send/sol", send_sol)
    app.router.add_post("/send/token", send_token)
