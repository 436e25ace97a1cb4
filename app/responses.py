from dataclasses import dataclass
from typing import Any, Union

from aiohttp import web


@dataclass(frozen=True)
class Success:
    data: Any


@dataclass(frozen=True)
class Failure:
    error: str
    status: int = 400


ApiResponse = Union[Success, Failure]


def render(result: ApiResponse) -> web.Response:
    if isinstance(result, Success):
        return web.json_response({"success": True, "data": result.data})
    return web.json_response({"success": False, "error": result.error}, status=result.status)


def json_error(msg: str, status: int = 400) -> web.Response:
    return render(Failure(msg, status))
