"""
Request parsing and response helpers shared by all handlers.
"""

from typing import Iterable
from uuid import UUID
from aiohttp import web
from pydantic import BaseModel
from core.domain.errors import ValidationError


async def read_json(request: web.Request) -> dict:
    """JSON object body, or ValidationError"""
    if not request.can_read_body:
        return {}
    try:
        body = await request.json()
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def path_uuid(request: web.Request, name: str) -> UUID:
    raw = request.match_info[name]
    try:
        return UUID(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid {name.replace('_', ' ')}") from e


def as_json(model: BaseModel, status: int = 200) -> web.Response:
    return web.json_response(model.model_dump(mode="json"), status=status)


def list_json(models: Iterable[BaseModel]) -> web.Response:
    return web.json_response([m.model_dump(mode="json") for m in models])
