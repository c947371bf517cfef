"""Translation of httpx and pydantic failures into reconciliation errors."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from claimrecon.domain.reconciliation.errors import DecodeError, TransportError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

log = getLogger(__name__)


@asynccontextmanager
async def transport_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise connection, timeout and protocol failures as ``TransportError``."""

    try:
        yield
    except httpx.TimeoutException as exc:
        raise TransportError(f"{operation}: timed out") from exc
    except httpx.HTTPError as exc:
        raise TransportError(f"{operation}: {type(exc).__name__}: {exc}") from exc


def ensure_success(response: httpx.Response, operation: str) -> None:
    if response.is_success:
        return
    raise TransportError(
        f"{operation}: HTTP {response.status_code}",
        status_code=response.status_code,
    )


def decode_model[M: BaseModel](response: httpx.Response, model: type[M], operation: str) -> M:
    try:
        return model.model_validate_json(response.content)
    except ValidationError as exc:
        log.debug("%s: rejected payload %r", operation, response.content[:500])
        raise DecodeError(f"{operation}: unexpected response payload") from exc


def decode_list[M: BaseModel](
    response: httpx.Response, model: type[M], operation: str
) -> list[M]:
    try:
        return TypeAdapter(list[model]).validate_json(response.content)
    except ValidationError as exc:
        log.debug("%s: rejected payload %r", operation, response.content[:500])
        raise DecodeError(f"{operation}: unexpected response payload") from exc
