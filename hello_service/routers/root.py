"""Hello Service — greeting endpoint."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from hello_service.routers import ANY_METHOD

GREETING = "Hello from Test Project!\n"

router = APIRouter(tags=["root"])


@router.api_route(
    "/",
    methods=ANY_METHOD,
    response_class=PlainTextResponse,
    summary="Greeting",
)
async def greet() -> PlainTextResponse:
    return PlainTextResponse(GREETING)
