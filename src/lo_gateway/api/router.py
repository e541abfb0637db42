# src/lo_gateway/api/router.py
"""Diagnostics: is the server configured to reach the 1inch APIs?

Not part of the trading path.
"""
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from config.settings import settings

router = APIRouter(tags=["diagnostics"])

ENV_INSTRUCTIONS = "Create a .env file with ONEINCH_API_KEY=your_api_key"


class EnvCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    message: str
    api_key_length: int | None = Field(None, alias="apiKeyLength")
    api_key_prefix: str | None = Field(None, alias="apiKeyPrefix")
    instructions: str | None = None


def check_environment() -> tuple[int, EnvCheckResponse]:
    api_key = settings.ONEINCH_API_KEY
    if not api_key:
        return 500, EnvCheckResponse(
            status="error",
            message="API key not configured",
            instructions=ENV_INSTRUCTIONS,
        )
    return 200, EnvCheckResponse(
        status="success",
        message="API key is configured",
        api_key_length=len(api_key),
        api_key_prefix=api_key[:8] + "...",
    )


@router.get("/test-env", response_model=EnvCheckResponse)
async def test_env() -> JSONResponse:
    status_code, body = check_environment()
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )
