"""Error envelope shared by every proxy route.

Successful proxy calls relay the upstream JSON body verbatim; only
failures are wrapped, always as:
{
    "message": "..."
}
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    message: str


def error_response(message: str) -> ErrorResponse:
    return ErrorResponse(message=message)
