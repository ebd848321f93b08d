"""
Pydantic schemas for the send endpoint.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SendBody(BaseModel):
    """Message body: plain text is required, HTML is optional."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)
    html: Optional[str] = None


class SendRequest(BaseModel):
    """Inbound send request.

    Shape only; address and provider syntax is checked by the dispatcher.
    """

    model_config = ConfigDict(frozen=True)

    to: str
    cc: list[str] = Field(default_factory=list)
    subject: str = Field(..., min_length=1)
    body: SendBody
    provider: Optional[str] = Field(
        default=None,
        description="Provider name; the configured default is used when omitted.",
    )


class SendResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(..., alias="messageId")


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""

    code: int
    message: str
