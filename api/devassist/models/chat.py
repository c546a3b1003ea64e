"""
Pydantic models for the Chat API request/response contracts.

Wire names follow the widget's camelCase JSON; Python code uses the
snake_case attribute names.
"""

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for the POST /api/chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="The user's message for this turn")
    file_context: str | None = Field(
        None,
        alias="fileContext",
        description="Concatenated, labelled file bodies matched for this turn",
    )
    system_prompt: str | None = Field(
        None,
        alias="systemPrompt",
        description="System prompt overriding the relay default",
    )


class ChatResponse(BaseModel):
    """Response body from a successful POST /api/chat call."""

    reply: str = Field(..., description="The provider's reply text")


class ErrorResponse(BaseModel):
    """Structured error returned when the provider call fails."""

    error: str = Field(..., description="Short, fixed error summary")
    details: str = Field("", description="Diagnostic detail from the failure")
