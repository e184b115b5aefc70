"""Rewrite and self-improve request/response models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from prompt_rewriter.config.modes import DEFAULT_MODE


class RewriteRequest(BaseModel):
    """Body of POST /rewrite.

    Fields are typed loosely; the service rejects missing or non-string text
    with a 400 so that every client error shares one shape.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_prompt: Any = Field(default=None, alias="userPrompt", description="Text to rewrite")
    mode: Any = Field(default=DEFAULT_MODE, description="Mode key")
    enable_web_access: bool = Field(default=False, alias="enableWebAccess", description="Request web search")


class RewriteResponse(BaseModel):
    """Successful rewrite."""

    model_config = ConfigDict(populate_by_name=True)

    rewritten_prompt: str = Field(..., alias="rewrittenPrompt")
    mode: str
    mode_name: str = Field(..., alias="modeName")
    is_content_generation: bool = Field(..., alias="isContentGeneration")
    web_access_used: bool = Field(..., alias="webAccessUsed")
    web_sources: list[str] = Field(default_factory=list, alias="webSources")


class SelfImproveRequest(BaseModel):
    """Body of POST /self-improve."""

    model_config = ConfigDict(populate_by_name=True)

    current_output: Any = Field(default=None, alias="currentOutput", description="Output to improve")
    mode: Any = Field(default=None, description="Mode key")


class SelfImproveResponse(BaseModel):
    """Successful self-improvement."""

    model_config = ConfigDict(populate_by_name=True)

    improved_output: str = Field(..., alias="improvedOutput")
    mode: str
    mode_name: str = Field(..., alias="modeName")


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""

    error: str
