"""Response envelope for the guide tools.

Every guide tool answers with {ok, data, error}. On success `data` is a
GuideData payload: `source` names what was queried (docs, endpoint,
code_sample, sdk_method), `action` is browse or query, `entries` holds one
dict per document, endpoint, sample or method, and `summary` carries
counts and hints. Business failures such as an unknown document or a
missing endpoint catalog become `error` with a stable code.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

GuideSource = Literal["docs", "endpoint", "code_sample", "sdk_method"]
GuideAction = Literal["browse", "query"]


class ToolError(BaseModel):
    """Structured business error for tool payloads."""

    code: str = Field(description="Stable machine-readable error code")
    message: str = Field(description="Human-readable error summary")
    details: dict[str, Any] | None = Field(
        default=None, description="Optional structured error details"
    )


class ToolEnvelope(BaseModel):
    """Unified response shape for all tool business results."""

    ok: bool = Field(description="Business-level success flag")
    data: Any | None = Field(default=None, description="Tool-specific payload")
    error: ToolError | None = Field(default=None, description="Structured error payload")

    @model_validator(mode="after")
    def _validate_coherence(self) -> "ToolEnvelope":
        if self.ok and self.error is not None:
            raise ValueError("ok=true responses must not include error")
        if not self.ok and self.error is None:
            raise ValueError("ok=false responses must include error")
        return self


class GuideData(BaseModel):
    """Unified inner `data` schema for guide documentation tools."""

    source: GuideSource
    action: GuideAction
    entries: list[dict[str, Any]]
    summary: dict[str, Any] = Field(default_factory=dict)


def build_ok(data: Any) -> dict[str, Any]:
    """Build and validate a success envelope."""
    return ToolEnvelope(ok=True, data=data).model_dump(exclude_none=True)


def build_error(
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    *,
    data: Any | None = None,
) -> dict[str, Any]:
    """Build and validate an error envelope."""
    return ToolEnvelope(
        ok=False,
        data=data,
        error=ToolError(code=code, message=message, details=details),
    ).model_dump(exclude_none=True)


def build_guide_data(
    *,
    source: GuideSource,
    action: GuideAction,
    entries: list[dict[str, Any]],
    summary: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build and validate guide tool `data` payloads."""
    return GuideData(
        source=source,
        action=action,
        entries=entries,
        summary=summary or {},
    ).model_dump(exclude_none=True)
