"""Option objects and result records passed through the scraping pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, field_validator

from llmscraper.errors import ScraperError

ScraperMode = Literal["html", "text", "image"]
OnError = Literal["include", "raise"]

MODES: tuple[str, ...] = get_args(ScraperMode)


# ---------------------------------------------------------------------------
# Caller-supplied options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, kw_only=True)
class LoadOptions:
    """How pages are loaded.

    Attributes:
        mode:            ``"html"`` (default) returns the rendered markup,
                         ``"text"`` the readable title and body, ``"image"``
                         a base64 full-page screenshot.
        close_on_finish: Close the browser itself once the run is over.
    """

    mode: ScraperMode = "html"
    close_on_finish: bool = False

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}; got {self.mode!r}")


@dataclass(frozen=True, kw_only=True)
class RunOptions(LoadOptions):
    """Everything :meth:`llmscraper.LLMScraper.run` needs.

    Attributes:
        schema:          Output shape: a pydantic model class, any type a
                         pydantic ``TypeAdapter`` accepts, or a JSON Schema
                         ``dict``.
        model:           Model override.  When unset the model is chosen by
                         *mode* (see :func:`llmscraper.completion.select_model`).
        instructions:    Function description sent with the request.  Falls
                         back to the default description when empty.
        validate_output: Validate parsed data into *schema* when it is a
                         pydantic model.
        on_error:        ``"include"`` (default) reports failures per item in
                         :attr:`CompletionResult.error`; ``"raise"`` re-raises
                         the first failure once the run has been torn down.
    """

    schema: Any
    model: str | None = None
    instructions: str | None = None
    validate_output: bool = False
    on_error: OnError = "include"

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.on_error not in get_args(OnError):
            raise ValueError(
                f"on_error must be 'include' or 'raise'; got {self.on_error!r}",
            )


# ---------------------------------------------------------------------------
# Pipeline records
# ---------------------------------------------------------------------------

class LoadResult(BaseModel):
    """Content extracted from one page."""

    model_config = ConfigDict(frozen=True)

    url: str
    content: str
    mode: ScraperMode

    @field_validator("content", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class CompletionResult(BaseModel):
    """Structured output for one URL.

    ``data`` is ``None`` both when the service returned no arguments and
    when the item failed; check :attr:`error` (or :attr:`ok`) to tell them
    apart.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    data: Any = None
    error: ScraperError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Plain-``dict`` form for JSON output; errors become their message."""
        data = self.data.model_dump() if isinstance(self.data, BaseModel) else self.data
        out: dict[str, Any] = {"data": data, "url": self.url}
        if self.error is not None:
            out["error"] = {"type": type(self.error).__name__, "message": str(self.error)}
        return out
