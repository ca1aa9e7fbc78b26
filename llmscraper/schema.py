"""Translate caller schemas into the JSON Schema sent as function parameters."""

from __future__ import annotations

import copy
import logging
from typing import Any

from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError

from llmscraper.errors import ParseError, SchemaError

logger = logging.getLogger(__name__)


def _is_model_class(schema: Any) -> bool:
    return isinstance(schema, type) and issubclass(schema, BaseModel)


def to_json_schema(schema: Any) -> dict[str, Any]:
    """Return a JSON Schema ``dict`` describing *schema*.

    Accepts a pydantic model class, a plain JSON Schema ``dict`` (returned as
    a deep copy), or any other type pydantic can build a ``TypeAdapter`` for
    (``TypedDict``, dataclasses, ``list[...]`` and so on).

    Raises:
        SchemaError: If *schema* is ``None`` or cannot be translated.
    """
    if schema is None:
        raise SchemaError("schema is required")
    if isinstance(schema, dict):
        return copy.deepcopy(schema)
    if _is_model_class(schema):
        return schema.model_json_schema()
    try:
        return TypeAdapter(schema).json_schema()
    except (PydanticUserError, TypeError) as exc:
        raise SchemaError(f"Cannot build JSON Schema for {schema!r}: {exc}") from exc


def validate_data(schema: Any, data: Any, url: str = "") -> Any:
    """Coerce parsed *data* into *schema* when it is a pydantic model.

    ``None`` and non-model schemas pass through unchanged.

    Raises:
        ParseError: If *data* does not validate against the model.
    """
    if data is None or not _is_model_class(schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        logger.debug("validation failed for %s: %s", url, exc)
        raise ParseError(
            f"Output for {url} does not match {schema.__name__}: {exc}", url=url,
        ) from exc
