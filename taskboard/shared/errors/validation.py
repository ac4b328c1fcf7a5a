# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(part) for part in loc if part is not None]
    # model-level validators report no location; tag them on the body
    return ".".join(parts) or "body"


def _clean_message(message: str) -> str:
    for prefix in ("Value error, ", "Assertion failed, "):
        if message.startswith(prefix):
            return message[len(prefix):]
    return message


def format_pydantic_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    errors_list: list[dict[str, Any]] = []
    for error in exc.errors(include_url=False):
        errors_list.append(
            {
                "field": _field_name(tuple(error.get("loc", ()))),
                "message": _clean_message(str(error.get("msg", "Invalid value"))),
                "type": error.get("type", "value_error"),
            }
        )
    return errors_list


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(format_pydantic_errors(exc)) from exc


def parse_payload(model: type[ModelT], payload: Mapping[str, Any] | None) -> ModelT:
    try:
        return model.model_validate(dict(payload or {}))
    except PydanticValidationError as exc:
        raise_validation_error(exc)


__all__ = [
    "format_pydantic_errors",
    "parse_payload",
    "raise_validation_error",
]
