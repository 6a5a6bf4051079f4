"""
Base Service Class.

Minimal base class standardizing the logger pattern for all services.
Services extend this and add their own repository dependencies via __init__.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar, Union

from pydantic import BaseModel, ValidationError

from mymoney.errors import DataValidationError
from mymoney.logger import StructuredLogger

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseService:
    """Base class for all service classes. Provides a logger."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger

    @staticmethod
    def _validate(
        model: type[ModelT], data: Union[ModelT, Mapping[str, object]],
    ) -> ModelT:
        """Coerce caller data into *model*.

        Raises:
            DataValidationError: If *data* does not satisfy *model*.
        """
        if isinstance(data, model):
            return data
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            detail = f"{location}: {first['msg']}" if location else first["msg"]
            raise DataValidationError(
                f"Invalid {model.__name__}: {detail}", original_error=exc,
            ) from exc

    @staticmethod
    def _require_user(user_id: str) -> None:
        if not user_id or not user_id.strip():
            raise DataValidationError("User ID is required")
