"""Utility functions for the taskgate CLI."""

from pathlib import Path
from typing import Any

import pydantic
import yaml

from taskgate.core.errors import ValidationError
from taskgate.core.permissions.models import Principal


def read_document(path: Path) -> Any:
    """Read a YAML or JSON document (JSON is valid YAML).

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file cannot be parsed
    """
    with open(path) as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"Invalid document {path}: {e}") from e


def load_principal(path: Path) -> Principal:
    """Load a principal from a profile document.

    Accepts the bare user object or the login payload that wraps it
    under ``user``.

    Raises:
        ValidationError: If the document is not a valid principal
    """
    data = read_document(path)
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        data = data["user"]

    try:
        return Principal.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"Invalid principal in {path}",
            errors=[
                {
                    "field": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                }
                for error in e.errors()
            ],
            error_code="invalid_principal",
        ) from e
