"""YAML interchange format for workflow documents.

Keys named ``output`` hold derived run results. They are stripped at every
nesting level before a document is written, so they are absent (not null)
after a decode.
"""

from __future__ import annotations

from typing import Any

import yaml
from pydantic import ValidationError

from flow_store.errors import FormatError
from flow_store.flows.models import WorkflowDocument

SUPPRESSED_FIELDS: frozenset[str] = frozenset({"output"})
INDENT = 2
DEFAULT_EXTENSION = "yml"


def strip_suppressed_fields(value: Any, suppressed: frozenset[str] = SUPPRESSED_FIELDS) -> Any:
    """Return a copy of ``value`` without any mapping key listed in ``suppressed``."""
    if isinstance(value, dict):
        return {
            key: strip_suppressed_fields(item, suppressed)
            for key, item in value.items()
            if key not in suppressed
        }
    if isinstance(value, list | tuple):
        return [strip_suppressed_fields(item, suppressed) for item in value]
    return value


def encode(document: WorkflowDocument) -> str:
    """Serialize ``document`` as block-style YAML.

    Values are dumped as Python objects so YAML timestamps decode back to the
    same ``date``/``datetime``. Meta keys that were never set are left out.
    """
    data = document.model_dump()
    data["meta"] = document.meta.model_dump(exclude_unset=True)
    data = strip_suppressed_fields(data)
    return yaml.safe_dump(
        data,
        indent=INDENT,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def decode(text: str) -> WorkflowDocument:
    """Parse YAML (or JSON) text into a document.

    Raises:
        FormatError: The text is not well-formed or does not have a document's shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FormatError(f"Invalid workflow text: {e}") from e

    if not isinstance(data, dict):
        raise FormatError(f"Workflow text must be a mapping, got {type(data).__name__}")

    try:
        return WorkflowDocument.model_validate(data)
    except ValidationError as e:
        raise FormatError(f"Invalid workflow document: {e}") from e


def export_filename(document: WorkflowDocument, extension: str = DEFAULT_EXTENSION) -> str:
    return f"{document.id}-workflow.{extension.lstrip('.')}"
