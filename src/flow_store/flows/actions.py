"""Actions accepted by the flows reducer.

Each action is a small frozen value carrying everything the reducer needs.
The set is closed: ``FlowAction`` lists every variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from .models import WorkflowDocument


@dataclass(frozen=True, slots=True)
class AddFlow:
    """Insert a document under its own id, overwriting any existing one."""

    type: ClassVar[str] = "addFlow"

    flow: WorkflowDocument


@dataclass(frozen=True, slots=True)
class DeleteFlow:
    type: ClassVar[str] = "deleteFlow"

    id: str


@dataclass(frozen=True, slots=True)
class UpdateFlow:
    """Replace the document stored under ``id``, keeping its UI state."""

    type: ClassVar[str] = "updateFlow"

    id: str
    flow: WorkflowDocument


@dataclass(frozen=True, slots=True)
class UpdateFlowState:
    """Shallow-merge ``state`` into the UI state stored under ``id``."""

    type: ClassVar[str] = "updateFlowState"

    id: str
    state: Mapping[str, object] = field(default_factory=dict)


FlowAction = AddFlow | DeleteFlow | UpdateFlow | UpdateFlowState
