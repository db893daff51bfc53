"""Pydantic models for workflow documents and their collection entries.

Documents are frozen. Node payloads are opaque to this package: they are kept
as plain mappings and round-tripped untouched, so the store copies documents
rather than relying on immutability alone.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FlowMeta(BaseModel):
    """Display attributes of a workflow."""

    model_config = ConfigDict(extra="allow", frozen=True)

    title: str = ""
    description: str | None = None
    avatar: str | None = None
    avatarBackground: str | None = None


class WorkflowDocument(BaseModel):
    """A single graph-structured task definition.

    Unknown top-level keys are preserved so that documents written by newer
    clients survive a decode/encode cycle.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    meta: FlowMeta = Field(default_factory=FlowMeta)
    nodes: dict[str, dict[str, Any]] = Field(default_factory=dict)


class FlowUiState(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    importModalOpen: bool = False


class FlowEntry(BaseModel):
    """A document together with its UI-visible flags."""

    model_config = ConfigDict(frozen=True)

    document: WorkflowDocument
    uiState: FlowUiState = Field(default_factory=FlowUiState)


class ChatAgent(BaseModel):
    """An assistant definition that can seed a new workflow."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: str = ""
    avatar: str | None = None
    avatarBackground: str | None = None
    model: str | None = None
    content: str = ""


FlowCollection = Mapping[str, FlowEntry]

# Returned by selectors when no document matches; never stored.
EMPTY_FLOW = WorkflowDocument(id="")
