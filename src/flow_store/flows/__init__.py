"""Workflow documents, the actions that change them and the store that owns them."""

from flow_store.flows.actions import AddFlow, DeleteFlow, FlowAction, UpdateFlow, UpdateFlowState
from flow_store.flows.models import (
    EMPTY_FLOW,
    ChatAgent,
    FlowCollection,
    FlowEntry,
    FlowMeta,
    FlowUiState,
    WorkflowDocument,
)
from flow_store.flows.reducer import flows_reducer
from flow_store.flows.store import FlowStore

__all__ = [
    "EMPTY_FLOW",
    "AddFlow",
    "ChatAgent",
    "DeleteFlow",
    "FlowAction",
    "FlowCollection",
    "FlowEntry",
    "FlowMeta",
    "FlowStore",
    "FlowUiState",
    "UpdateFlow",
    "UpdateFlowState",
    "WorkflowDocument",
    "flows_reducer",
]
