"""The owned, in-memory flow collection.

``FlowStore.dispatch`` is the only way to change the collection. Readers get a
read-only view of the latest committed snapshot, and selectors hand out copies
of stored documents.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from types import MappingProxyType

from flow_store.errors import NotFoundError
from flow_store.ports import Navigator, flow_path

from .actions import AddFlow, DeleteFlow, FlowAction, UpdateFlowState
from .factory import DEFAULT_TASK_MODEL, create_flow, create_text_task_node, default_task_content
from .models import EMPTY_FLOW, ChatAgent, FlowCollection, FlowEntry, FlowUiState, WorkflowDocument
from .reducer import flows_reducer

logger = logging.getLogger(__name__)

DEFAULT_FLOW_TITLE = "AI Workshop"
DEFAULT_NODE_TITLE = "Default node"


def _new_id() -> str:
    return uuid.uuid4().hex


def _log_payload(action: FlowAction) -> dict[str, object]:
    if isinstance(action, AddFlow):
        return {"id": action.flow.id}
    if isinstance(action, UpdateFlowState):
        return {"id": action.id, "state": dict(action.state)}
    return {"id": action.id}


def _seed(initial: Mapping[str, FlowEntry]) -> dict[str, FlowEntry]:
    for key, entry in initial.items():
        if key != entry.document.id:
            raise ValueError(
                f"Flow key {key!r} does not match document id {entry.document.id!r}"
            )
    return {key: entry.model_copy(deep=True) for key, entry in initial.items()}


class FlowStore:
    def __init__(
        self,
        *,
        navigator: Navigator,
        initial: Mapping[str, FlowEntry] | None = None,
        id_factory: Callable[[], str] = _new_id,
        default_title: str = DEFAULT_FLOW_TITLE,
        default_model: str = DEFAULT_TASK_MODEL,
    ) -> None:
        self._navigator = navigator
        self._flows: FlowCollection = _seed(initial or {})
        self._id_factory = id_factory
        self._default_title = default_title
        self._default_model = default_model

    @property
    def flows(self) -> FlowCollection:
        # Committed snapshots are never mutated in place.
        return MappingProxyType(self._flows)

    def dispatch(self, action: FlowAction) -> None:
        """Apply ``action`` and commit the result before returning."""
        logger.debug(f"dispatchFlow/{action.type}", extra={"payload": _log_payload(action)})
        self._flows = flows_reducer(self._flows, action)

    # Selectors

    def get_flow(self, flow_id: str) -> WorkflowDocument | None:
        """Return a copy of the document stored under ``flow_id``, if any."""
        entry = self._flows.get(flow_id)
        return entry.document.model_copy(deep=True) if entry is not None else None

    def require_flow(self, flow_id: str) -> WorkflowDocument:
        document = self.get_flow(flow_id)
        if document is None:
            raise NotFoundError(flow_id)
        return document

    def ui_state(self, flow_id: str) -> FlowUiState:
        entry = self._flows.get(flow_id)
        return entry.uiState if entry is not None else FlowUiState()

    def current_flow_id(self) -> str | None:
        return self._navigator.current_flow_id()

    def current_document(self) -> WorkflowDocument:
        """Return the open document, or an empty document if none is open."""
        flow_id = self.current_flow_id()
        document = self.get_flow(flow_id) if flow_id else None
        if document is None:
            return EMPTY_FLOW.model_copy(deep=True)
        return document

    # Creation and removal

    def create_flow(self) -> str:
        flow_id = self._id_factory()
        node_id = self._id_factory()
        node = create_text_task_node(
            node_id,
            default_task_content(self._default_model),
            {"title": DEFAULT_NODE_TITLE},
        )
        self.dispatch(
            AddFlow(flow=create_flow(flow_id, {"title": self._default_title}, {node_id: node}))
        )
        self._navigator.go_to(flow_path(flow_id))
        return flow_id

    def create_flow_from_agent(self, agent: ChatAgent) -> str:
        """Create a flow whose single node is seeded from ``agent``."""
        flow_id = self._id_factory()
        meta = {
            "title": f"{agent.title} workflow",
            "avatar": agent.avatar,
            "avatarBackground": agent.avatarBackground,
            "description": f'Based on "{agent.title}"\n{agent.description}',
        }
        node = create_text_task_node(
            agent.id,
            {
                "llm": {"model": agent.model or self._default_model},
                "systemRole": agent.content,
            },
            {
                "title": agent.title,
                "avatar": agent.avatar,
                "avatarBackground": agent.avatarBackground,
                "description": agent.description,
            },
        )
        self.dispatch(AddFlow(flow=create_flow(flow_id, meta, {agent.id: node})))
        self._navigator.go_to(flow_path(flow_id))
        return flow_id

    def remove_flow(self, flow_id: str) -> None:
        self.dispatch(DeleteFlow(id=flow_id))
        self._navigator.go_to(flow_path())

    # UI flags

    def open_import_modal(self, flow_id: str) -> None:
        self.dispatch(UpdateFlowState(id=flow_id, state={"importModalOpen": True}))

    def close_import_modal(self, flow_id: str) -> None:
        self.dispatch(UpdateFlowState(id=flow_id, state={"importModalOpen": False}))
