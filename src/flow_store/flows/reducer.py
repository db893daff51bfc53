"""Pure state transitions over the flow collection."""

from __future__ import annotations

import logging

from .actions import AddFlow, DeleteFlow, FlowAction, UpdateFlow, UpdateFlowState
from .models import FlowCollection, FlowEntry, FlowUiState

logger = logging.getLogger(__name__)


def flows_reducer(flows: FlowCollection, action: FlowAction) -> FlowCollection:
    """Return the collection that results from applying ``action`` to ``flows``.

    The input mapping is never mutated. Documents are copied on the way in, so
    the caller's object and the committed entry never share node payloads. When
    an action addresses an id that is not present, the input is returned as-is.

    Raises:
        TypeError: ``action`` is not one of the known variants.
    """
    if isinstance(action, AddFlow):
        flow = action.flow.model_copy(deep=True)
        existing = flows.get(flow.id)
        ui_state = existing.uiState if existing is not None else FlowUiState()
        return {**flows, flow.id: FlowEntry(document=flow, uiState=ui_state)}

    if isinstance(action, DeleteFlow):
        if action.id not in flows:
            return flows
        return {key: entry for key, entry in flows.items() if key != action.id}

    if isinstance(action, UpdateFlow):
        entry = flows.get(action.id)
        if entry is None:
            logger.debug("Ignoring updateFlow for missing flow", extra={"flow_id": action.id})
            return flows
        # Keys and document ids must agree.
        flow = action.flow.model_copy(update={"id": action.id}, deep=True)
        return {**flows, action.id: entry.model_copy(update={"document": flow})}

    if isinstance(action, UpdateFlowState):
        entry = flows.get(action.id)
        if entry is None:
            logger.debug(
                "Ignoring updateFlowState for missing flow", extra={"flow_id": action.id}
            )
            return flows
        merged = FlowUiState.model_validate({**entry.uiState.model_dump(), **action.state})
        return {**flows, action.id: entry.model_copy(update={"uiState": merged})}

    raise TypeError(f"Unknown flow action: {action!r}")
