"""Builders for new workflow documents and their seed nodes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import FlowMeta, WorkflowDocument

TEXT_TASK_NODE_TYPE = "aiTask"
DEFAULT_TASK_MODEL = "gpt-3.5-turbo"


def default_task_content(model: str = DEFAULT_TASK_MODEL) -> dict[str, Any]:
    return {"llm": {"model": model}, "systemRole": "", "input": ""}


def create_text_task_node(
    node_id: str,
    content: Mapping[str, Any],
    meta: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an LLM text task node.

    Nodes are opaque to the store; this only fixes the shape new flows start with.
    """
    return {
        "id": node_id,
        "type": TEXT_TASK_NODE_TYPE,
        "meta": dict(meta or {}),
        "content": dict(content),
    }


def create_flow(
    flow_id: str,
    meta: FlowMeta | Mapping[str, Any] | None = None,
    nodes: Mapping[str, Mapping[str, Any]] | None = None,
) -> WorkflowDocument:
    if meta is None:
        flow_meta = FlowMeta()
    elif isinstance(meta, FlowMeta):
        flow_meta = meta.model_copy(deep=True)
    else:
        flow_meta = FlowMeta.model_validate(dict(meta))

    return WorkflowDocument(
        id=flow_id,
        meta=flow_meta,
        nodes={key: dict(node) for key, node in (nodes or {}).items()},
    )
