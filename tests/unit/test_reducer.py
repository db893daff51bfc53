"""Unit tests for the flows reducer."""

from __future__ import annotations

from collections.abc import Callable
from functools import reduce

import pytest

from flow_store.flows.actions import AddFlow, DeleteFlow, UpdateFlow, UpdateFlowState
from flow_store.flows.models import FlowEntry, FlowUiState, WorkflowDocument
from flow_store.flows.reducer import flows_reducer

MakeDoc = Callable[..., WorkflowDocument]


def test_add_flow_into_empty_collection(make_document: MakeDoc) -> None:
    doc = make_document("x")

    flows = flows_reducer({}, AddFlow(flow=doc))

    assert list(flows) == ["x"]
    assert flows["x"].document == doc
    assert flows["x"].uiState == FlowUiState()


def test_add_flow_twice_equals_once(make_document: MakeDoc) -> None:
    doc = make_document("x", node={"id": "node"})

    once = flows_reducer({}, AddFlow(flow=doc))
    twice = flows_reducer(once, AddFlow(flow=doc))

    assert twice == once


def test_add_flow_overwrites_document_and_keeps_ui_state(make_document: MakeDoc) -> None:
    flows = flows_reducer({}, AddFlow(flow=make_document("x", title="Old")))
    flows = flows_reducer(flows, UpdateFlowState(id="x", state={"importModalOpen": True}))

    flows = flows_reducer(flows, AddFlow(flow=make_document("x", title="New")))

    assert flows["x"].document.meta.title == "New"
    assert flows["x"].uiState.importModalOpen is True


def test_reducer_does_not_mutate_input(make_document: MakeDoc) -> None:
    before = {"x": FlowEntry(document=make_document("x"))}
    snapshot = dict(before)

    flows_reducer(before, AddFlow(flow=make_document("y")))
    flows_reducer(before, DeleteFlow(id="x"))
    flows_reducer(before, UpdateFlowState(id="x", state={"importModalOpen": True}))

    assert before == snapshot
    assert before["x"].uiState.importModalOpen is False


@pytest.mark.parametrize(
    "action",
    [
        DeleteFlow(id="missing"),
        UpdateFlow(id="missing", flow=WorkflowDocument(id="missing")),
        UpdateFlowState(id="missing", state={"importModalOpen": True}),
    ],
)
def test_actions_on_absent_id_are_no_ops(make_document: MakeDoc, action: object) -> None:
    flows = {"x": FlowEntry(document=make_document("x"))}

    assert flows_reducer(flows, action) == flows  # type: ignore[arg-type]


def test_delete_flow_removes_entry(make_document: MakeDoc) -> None:
    flows = flows_reducer({}, AddFlow(flow=make_document("x")))
    flows = flows_reducer(flows, AddFlow(flow=make_document("y")))

    flows = flows_reducer(flows, DeleteFlow(id="x"))

    assert list(flows) == ["y"]


def test_update_flow_replaces_document_and_preserves_ui_state(make_document: MakeDoc) -> None:
    flows = flows_reducer({}, AddFlow(flow=make_document("x", title="Before")))
    flows = flows_reducer(flows, UpdateFlowState(id="x", state={"importModalOpen": True}))

    flows = flows_reducer(
        flows, UpdateFlow(id="x", flow=make_document("x", title="After", n1={"id": "n1"}))
    )

    assert flows["x"].document.meta.title == "After"
    assert flows["x"].document.nodes == {"n1": {"id": "n1"}}
    assert flows["x"].uiState.importModalOpen is True


def test_update_flow_keeps_key_and_document_id_in_sync(make_document: MakeDoc) -> None:
    flows = flows_reducer({}, AddFlow(flow=make_document("x")))

    flows = flows_reducer(flows, UpdateFlow(id="x", flow=make_document("other", title="Imported")))

    assert list(flows) == ["x"]
    assert flows["x"].document.id == "x"
    assert flows["x"].document.meta.title == "Imported"


def test_update_flow_state_merges_shallowly(make_document: MakeDoc) -> None:
    doc = make_document("x")
    flows = flows_reducer({}, AddFlow(flow=doc))
    flows = flows_reducer(flows, UpdateFlowState(id="x", state={"zoom": 2}))

    flows = flows_reducer(flows, UpdateFlowState(id="x", state={"importModalOpen": True}))

    assert flows["x"].document == doc
    assert flows["x"].uiState.importModalOpen is True
    assert flows["x"].uiState.model_dump() == {"importModalOpen": True, "zoom": 2}


def test_unknown_action_is_a_programming_error() -> None:
    with pytest.raises(TypeError):
        flows_reducer({}, object())  # type: ignore[arg-type]


def test_sequential_fold_is_deterministic(make_document: MakeDoc) -> None:
    actions = [
        AddFlow(flow=make_document("a")),
        AddFlow(flow=make_document("b")),
        UpdateFlowState(id="a", state={"importModalOpen": True}),
        UpdateFlow(id="b", flow=make_document("b", title="B2")),
        DeleteFlow(id="a"),
        UpdateFlowState(id="a", state={"importModalOpen": False}),
    ]

    first = reduce(flows_reducer, actions, {})
    second = reduce(flows_reducer, actions, {})

    assert first == second
    assert list(first) == ["b"]
    assert first["b"].document.meta.title == "B2"


def test_add_and_update_store_copies_of_the_document(make_document: MakeDoc) -> None:
    added = make_document("x", n1={"id": "n1"})
    updated = make_document("x", title="Updated", n1={"id": "n1"})

    flows = flows_reducer({}, AddFlow(flow=added))
    added.nodes["n1"]["id"] = "changed"
    assert flows["x"].document.nodes == {"n1": {"id": "n1"}}

    flows = flows_reducer(flows, UpdateFlow(id="x", flow=updated))
    updated.nodes["n1"]["id"] = "changed"
    assert flows["x"].document.nodes == {"n1": {"id": "n1"}}
