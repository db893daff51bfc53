"""Test configuration and fixtures."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from unittest.mock import Mock

import pytest

from flow_store.flows.models import FlowMeta, WorkflowDocument
from flow_store.flows.store import FlowStore
from flow_store.ports import InMemoryNavigator
from flow_store.remote import WorkflowServiceClient


class RecordingNotifier:
    """Notifier that remembers what the user would have seen."""

    def __init__(self) -> None:
        self.loading: list[str] = []
        self.dismissed: list[str] = []
        self.errors: list[str] = []

    def show_loading(self, message: str) -> Callable[[], None]:
        self.loading.append(message)
        return lambda: self.dismissed.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def navigator() -> InMemoryNavigator:
    return InMemoryNavigator()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store(navigator: InMemoryNavigator) -> FlowStore:
    """Provide a store with deterministic ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return FlowStore(navigator=navigator, id_factory=lambda: f"id-{next(counter)}")


@pytest.fixture
def remote() -> Mock:
    return Mock(spec=WorkflowServiceClient)


@pytest.fixture
def make_document() -> Callable[..., WorkflowDocument]:
    def _make(
        flow_id: str = "x", title: str = "Flow", **nodes: dict[str, object]
    ) -> WorkflowDocument:
        return WorkflowDocument(id=flow_id, meta=FlowMeta(title=title), nodes=dict(nodes))

    return _make
