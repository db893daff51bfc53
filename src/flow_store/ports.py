"""Capabilities the flow store consumes from its environment.

Navigation, user notifications and the remote persistence service are injected
so the store and the coordinator can run without a UI.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

FLOW_ROUTE_PREFIX = "/flow"

Dismiss = Callable[[], None]


@dataclass(frozen=True, slots=True)
class RemoteWorkflowRecord:
    """One item of the remote listing. Either field may be missing."""

    id: str | None
    workflow: str | None

    @staticmethod
    def from_json(obj: object) -> RemoteWorkflowRecord:
        if not isinstance(obj, dict):
            return RemoteWorkflowRecord(id=None, workflow=None)
        id_raw = obj.get("id")
        workflow_raw = obj.get("workflow")
        return RemoteWorkflowRecord(
            id=id_raw if isinstance(id_raw, str) and id_raw else None,
            workflow=workflow_raw if isinstance(workflow_raw, str) and workflow_raw else None,
        )


class WorkflowRemote(Protocol):
    def list_workflows(self) -> list[RemoteWorkflowRecord]: ...

    def save_workflow(self, *, flow_id: str, workflow: str) -> None: ...


class Navigator(Protocol):
    def go_to(self, path: str) -> None: ...

    def current_flow_id(self) -> str | None: ...


class Notifier(Protocol):
    def show_loading(self, message: str) -> Dismiss: ...

    def show_error(self, message: str) -> None: ...


def flow_path(flow_id: str | None = None) -> str:
    if not flow_id:
        return FLOW_ROUTE_PREFIX
    return f"{FLOW_ROUTE_PREFIX}/{flow_id}"


def flow_id_from_path(path: str) -> str | None:
    prefix = FLOW_ROUTE_PREFIX + "/"
    if not path.startswith(prefix):
        return None
    flow_id = path[len(prefix) :].split("/", 1)[0]
    return flow_id or None


@dataclass
class InMemoryNavigator:
    """Records navigation instead of driving a router."""

    path: str = FLOW_ROUTE_PREFIX
    history: list[str] = field(default_factory=list)

    def go_to(self, path: str) -> None:
        logger.debug("Navigating", extra={"path": path})
        self.history.append(path)
        self.path = path

    def current_flow_id(self) -> str | None:
        return flow_id_from_path(self.path)


class LoggingNotifier:
    """Routes user-facing notifications to the log."""

    def show_loading(self, message: str) -> Dismiss:
        logger.info(message)

        def dismiss() -> None:
            logger.debug("Dismissed", extra={"notification": message})

        return dismiss

    def show_error(self, message: str) -> None:
        logger.error(message)


@contextmanager
def loading(notifier: Notifier, message: str) -> Iterator[None]:
    """Show a loading notification for the duration of the block."""
    dismiss = notifier.show_loading(message)
    try:
        yield
    finally:
        dismiss()
