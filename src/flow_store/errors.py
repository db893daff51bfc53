"""Error taxonomy for the flow store.

None of these are fatal: the sync coordinator catches them and turns them into
user-visible notifications.
"""

from __future__ import annotations


class FlowError(Exception):
    pass


class FormatError(FlowError, ValueError):
    """Serialized workflow text could not be decoded."""


class NotFoundError(FlowError, KeyError):
    """An operation addressed a flow id that is not in the collection."""

    def __init__(self, flow_id: str) -> None:
        super().__init__(flow_id)
        self.flow_id = flow_id

    def __str__(self) -> str:
        return f"Flow not found: {self.flow_id}"


class RemoteError(FlowError):
    """The workflow persistence service could not be reached or answered badly."""
