"""Keeps the local flow store consistent with the remote service and with files.

The coordinator is the only place that combines the codec with the remote
service. It changes local state exclusively through ``FlowStore.dispatch``,
so remote updates and local edits share one consistency path.

Remote calls run in a worker thread; every dispatch happens back on the
calling event loop, after the await, so no transition is split across a
suspension point.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from flow_store.codec import DEFAULT_EXTENSION, decode, encode, export_filename
from flow_store.errors import FormatError, RemoteError
from flow_store.flows.actions import AddFlow, UpdateFlow
from flow_store.flows.factory import create_flow
from flow_store.flows.store import FlowStore
from flow_store.ports import Notifier, RemoteWorkflowRecord, WorkflowRemote, loading

logger = logging.getLogger(__name__)

MSG_PULL_LOADING = "Loading workflows..."
MSG_PULL_FAILED = "Failed to load workflows"
MSG_PUSH_LOADING = "Saving..."
MSG_PUSH_FAILED = "Save failed"
MSG_PUSH_NOTHING_OPEN = "No workflow is open"
MSG_EXPORT_LOADING = "Exporting..."
MSG_EXPORT_FAILED = "Export failed"
MSG_IMPORT_FAILED = "Import failed"


@dataclass(frozen=True, slots=True)
class PullResult:
    ok: bool
    message: str
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: int = 0


@dataclass(frozen=True, slots=True)
class PushResult:
    ok: bool
    message: str
    flow_id: str | None = None


class FlowSyncCoordinator:
    def __init__(
        self,
        *,
        store: FlowStore,
        remote: WorkflowRemote,
        notifier: Notifier,
        export_dir: Path = Path("."),
        export_extension: str = DEFAULT_EXTENSION,
    ) -> None:
        self._store = store
        self._remote = remote
        self._notifier = notifier
        self._export_dir = export_dir
        self._export_extension = export_extension

    async def pull_merge(self) -> PullResult:
        """Fold the remote listing into the store, one record at a time.

        A record without an id, without workflow text, or whose text does not
        decode is skipped without affecting the rest of the batch. Records are
        merged in listing order and committed as they are processed.
        """
        with loading(self._notifier, MSG_PULL_LOADING):
            try:
                records = await asyncio.to_thread(self._remote.list_workflows)
            except RemoteError as e:
                logger.warning("Workflow listing failed", extra={"error": str(e)})
                self._notifier.show_error(MSG_PULL_FAILED)
                return PullResult(ok=False, message=str(e))

            added: list[str] = []
            updated: list[str] = []
            skipped = 0
            for record in records:
                outcome = self._merge_record(record)
                if outcome == "added":
                    added.append(record.id or "")
                elif outcome == "updated":
                    updated.append(record.id or "")
                else:
                    skipped += 1

        logger.info(
            "Pull-merge finished",
            extra={"added": len(added), "updated": len(updated), "skipped": skipped},
        )
        return PullResult(
            ok=True,
            message=f"Merged {len(added) + len(updated)} workflow(s), skipped {skipped}",
            added=added,
            updated=updated,
            skipped=skipped,
        )

    def _merge_record(self, record: RemoteWorkflowRecord) -> Literal["added", "updated"] | None:
        if not record.id or not record.workflow:
            logger.warning("Skipping incomplete remote workflow", extra={"flow_id": record.id})
            return None

        try:
            flow = decode(record.workflow)
        except FormatError as e:
            logger.warning(
                "Skipping undecodable remote workflow",
                extra={"flow_id": record.id, "error": str(e)},
            )
            return None

        if self._store.get_flow(record.id) is not None:
            self._store.dispatch(UpdateFlow(id=record.id, flow=flow))
            return "updated"

        # Ensure the id exists first so UpdateFlow never addresses a missing entry.
        self._store.dispatch(AddFlow(flow=create_flow(record.id, flow.meta, {})))
        self._store.dispatch(UpdateFlow(id=record.id, flow=flow))
        return "added"

    async def push(self) -> PushResult:
        """Save the open document remotely, overwriting any remote copy."""
        document = self._store.current_document()
        if not document.id:
            self._notifier.show_error(MSG_PUSH_NOTHING_OPEN)
            return PushResult(ok=False, message=MSG_PUSH_NOTHING_OPEN)

        workflow = encode(document)
        with loading(self._notifier, MSG_PUSH_LOADING):
            try:
                await asyncio.to_thread(
                    self._remote.save_workflow, flow_id=document.id, workflow=workflow
                )
            except RemoteError as e:
                logger.warning(
                    "Workflow save failed", extra={"flow_id": document.id, "error": str(e)}
                )
                self._notifier.show_error(MSG_PUSH_FAILED)
                return PushResult(ok=False, message=str(e), flow_id=document.id)

        return PushResult(ok=True, message="Saved", flow_id=document.id)

    def import_flow(self, flow_id: str, text: str) -> bool:
        """Replace the document ``flow_id`` with the one serialized in ``text``."""
        try:
            flow = decode(text)
        except FormatError as e:
            logger.warning("Workflow import failed", extra={"flow_id": flow_id, "error": str(e)})
            self._notifier.show_error(MSG_IMPORT_FAILED)
            return False

        if self._store.get_flow(flow_id) is None:
            logger.debug("Import target missing", extra={"flow_id": flow_id})
            return False

        self._store.dispatch(UpdateFlow(id=flow_id, flow=flow))
        self._store.close_import_modal(flow_id)
        return True

    def export_current(self) -> Path | None:
        """Write the open document to ``<export_dir>/<id>-workflow.<ext>``."""
        with loading(self._notifier, MSG_EXPORT_LOADING):
            document = self._store.current_document()
            if not document.id:
                self._notifier.show_error(MSG_EXPORT_FAILED)
                return None

            path = self._export_dir / export_filename(document, self._export_extension)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(encode(document), encoding="utf-8")
            except OSError as e:
                logger.warning("Workflow export failed", extra={"path": str(path), "error": str(e)})
                self._notifier.show_error(MSG_EXPORT_FAILED)
                return None

        logger.info("Workflow exported", extra={"path": str(path), "flow_id": document.id})
        return path
