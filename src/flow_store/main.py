"""CLI entrypoint for working with workflows stored on the persistence service.

Each invocation builds a fresh in-memory store, pulls the remote listing into
it and then runs one command against that store.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from flow_store import __version__
from flow_store.codec import decode
from flow_store.config import FlowSettings
from flow_store.errors import FormatError, NotFoundError
from flow_store.flows.actions import AddFlow
from flow_store.flows.store import FlowStore
from flow_store.logging import configure_logging
from flow_store.ports import InMemoryNavigator, LoggingNotifier, flow_path
from flow_store.remote import WorkflowServiceClient
from flow_store.sync import FlowSyncCoordinator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flow-store",
        description="Pull, push and export workflows kept on the workflow persistence service",
    )
    parser.add_argument("--version", action="version", version=f"flow-store {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("pull", help="Pull every remote workflow and list what was merged")

    export = subparsers.add_parser(
        "export", help="Pull remote workflows and write one of them to a YAML file"
    )
    export.add_argument("--flow-id", required=True, help="Id of the workflow to export")
    export.add_argument(
        "--out-dir",
        default=None,
        help="Directory for the exported file (defaults to FLOW_EXPORT_DIR)",
    )

    push = subparsers.add_parser("push", help="Save a workflow file to the persistence service")
    push.add_argument("file", help="Path to a YAML (or JSON) workflow file")
    push.add_argument(
        "--flow-id",
        default=None,
        help="Save under this id instead of the id stored in the file",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = FlowSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    remote = WorkflowServiceClient(
        base_url=settings.service_url,
        token=settings.service_token,
        timeout_seconds=settings.service_timeout_seconds,
    )
    navigator = InMemoryNavigator()
    store = FlowStore(
        navigator=navigator,
        default_title=settings.default_title,
        default_model=settings.default_model,
    )
    out_dir = getattr(args, "out_dir", None)
    coordinator = FlowSyncCoordinator(
        store=store,
        remote=remote,
        notifier=LoggingNotifier(),
        export_dir=Path(out_dir) if out_dir else settings.export_dir,
        export_extension=settings.export_extension,
    )

    try:
        if args.command == "pull":
            result = asyncio.run(coordinator.pull_merge())
            if not result.ok:
                print(result.message, file=sys.stderr)
                return 3
            for flow_id, entry in store.flows.items():
                print(f"{flow_id}\t{entry.document.meta.title}")
            print(result.message)
            return 0

        if args.command == "export":
            result = asyncio.run(coordinator.pull_merge())
            if not result.ok:
                print(result.message, file=sys.stderr)
                return 3
            try:
                store.require_flow(args.flow_id)
            except NotFoundError as e:
                print(str(e), file=sys.stderr)
                return 4
            navigator.go_to(flow_path(args.flow_id))
            path = coordinator.export_current()
            if path is None:
                return 1
            print(f"Exported {args.flow_id} to {path}")
            return 0

        if args.command == "push":
            text = Path(args.file).read_text(encoding="utf-8")
            try:
                flow = decode(text)
            except FormatError as e:
                print(str(e), file=sys.stderr)
                return 5
            if args.flow_id:
                flow = flow.model_copy(update={"id": args.flow_id})
            store.dispatch(AddFlow(flow=flow))
            navigator.go_to(flow_path(flow.id))

            pushed = asyncio.run(coordinator.push())
            if not pushed.ok:
                print(pushed.message, file=sys.stderr)
                return 3
            print(f"Saved {pushed.flow_id}")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1

    finally:
        remote.close()


if __name__ == "__main__":
    raise SystemExit(main())
