#!/usr/bin/env python3
"""Programmatic flow store example.

This demonstrates using the flow store components directly:

* load settings from `.env`
* pull every workflow from the persistence service into an in-memory store
* create a new workflow from an agent template and push it back
* export it to `<id>-workflow.yml`
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from flow_store.config import FlowSettings
from flow_store.flows import ChatAgent, FlowStore
from flow_store.logging import configure_logging
from flow_store.ports import InMemoryNavigator, LoggingNotifier
from flow_store.remote import WorkflowServiceClient
from flow_store.sync import FlowSyncCoordinator


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create and push a workflow (programmatic example)."
    )
    parser.add_argument(
        "--agent-title", required=True, help="Title of the agent to base the flow on"
    )
    parser.add_argument("--system-role", default="", help="System prompt for the seed node")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace, settings: FlowSettings) -> int:
    remote = WorkflowServiceClient(
        base_url=settings.service_url,
        token=settings.service_token,
        timeout_seconds=settings.service_timeout_seconds,
    )
    try:
        store = FlowStore(navigator=InMemoryNavigator(), default_model=settings.default_model)
        sync = FlowSyncCoordinator(
            store=store,
            remote=remote,
            notifier=LoggingNotifier(),
            export_dir=settings.export_dir,
            export_extension=settings.export_extension,
        )

        pulled = await sync.pull_merge()
        print(pulled.message)

        agent = ChatAgent(id="example-agent", title=args.agent_title, content=args.system_role)
        flow_id = store.create_flow_from_agent(agent)

        pushed = await sync.push()
        if not pushed.ok:
            print(f"Push failed: {pushed.message}")
            return 1

        path = sync.export_current()
        print(f"Created {flow_id}; exported to {path}")
        return 0
    finally:
        remote.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = FlowSettings()
    configure_logging(settings.log_level)
    return asyncio.run(_run(args, settings))


if __name__ == "__main__":
    raise SystemExit(main())
