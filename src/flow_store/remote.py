"""HTTP client for the workflow persistence service.

Wraps ``requests`` so the coordinator only ever sees :class:`RemoteError`.
"""

from __future__ import annotations

import logging

import requests

from flow_store.errors import RemoteError
from flow_store.ports import RemoteWorkflowRecord

logger = logging.getLogger(__name__)


class WorkflowServiceClient:
    """Lists and saves serialized workflows on the persistence service.

    Endpoints:
      - ``GET  {base_url}/workflows`` returns a JSON list of ``{"id", "workflow"}``
      - ``POST {base_url}/workflows`` stores ``{"id", "workflow"}``, overwriting any copy
    """

    def __init__(
        self,
        *,
        base_url: str,
        token: str = "",
        timeout_seconds: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("Workflow service URL is required")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": "flow-store",
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    @property
    def base_url(self) -> str:
        return self._base_url

    def list_workflows(self) -> list[RemoteWorkflowRecord]:
        url = f"{self._base_url}/workflows"
        try:
            resp = self._session.get(url, timeout=self._timeout)
            resp.raise_for_status()
            raw = resp.json()
        except requests.RequestException as e:
            raise RemoteError(f"Failed to list workflows: {e}") from e
        except ValueError as e:
            raise RemoteError(f"Workflow listing is not valid JSON: {e}") from e

        if not isinstance(raw, list):
            raise RemoteError(f"Workflow listing must be a list, got {type(raw).__name__}")

        records = [RemoteWorkflowRecord.from_json(item) for item in raw]
        logger.info("Workflows listed", extra={"url": url, "count": len(records)})
        return records

    def save_workflow(self, *, flow_id: str, workflow: str) -> None:
        url = f"{self._base_url}/workflows"
        try:
            resp = self._session.post(
                url, json={"id": flow_id, "workflow": workflow}, timeout=self._timeout
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise RemoteError(f"Failed to save workflow {flow_id}: {e}") from e

        logger.info("Workflow saved", extra={"url": url, "flow_id": flow_id})

    def close(self) -> None:
        self._session.close()
