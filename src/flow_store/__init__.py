"""Flow Store.

An in-memory collection of workflow documents changed only through actions,
with a YAML interchange format and pull/push sync against a remote
persistence service.
"""

__version__ = "0.1.0"

from flow_store.config import FlowSettings

__all__ = ["__version__", "FlowSettings"]
