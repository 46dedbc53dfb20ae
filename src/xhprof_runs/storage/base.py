"""Abstract base class for run stores."""

from abc import ABC, abstractmethod

from xhprof_runs.models import Payload, RunListing, RunLookup


class RunStore(ABC):
    """Storage backend for profiler runs.

    Callers may pass their own ``run_id`` to ``save_run`` and promise it is
    unique within the namespace. Otherwise the store generates one.
    """

    @abstractmethod
    def save_run(self, payload: Payload, namespace: str = "", run_id: str | None = None) -> str:
        """Save profiler data for a run and return its id."""

    @abstractmethod
    def get_run(self, run_id: str, namespace: str = "") -> RunLookup:
        """Fetch a run's payload together with a short description of it."""

    @abstractmethod
    def delete_run(self, run_id: str, namespace: str = "") -> bool:
        """Delete one run. Returns whether anything was removed."""

    @abstractmethod
    def delete_all_runs(self) -> int:
        """Delete every run in the store. Returns the number removed."""

    @abstractmethod
    def list_runs(self) -> list[RunListing]:
        """List stored runs, most recently modified first."""
