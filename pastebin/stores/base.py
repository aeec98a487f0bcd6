"""Store contract: durable, keyed field maps with optional expiry."""

from abc import ABC, abstractmethod
from typing import Dict, Optional


class PasteStore(ABC):
    """Abstract base for paste storage backends.

    Records are flat ``Dict[str, str]`` maps keyed by paste ID. Backends add
    their own key prefix. Any failure to talk to the backend surfaces as
    ``StoreUnavailableError``.
    """

    @abstractmethod
    def put(self, paste_id: str, fields: Dict[str, str], ttl_seconds: Optional[int] = None) -> None:
        """Write the whole record; expire it after ``ttl_seconds`` when given."""
        ...

    @abstractmethod
    def get(self, paste_id: str) -> Optional[Dict[str, str]]:
        """Return the full field map, or ``None`` if absent or expired."""
        ...

    @abstractmethod
    def delete(self, paste_id: str) -> None:
        """Remove a record.  No-op if it does not exist."""
        ...

    @abstractmethod
    def increment_view(self, paste_id: str, updated_at: str) -> Optional[int]:
        """Atomically bump ``viewCount`` and set ``updatedAt``.

        Returns the new count, or ``None`` without writing anything when
        the record does not exist.
        """
        ...

    @abstractmethod
    def ping(self) -> bool:
        """Return ``True`` if the backend answers."""
        ...

    def close(self) -> None:
        """Release connections held by the backend."""
