"""Data types shared by the sync stages."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlaylistDescriptor:
    """A resolved playlist."""

    id: str
    title: str
    description: str = ""


class SyncStatus:
    """Final state of a sync run."""

    COMPLETED = "completed"
    CONFIGURATION_ERROR = "configuration_error"
    AUTHORIZATION_REQUIRED = "authorization_required"
    FAILED = "failed"


@dataclass
class SyncSummary:
    """Counts reported at the end of a sync run."""

    status: str = SyncStatus.FAILED
    source_count: int = 0
    destination_count: int = 0
    missing_count: int = 0
    extra_count: int = 0
    added_count: int = 0
    failed_count: int = 0
    final_count: int = 0
    playlist_id: Optional[str] = None
    playlist_title: Optional[str] = None
    authorization_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def shortfall(self) -> int:
        """Number of source videos the destination is still short of."""
        return max(self.source_count - self.final_count, 0)

    @property
    def succeeded(self) -> bool:
        return self.status == SyncStatus.COMPLETED
