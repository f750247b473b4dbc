# region Imports
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from clipcore.utils import get_time

# endregion
# region Pydantic Models


class CleanupWarning(BaseModel):
    """
    A blob file that could not be removed during eviction or clearing.

    Attributes:
        entry_id (str): ID of the entry the blob belonged to.
        filename (str): Blob filename inside the history directory.
        reason (Literal["evict", "clear"]): Operation that tried to delete the blob.
        message (str): The error reported by the filesystem.
    """

    entry_id: str = Field(..., description="ID of the entry the blob belonged to")
    filename: str = Field(..., description="Blob filename inside the history directory")
    reason: Literal["evict", "clear"] = Field(
        ..., description="Operation that tried to delete the blob"
    )
    message: str = Field(..., description="The error reported by the filesystem")
    occurred_at: datetime = Field(
        default_factory=get_time, description="When the delete was attempted"
    )


class CleanupReport(BaseModel):
    """Outcome of HistoryStore.clear_history()."""

    removed_entries: int = Field(0, description="Number of entries removed")
    removed_blobs: list[str] = Field(
        default_factory=list, description="Blob filenames deleted from disk"
    )
    warnings: list[CleanupWarning] = Field(
        default_factory=list, description="Blobs that could not be deleted"
    )

    @property
    def ok(self) -> bool:
        """True when every blob was removed."""
        return not self.warnings


# endregion

__all__ = ["CleanupWarning", "CleanupReport"]
