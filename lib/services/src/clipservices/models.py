# region Imports

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from clipcore.models.history import HistoryEntry
from clipcore.utils import get_time

# endregion
# region Pydantic Models


class HandlerResult(BaseModel):
    """
    Pydantic model representing the outcome of handling one clipboard capture.
    Attributes:
        content_type (str): The type the capture was classified as.
        entry (Optional[HistoryEntry]): The recorded history entry, None if recording failed.
        action (str): The transform that ran ('transcribe', 'replace', 'extract_colors', ...).
        status (str): 'success', 'skipped' or 'error'.
        output (Any): What the transform produced (transcript, replaced text, result model).
        message (Optional[str]): Additional information, e.g. the error text.
        derived_entry (Optional[HistoryEntry]): Entry recorded for derived text, if any.
    """

    content_type: str = Field(..., description="The type the capture was classified as")
    entry: Optional[HistoryEntry] = Field(
        None, description="The recorded history entry, None if recording failed"
    )
    action: str = Field("none", description="The transform that ran")
    status: Literal["success", "skipped", "error"] = Field(
        "success", description="Outcome of the transform"
    )
    output: Any = Field(None, description="What the transform produced")
    message: Optional[str] = Field(
        None, description="An optional message providing additional information"
    )
    derived_entry: Optional[HistoryEntry] = Field(
        None, description="History entry recorded for derived text"
    )
    handled_at: datetime = Field(
        default_factory=get_time, description="When the capture was handled"
    )

    @property
    def recorded(self) -> bool:
        """True when the capture made it into the history."""
        return self.entry is not None


# endregion
__all__ = ["HandlerResult"]
