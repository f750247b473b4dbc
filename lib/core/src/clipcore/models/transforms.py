# region Docstring
"""
clipcore.models.transforms
Result models for the clipboard transforms (text replacer, image extractor, transcriber).
Overview:
- The transforms are stateless and never touch the history store; these models are
    what they hand back to the content handler and the CLI.
Contents:
- ReplacementPair: one parsed "search:replace" pair.
- ColorSwatch: one palette colour with its share of the sampled image area.
- ImageExtractionResult: saved/copied image paths plus the extracted palette.
- TranscriptionResult: the transcript text and the files it came from.
"""
# endregion
# region Imports
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# endregion
# region Pydantic Models
class ReplacementPair(BaseModel):
    search: str = Field(..., min_length=1, description="Regular expression to search for")
    replace: str = Field(..., description="Replacement text")


class ColorSwatch(BaseModel):
    """
    A palette colour extracted from an image.

    Attributes:
        red, green, blue (int): Channel values 0-255.
        area (float): Share of sampled pixels using this colour (0.0-1.0).
    """

    red: int = Field(..., ge=0, le=255)
    green: int = Field(..., ge=0, le=255)
    blue: int = Field(..., ge=0, le=255)
    area: float = Field(..., ge=0.0, le=1.0)

    @computed_field
    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


class ImageExtractionResult(BaseModel):
    saved_paths: list[Path] = Field(
        default_factory=list, description="Images written or copied to the output dir"
    )
    width: Optional[int] = Field(None, description="Width of the analysed image")
    height: Optional[int] = Field(None, description="Height of the analysed image")
    colors: list[ColorSwatch] = Field(
        default_factory=list, description="Palette sorted by area, largest first"
    )


class TranscriptionResult(BaseModel):
    text: str = Field(..., description="Transcript with timestamps removed")
    source_path: Path = Field(..., description="Audio file that was transcribed")
    audio_path: Path = Field(..., description="Copy of the audio in the output dir")


# endregion

__all__ = [
    "ReplacementPair",
    "ColorSwatch",
    "ImageExtractionResult",
    "TranscriptionResult",
]
