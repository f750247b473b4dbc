# region Docstring
"""
clipservices.image_extractor
Saves copied images and extracts their dominant colours with Pillow.
Overview:
- Raw image bytes are written to the output directory as "clipboard_image_<ms>.png" and
    quantized to a small palette. Each palette colour is reported with the share of the
    sampled pixels it covers.
- A list of copied paths is filtered to image extensions and those files are copied into
    the output directory.
Contents:
- Service Classes:
    - ImageExtractor:
        process(data) dispatches on bytes vs. paths; extract_colors(data) and
        copy_image_files(paths) do the work.
Design Notes:
- Images are downsampled to fit sample_size before quantizing; the palette only needs
    proportions, not every pixel.
- Images with an alpha channel are composited onto white before analysis, so fully
    transparent pixels count as white.
- The extractor never touches the history store.
"""
# endregion
# region Imports
import shutil
import time
from io import BytesIO
from logging import Logger
from pathlib import Path
from typing import Sequence, Union

from PIL import Image, UnidentifiedImageError

from clipcore.config import TransformSettings
from clipcore.errors import ImageExtractionError
from clipcore.models.transforms import ColorSwatch, ImageExtractionResult
from clipcore.utils import is_image_file, normalize_paths


# endregion
# region Service Classes
class ImageExtractor:
    """
    Service for saving clipboard images and extracting their palette.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        logger: Logger,
        max_colors: int = 8,
        sample_size: tuple[int, int] = (256, 256),
    ):
        """
        Initializes the ImageExtractor.

        Args:
            output_dir (Union[str, Path]): Directory where images are saved or copied.
            logger (Logger): The logger instance for logging.
            max_colors (int): Number of palette colours to extract.
            sample_size (tuple[int, int]): Box images are downsampled into before quantizing.
        """
        self.output_dir = Path(output_dir)
        self.logger = logger.getChild("ImageExtractor")
        self.max_colors = max_colors
        self.sample_size = sample_size

    @classmethod
    def from_settings(cls, settings: TransformSettings, logger: Logger) -> "ImageExtractor":
        return cls(
            output_dir=settings.output_dir,
            logger=logger,
            max_colors=settings.max_colors,
            sample_size=settings.sample_size,
        )

    def process(
        self, data: Union[bytes, bytearray, str, Path, Sequence[Union[str, Path]]]
    ) -> ImageExtractionResult:
        """Extract colours from image bytes, or copy image files from a list of paths."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            return self.extract_colors(bytes(data))
        return self.copy_image_files(normalize_paths(data))

    def extract_colors(self, data: bytes) -> ImageExtractionResult:
        """
        Save image bytes to the output directory and extract the dominant colours.

        Raises:
            ImageExtractionError: The bytes are not a readable image or cannot be saved.
        """
        try:
            with Image.open(BytesIO(data)) as image:
                image.load()
                width, height = image.size
                sample = self._prepare_sample(image)
        except (UnidentifiedImageError, OSError) as e:
            raise ImageExtractionError(f"Unreadable image data: {e}") from e

        image_path = self.output_dir / f"clipboard_image_{int(time.time() * 1000)}.png"
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            image_path.write_bytes(data)
        except OSError as e:
            raise ImageExtractionError(f"Cannot save image to {image_path}: {e}") from e

        colors = self._palette(sample)
        self.logger.info(
            f"Image saved and analyzed: {image_path} "
            f"({', '.join(color.hex for color in colors)})"
        )
        return ImageExtractionResult(
            saved_paths=[image_path], width=width, height=height, colors=colors
        )

    def copy_image_files(self, paths: Sequence[str]) -> ImageExtractionResult:
        """
        Copy every path with an image extension into the output directory.

        Raises:
            ImageExtractionError: A file could not be copied.
        """
        image_files = [Path(path) for path in paths if is_image_file(path)]
        if not image_files:
            self.logger.info("No image files found in clipboard data")
            return ImageExtractionResult()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        saved: list[Path] = []
        for image_path in image_files:
            dest_path = self.output_dir / image_path.name
            try:
                shutil.copyfile(image_path, dest_path)
            except OSError as e:
                raise ImageExtractionError(f"Cannot copy {image_path}: {e}") from e
            self.logger.info(f"Image saved: {dest_path}")
            saved.append(dest_path)
        return ImageExtractionResult(saved_paths=saved)

    def _prepare_sample(self, image: Image.Image) -> Image.Image:
        if image.mode in ("RGBA", "LA") or (
            image.mode == "P" and "transparency" in image.info
        ):
            rgba = image.convert("RGBA")
            background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
            sample = Image.alpha_composite(background, rgba).convert("RGB")
        else:
            sample = image.convert("RGB")
        sample.thumbnail(self.sample_size)
        return sample

    def _palette(self, sample: Image.Image) -> list[ColorSwatch]:
        quantized = sample.quantize(colors=self.max_colors)
        palette = quantized.getpalette() or []
        counts = quantized.getcolors(maxcolors=256) or []
        total = sum(count for count, _ in counts) or 1

        swatches = []
        for count, index in sorted(counts, key=lambda item: item[0], reverse=True):
            red, green, blue = palette[index * 3 : index * 3 + 3]
            swatches.append(
                ColorSwatch(red=red, green=green, blue=blue, area=round(count / total, 4))
            )
        return swatches


# endregion
__all__ = ["ImageExtractor"]
