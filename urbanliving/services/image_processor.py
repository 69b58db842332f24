"""
Image Processor - Upload Normalization
======================================

Every uploaded photo, whatever its input format (JPEG, PNG, WebP, ...),
is converted into one predictable artifact before it is stored:

1. Decode with Pillow (this is the definitive "is it really an image" check)
2. Apply the EXIF orientation, so phone photos are not stored sideways
3. Drop all metadata (GPS coordinates in listing photos leak addresses of
   staff homes and tenants' units)
4. Flatten transparency onto white and convert to RGB
5. Downscale to fit the bounding box, preserving aspect ratio and never
   upscaling
6. Encode as progressive, optimized JPEG at a fixed quality

The result bounds storage size per photo and means the site only ever
serves one image format.

Example Usage:
-------------
```python
processor = ImageProcessor(max_width=1920, max_height=1080, quality=80)
result = processor.normalize(upload_bytes)
result.data      # JPEG bytes
result.size      # (width, height) after scaling
```
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ImageProcessingError(Exception):
    """Raised when an upload cannot be decoded or re-encoded as an image."""
    pass


@dataclass(frozen=True)
class NormalizedImage:
    """A re-encoded upload ready to be written to storage."""

    data: bytes
    size: Tuple[int, int]
    source_format: Optional[str]


class ImageProcessor:
    """
    Normalizes uploaded photos to bounded-size JPEGs.

    Attributes:
        max_width: Width of the bounding box (default 1920)
        max_height: Height of the bounding box (default 1080)
        quality: JPEG quality, 1-100 (default 80)
    """

    WEB_MAX_WIDTH = 1920
    WEB_MAX_HEIGHT = 1080
    WEB_QUALITY = 80

    def __init__(
        self,
        max_width: int = WEB_MAX_WIDTH,
        max_height: int = WEB_MAX_HEIGHT,
        quality: int = WEB_QUALITY,
    ) -> None:
        if max_width <= 0 or max_height <= 0:
            raise ValueError("Bounding box dimensions must be positive")
        if not 1 <= quality <= 100:
            raise ValueError("JPEG quality must be between 1 and 100")
        self.max_width = max_width
        self.max_height = max_height
        self.quality = quality

    def normalize(self, data: bytes) -> NormalizedImage:
        """
        Run an uploaded file through the normalization pipeline.

        Args:
            data: Raw bytes exactly as uploaded

        Returns:
            NormalizedImage with JPEG bytes and final dimensions

        Raises:
            ImageProcessingError: If Pillow cannot decode the bytes, the
                image is a decompression bomb, or encoding fails
        """
        try:
            with Image.open(io.BytesIO(data)) as source:
                source_format = source.format
                # Force decoding now; Image.open is lazy and truncated files
                # only fail once pixel data is read
                source.load()
                image = self._prepare(source)
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise ImageProcessingError(f"Not a readable image: {e}")
        except (OSError, SyntaxError, ValueError) as e:
            # Pillow raises these for truncated or corrupt files
            raise ImageProcessingError(f"Could not decode image: {e}")

        image = self.fit_within_bounds(image)

        buffer = io.BytesIO()
        try:
            image.save(
                buffer,
                format="JPEG",
                quality=self.quality,
                optimize=True,
                # Progressive JPEG loads "blurry first, then sharp"
                progressive=True,
            )
        except OSError as e:
            raise ImageProcessingError(f"Could not encode JPEG: {e}")

        logger.debug(
            f"Normalized {source_format or 'unknown'} image to JPEG "
            f"{image.size[0]}x{image.size[1]} ({buffer.tell()} bytes)"
        )
        return NormalizedImage(data=buffer.getvalue(), size=image.size, source_format=source_format)

    def _prepare(self, image: Image.Image) -> Image.Image:
        """Orient, strip metadata and convert to plain RGB."""
        # EXIF orientation must be applied before the metadata is dropped
        image = ImageOps.exif_transpose(image) or image

        if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
            rgba = image.convert("RGBA")
            # JPEG has no alpha channel: composite onto white
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[3])
            return background

        converted = image.convert("RGB")
        # convert() copies info; drop exif/icc/comments so save() cannot carry them over
        converted.info = {}
        return converted

    def fit_within_bounds(self, image: Image.Image) -> Image.Image:
        """
        Downscale to fit the bounding box, keeping the aspect ratio.

        Examples (1920x1080 box):
        - 4000x3000 → 1440x1080 (height bound)
        - 3840x1080 → 1920x540 (width bound)
        - 800x600 → 800x600 (never upscaled)
        """
        width, height = image.size
        if width <= self.max_width and height <= self.max_height:
            return image

        resized = image.copy()
        # thumbnail() preserves aspect ratio and only ever shrinks
        resized.thumbnail((self.max_width, self.max_height), Image.Resampling.LANCZOS)
        logger.debug(f"Downscaled image: {width}x{height} → {resized.size}")
        return resized
