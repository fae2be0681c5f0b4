"""Pillow backed transform executor: decode, crop, resize, encode."""

import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from .exceptions import DecodeError, EncodeError, TransformError
from .image_utils import crop_and_resize, crop_fits, prepare_for_format
from .models import GeometryPlan


@dataclass
class DecodedImage:
    """A decoded source image, read-only once created."""

    width: int
    height: int
    format: str
    image: Image.Image


class ImageTransformer:
    """Pure image transform service with no I/O dependencies."""

    def __init__(self, jpeg_quality: int = 95):
        self._jpeg_quality = jpeg_quality

    def decode(self, image_bytes: bytes) -> DecodedImage:
        """Decode image bytes and load the pixel data."""
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (
            UnidentifiedImageError,
            OSError,
            SyntaxError,
            Image.DecompressionBombError,
        ) as exc:
            raise DecodeError(f"Could not decode image: {exc}") from exc

        return DecodedImage(
            width=image.width,
            height=image.height,
            format=image.format or "",
            image=image,
        )

    def render(
        self, decoded: DecodedImage, plan: GeometryPlan, output_format: str
    ) -> bytes:
        """Apply a geometry plan to a decoded image and encode the result."""
        if not crop_fits((decoded.width, decoded.height), plan.crop_box):
            raise TransformError(
                f"Crop box {plan.crop_box} is outside a "
                f"{decoded.width}x{decoded.height} image"
            )
        if plan.output_width <= 0 or plan.output_height <= 0:
            raise TransformError(f"Invalid output size {plan.output_size}")

        try:
            rendition = crop_and_resize(decoded.image, plan.crop_box, plan.output_size)
        except (ValueError, OSError) as exc:
            raise TransformError(f"Crop/resize failed: {exc}") from exc

        output_stream = io.BytesIO()
        try:
            rendition = prepare_for_format(rendition, output_format)
            save_kwargs = {}
            if output_format == "JPEG":
                save_kwargs["quality"] = self._jpeg_quality
            rendition.save(output_stream, format=output_format, **save_kwargs)
        except (KeyError, ValueError, OSError) as exc:
            raise EncodeError(f"Could not encode image as {output_format}: {exc}") from exc

        return output_stream.getvalue()

    def transform(
        self, image_bytes: bytes, plan: GeometryPlan, output_format: str
    ) -> bytes:
        """Decode, crop, resize and encode in one call."""
        return self.render(self.decode(image_bytes), plan, output_format)
