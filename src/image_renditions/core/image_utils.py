"""Image processing utilities for the renditions pipeline."""

from typing import Dict, Tuple

from PIL import Image

# Extension (as found on the key) -> Pillow format name
TYPE_FORMATS: Dict[str, str] = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
}

FORMAT_CONTENT_TYPES: Dict[str, str] = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
}


def format_for_type(image_type: str) -> str:
    """
    Map a key extension to the Pillow format used to encode renditions.

    Args:
        image_type: Extension such as "jpg" or "png"

    Returns:
        Pillow format name

    Raises:
        ValueError: If the extension has no known encoder
    """
    try:
        return TYPE_FORMATS[image_type.lower()]
    except KeyError:
        raise ValueError(f"No encoder for image type: {image_type}")


def content_type_for_format(format_name: str) -> str:
    return FORMAT_CONTENT_TYPES.get(format_name.upper(), "application/octet-stream")


def crop_fits(size: Tuple[int, int], box: Tuple[int, int, int, int]) -> bool:
    """Check that a (left, upper, right, lower) box lies inside an image of ``size``."""
    width, height = size
    left, upper, right, lower = box
    return 0 <= left < right <= width and 0 <= upper < lower <= height


def crop_and_resize(
    img: "Image.Image", box: Tuple[int, int, int, int], size: Tuple[int, int]
) -> "Image.Image":
    """
    Crop an image to ``box`` then resize it to ``size``.

    Args:
        img: PIL Image to transform
        box: Crop rectangle as (left, upper, right, lower)
        size: Output (width, height)

    Returns:
        Transformed PIL Image
    """
    cropped = img.crop(box)
    if cropped.size == size:
        return cropped
    return cropped.resize(size, Image.Resampling.LANCZOS)


def prepare_for_format(img: "Image.Image", format_name: str) -> "Image.Image":
    """Convert modes the target encoder cannot write."""
    if format_name == "JPEG" and img.mode not in ("RGB", "L", "CMYK"):
        if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
            # Flatten transparency onto white
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[-1])
            return background
        return img.convert("RGB")
    return img
