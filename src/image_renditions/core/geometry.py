"""Crop and scale planning for renditions."""

import math

from .models import GeometryPlan, SizeSpec


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def plan_geometry(width: int, height: int, spec: SizeSpec) -> GeometryPlan:
    """
    Compute the crop rectangle and output size for one size spec.

    When ``spec.crop`` is set the source is cut to a centered square whose side
    is the shorter dimension. A square source takes the portrait branch, so
    only ``crop_y`` can be non-zero for it (and both are zero).

    The scaling factor is computed against the crop rectangle, never the
    pre-crop dimensions, so the result fits ``max_width`` x ``max_height``
    with one side meeting its limit.

    Args:
        width: Decoded source width in pixels
        height: Decoded source height in pixels
        spec: Target size

    Returns:
        GeometryPlan for the crop-then-resize transform

    Raises:
        ValueError: If either dimension is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions: {width}x{height}")

    crop_x, crop_y = 0, 0
    crop_width, crop_height = width, height

    if spec.crop:
        if width > height:
            # Landscape
            crop_width = crop_height = height
            crop_x = (width - height) // 2
        else:
            # Portrait or square
            crop_width = crop_height = width
            crop_y = (height - width) // 2

    scaling_factor = min(spec.max_width / crop_width, spec.max_height / crop_height)

    output_width = _round_half_up(scaling_factor * crop_width)
    output_height = _round_half_up(scaling_factor * crop_height)

    return GeometryPlan(
        crop_x=crop_x,
        crop_y=crop_y,
        crop_width=crop_width,
        crop_height=crop_height,
        output_width=min(max(output_width, 1), spec.max_width),
        output_height=min(max(output_height, 1), spec.max_height),
    )
