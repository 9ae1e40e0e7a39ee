from .stars import (
    StarRenderRecord,
    build_render_records,
    camera_magnitude_limit,
    magnitude_to_brightness,
    spectral_class_color,
)

__all__ = [
    "StarRenderRecord",
    "build_render_records",
    "camera_magnitude_limit",
    "magnitude_to_brightness",
    "spectral_class_color",
]
