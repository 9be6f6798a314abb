from .rotation import rotate, rotation_matrix
from .horizontal import to_horizontal, topocentric_offset
from .shift import center_offset, shift, transform
from .bodycentric import orbit_position, to_bodycentric, to_standard_center

__all__ = [
    "rotate",
    "rotation_matrix",
    "to_horizontal",
    "topocentric_offset",
    "center_offset",
    "shift",
    "transform",
    "orbit_position",
    "to_bodycentric",
    "to_standard_center",
]
