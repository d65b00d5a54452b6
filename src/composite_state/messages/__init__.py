from .plant_state import HEADER_BYTES, PlantStateMessage, now_utime

__all__ = [
    "HEADER_BYTES",
    "PlantStateMessage",
    "now_utime",
]
