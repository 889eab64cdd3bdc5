"""Pixel encodings of sensor_msgs/Image and the decode mode each one maps to."""

import enum


class DecodeMode(enum.Enum):
    MONO = "mono"
    COLOR = "color"


MONO8 = "mono8"
MONO16 = "mono16"
TYPE_32FC1 = "32FC1"
TYPE_32SC1 = "32SC1"
TYPE_8UC1 = "8UC1"
TYPE_8SC1 = "8SC1"
TYPE_16UC1 = "16UC1"
TYPE_16SC1 = "16SC1"
TYPE_64FC1 = "64FC1"

# Frames in these encodings are written as single channel images
MONO_ENCODINGS = frozenset([
    MONO8,
    MONO16,
    TYPE_32FC1,
    TYPE_32SC1,
    TYPE_8UC1,
    TYPE_8SC1,
    TYPE_16UC1,
    TYPE_16SC1,
    TYPE_64FC1,
])


def decode_mode(encoding):
    """Return MONO for the single channel encodings and COLOR for anything else."""
    if encoding in MONO_ENCODINGS:
        return DecodeMode.MONO
    return DecodeMode.COLOR
