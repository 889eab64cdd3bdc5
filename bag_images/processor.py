"""Turn raw or compressed image frames into OpenCV rasters."""

import abc
import logging
from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np
from rosbags.image import ImageConversionError, ImageFormatError, message_to_cvimage

from bag_images.encodings import DecodeMode

logger = logging.getLogger(__name__)


@dataclass
class ImageSet:
    mono: Optional[np.ndarray] = None
    color: Optional[np.ndarray] = None


@dataclass
class _ImageMsg:
    __msgtype__ = "sensor_msgs/msg/Image"

    encoding: str
    height: int
    width: int
    step: int
    is_bigendian: int
    data: np.ndarray


@dataclass
class _CompressedImageMsg:
    __msgtype__ = "sensor_msgs/msg/CompressedImage"

    format: str
    data: np.ndarray


def frame_to_message(frame):
    """Rebuild the message fields rosbags.image works on from a Frame."""
    data = np.frombuffer(frame.data, dtype=np.uint8)
    if frame.compressed:
        return _CompressedImageMsg(format=frame.format, data=data)
    return _ImageMsg(
        encoding=frame.encoding,
        height=frame.height,
        width=frame.width,
        step=frame.step,
        is_bigendian=int(frame.is_bigendian),
        data=data,
    )


class ImageProcessor(abc.ABC):
    """Decodes a frame into a mono or a color raster."""

    @abc.abstractmethod
    def process(self, frame, output, mode):
        """Fill ``output.mono`` (MONO) or ``output.color`` (COLOR).

        Returns False if the frame could not be decoded.
        """


class OpenCVImageProcessor(ImageProcessor):
    """Decodes frames with rosbags.image.

    Mono frames keep their native depth, color frames are converted to bgr8
    so they can go straight to cv2.imwrite.
    """

    def process(self, frame, output, mode):
        if mode is DecodeMode.COLOR:
            color_space = "bgr8"
        elif frame.compressed:
            color_space = "mono8"
        else:
            color_space = None
        # a corrupt compressed payload can surface as AttributeError on the decoded None
        try:
            image = message_to_cvimage(frame_to_message(frame), color_space)
        except (ImageConversionError, ImageFormatError, ValueError, TypeError, AttributeError, cv2.error) as e:
            logger.error(f"Could not decode '{frame.encoding}' image stamped {frame.stamp_ns}: {e}")
            return False
        # cv2.imdecode gives None for a corrupt payload
        if image is None or image.size == 0:
            logger.error(f"Could not decode '{frame.encoding}' image stamped {frame.stamp_ns}: empty image")
            return False

        if mode is DecodeMode.MONO:
            output.mono = image
        else:
            output.color = image
        return True
