import logging
import os
from pathlib import Path

from rosbags.highlevel import AnyReader, AnyReaderError
from rosbags.rosbag1 import ReaderError as Rosbag1ReaderError
from rosbags.rosbag2 import ReaderError as Rosbag2ReaderError
from rosbags.typesys import Stores, get_typestore
from tqdm import tqdm

from bag_images.frame import Frame

logger = logging.getLogger(__name__)

IMAGE_MSGTYPE = "sensor_msgs/msg/Image"
COMPRESSED_IMAGE_MSGTYPE = "sensor_msgs/msg/CompressedImage"

BAG_ERRORS = (AnyReaderError, Rosbag1ReaderError, Rosbag2ReaderError, OSError, ValueError)


def frame_from_message(msg, topic, compressed=False):
    """Build a Frame from a deserialized Image or CompressedImage message.

    Raises ValueError for a stamp before the epoch.
    """
    stamp_ns = msg.header.stamp.sec * 1_000_000_000 + msg.header.stamp.nanosec
    if compressed:
        # e.g. "mono8; jpeg compressed mono8", or just "jpeg"
        encoding = msg.format.split(";")[0].strip() if ";" in msg.format else ""
        return Frame(topic=topic, encoding=encoding, stamp_ns=stamp_ns,
                     data=bytes(msg.data), compressed=True, format=msg.format)

    return Frame(
        topic=topic,
        encoding=msg.encoding,
        stamp_ns=stamp_ns,
        height=msg.height,
        width=msg.width,
        step=msg.step,
        is_bigendian=bool(msg.is_bigendian),
        data=bytes(msg.data),
    )


class ImageBagProcessor:
    """Reads image messages of one topic out of bag files and hands them to callbacks.

    Works with ROS1 ``.bag`` files and ROS2 bag directories. Frames are
    delivered synchronously, in the order they are stored in the bag.
    """

    def __init__(self, image_topic, show_progress=True):
        self.image_topic = image_topic
        self.show_progress = show_progress
        self._callbacks = []
        self._typestore = get_typestore(Stores.ROS2_HUMBLE)

    def register_callback(self, callback):
        self._callbacks.append(callback)

    def process_bag(self, bag_file):
        """Dispatch every image on the topic in ``bag_file``; returns the frame count.

        A bag that cannot be read, or breaks off half way, is logged and the
        frames dispatched up to that point are counted.
        """
        if not os.path.exists(bag_file):
            logger.error(f"Bag file not found: '{bag_file}'")
            return 0

        logger.info(f"Processing {bag_file} ...")
        # ROS1 bags embed their message definitions, ROS2 bag directories may not
        typestore = self._typestore if os.path.isdir(bag_file) else None
        count = 0
        try:
            with AnyReader([Path(bag_file)], default_typestore=typestore) as reader:
                for frame in self._frames(reader, bag_file):
                    for callback in self._callbacks:
                        callback(frame)
                    count += 1
        except BAG_ERRORS as e:
            logger.error(f"Could not read {bag_file} after {count} images: {e}")
            return count

        logger.info(f"Read {count} images from {bag_file}")
        return count

    def _frames(self, reader, bag_file):
        connections = [
            c for c in reader.connections
            if c.topic == self.image_topic and c.msgtype in (IMAGE_MSGTYPE, COMPRESSED_IMAGE_MSGTYPE)
        ]
        if not connections:
            logger.warning(f"No image messages on topic '{self.image_topic}' in {bag_file}")
            return

        total = sum(c.msgcount for c in connections)
        with tqdm(total=total, unit="msgs", disable=not self.show_progress) as pbar:
            for connection, timestamp, rawdata in reader.messages(connections=connections):
                pbar.update(1)
                try:
                    msg = reader.deserialize(rawdata, connection.msgtype)
                    frame = frame_from_message(
                        msg, connection.topic,
                        compressed=connection.msgtype == COMPRESSED_IMAGE_MSGTYPE)
                except Exception as e:
                    logger.error(f"Skipping message at {timestamp} in {bag_file}: {e}", exc_info=True)
                    continue
                yield frame
