import numpy as np
import pytest
from rosbags.rosbag1 import Writer
from rosbags.typesys import Stores, get_typestore

TYPESTORE = get_typestore(Stores.ROS1_NOETIC)

Header = TYPESTORE.types["std_msgs/msg/Header"]
Time = TYPESTORE.types["builtin_interfaces/msg/Time"]
Image = TYPESTORE.types["sensor_msgs/msg/Image"]
CompressedImage = TYPESTORE.types["sensor_msgs/msg/CompressedImage"]


def _header(stamp_ns):
    sec, nanosec = divmod(stamp_ns, 1_000_000_000)
    return Header(seq=0, stamp=Time(sec=sec, nanosec=nanosec), frame_id="camera")


def image_msg(stamp_ns, pixels, encoding="mono8"):
    pixels = np.ascontiguousarray(pixels)
    height, width = pixels.shape[:2]
    return Image(
        header=_header(stamp_ns),
        height=height,
        width=width,
        encoding=encoding,
        is_bigendian=0,
        step=pixels.nbytes // height,
        data=np.frombuffer(pixels.tobytes(), dtype=np.uint8),
    )


def compressed_msg(stamp_ns, payload, format="jpeg"):
    return CompressedImage(
        header=_header(stamp_ns),
        format=format,
        data=np.frombuffer(payload, dtype=np.uint8),
    )


def stamp_of(msg):
    return msg.header.stamp.sec * 1_000_000_000 + msg.header.stamp.nanosec


@pytest.fixture
def write_bag(tmp_path):
    """Return a function writing ``[(topic, msg), ...]`` into a ROS1 bag."""

    def _write(name, messages, compression=None):
        path = tmp_path / name
        writer = Writer(path)
        if compression is not None:
            writer.set_compression(compression)
        with writer:
            connections = {}
            for topic, msg in messages:
                key = (topic, msg.__msgtype__)
                if key not in connections:
                    connections[key] = writer.add_connection(topic, msg.__msgtype__, typestore=TYPESTORE)
                writer.write(connections[key], stamp_of(msg),
                             TYPESTORE.serialize_ros1(msg, msg.__msgtype__))
        return path

    return _write


@pytest.fixture
def out_dir(tmp_path):
    path = tmp_path / "images"
    path.mkdir()
    return path
