import pytest

from bag_images.encodings import DecodeMode, MONO_ENCODINGS, decode_mode


@pytest.mark.parametrize("encoding", sorted(MONO_ENCODINGS))
def test_mono_encodings_select_mono(encoding):
    assert decode_mode(encoding) is DecodeMode.MONO


@pytest.mark.parametrize("encoding", [
    "rgb8", "bgr8", "rgba16", "bayer_rggb8", "bayer_grbg16", "yuv422",
    "8UC3", "32FC4", "16UC2", "", "MONO8", "mono8 ", "jpeg", "not-an-encoding",
])
def test_everything_else_selects_color(encoding):
    assert decode_mode(encoding) is DecodeMode.COLOR


def test_mono_set_is_exactly_the_single_channel_types():
    assert MONO_ENCODINGS == {
        "mono8", "mono16", "32FC1", "32SC1", "8UC1", "8SC1", "16UC1", "16SC1", "64FC1",
    }
