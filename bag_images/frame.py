from dataclasses import dataclass


@dataclass(frozen=True)
class Frame:
    """One image message taken out of a bag.

    ``stamp_ns`` is the header stamp in nanoseconds and is never negative.
    For compressed frames ``data`` holds the encoded stream, ``format`` the
    message format string and ``encoding`` the raw encoding announced in it,
    or an empty string.
    """

    topic: str
    encoding: str
    stamp_ns: int
    height: int = 0
    width: int = 0
    step: int = 0
    is_bigendian: bool = False
    data: bytes = b""
    compressed: bool = False
    format: str = ""

    def __post_init__(self):
        if self.stamp_ns < 0:
            raise ValueError(f"Image stamp {self.stamp_ns} ns is before the epoch")
