import logging

import cv2

from bag_images.encodings import DecodeMode, decode_mode
from bag_images.processor import ImageSet, OpenCVImageProcessor

logger = logging.getLogger(__name__)


class ImageSaver:
    """Writes every frame it is given to ``{save_dir}/{prefix}{stamp_ns}.{filetype}``.

    Frames sharing a timestamp map to the same file, the last one written wins.
    Decode and write failures are logged and the frame is skipped, so a bad
    frame never stops the rest of the bag.
    """

    def __init__(self, save_dir, filetype, prefix="image", processor=None):
        self._save_dir = save_dir
        self._filetype = filetype
        self._prefix = prefix
        self._processor = processor if processor is not None else OpenCVImageProcessor()
        self._num_saved = 0

    @property
    def save_dir(self):
        return self._save_dir

    @property
    def filetype(self):
        return self._filetype

    @property
    def prefix(self):
        return self._prefix

    @property
    def num_saved(self):
        return self._num_saved

    def filename(self, frame):
        return f"{self._save_dir}/{self._prefix}{frame.stamp_ns:d}.{self._filetype}"

    def save(self, frame):
        output = ImageSet()
        mode = decode_mode(frame.encoding)
        if not self._processor.process(frame, output, mode):
            logger.error("ERROR Processing image")
            return

        image = output.mono if mode is DecodeMode.MONO else output.color
        filename = self.filename(frame)
        try:
            written = cv2.imwrite(filename, image)
        except cv2.error as e:
            logger.error(f"ERROR Saving {filename}: {e}")
            return
        if not written:
            logger.error(f"ERROR Saving {filename}")
            return

        logger.debug(f"Saved {filename}")
        self._num_saved += 1
