#!/usr/bin/env python3

import argparse
import logging
import sys

from bag_images.bag_processor import ImageBagProcessor
from bag_images.image_saver import ImageSaver

PROG = "extract-images"

logger = logging.getLogger(__name__)


def print_usage():
    print(f"Usage: {PROG} OUT_DIR FILETYPE IMAGE_TOPIC BAGFILE [BAGFILE...]")
    print(f"  Example: {PROG} /tmp jpg /stereo_down/left/image_raw bag1.bag bag2.bag")


def extract_images(out_dir, filetype, image_topic, bag_files, prefix="image", show_progress=True):
    """
    Save every image published on ``image_topic`` in the given bags to ``out_dir``.

    Bags are processed one after the other in the order given. ``out_dir`` must
    already exist.

    Returns:
        ImageSaver: the saver used, its ``num_saved`` holds the number of written files.
    """
    saver = ImageSaver(out_dir, filetype, prefix)
    processor = ImageBagProcessor(image_topic, show_progress=show_progress)
    processor.register_callback(saver.save)

    for bag_file in bag_files:
        processor.process_bag(bag_file)

    return saver


def main(argv=None):
    parser = argparse.ArgumentParser(prog=PROG, description="Extract images of one topic from ROS bag files.")
    parser.add_argument("out_dir", nargs="?", help="Existing directory the images are written to.")
    parser.add_argument("filetype", nargs="?", help="Image file extension, e.g. jpg or png.")
    parser.add_argument("image_topic", nargs="?", help="Image topic to extract.")
    parser.add_argument("bag_files", nargs="*", help="Bag files, processed in the given order.")
    parser.add_argument("--prefix", default="image", help="File name prefix (default: image).")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level.")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    # options may follow the positionals, e.g. OUT_DIR png TOPIC --no-progress a.bag
    args = parser.parse_intermixed_args(argv)

    # Missing arguments are not treated as an error
    if args.image_topic is None:
        print_usage()
        return 0

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    saver = extract_images(args.out_dir, args.filetype, args.image_topic, args.bag_files,
                           prefix=args.prefix, show_progress=not args.no_progress)
    logger.info(f"Saved {saver.num_saved} images to {args.out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
