from bag_images.bag_processor import ImageBagProcessor, frame_from_message
from bag_images.encodings import DecodeMode, MONO_ENCODINGS, decode_mode
from bag_images.frame import Frame
from bag_images.image_saver import ImageSaver
from bag_images.processor import ImageProcessor, ImageSet, OpenCVImageProcessor

__version__ = "0.1.0"
