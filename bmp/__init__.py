from bmp import consts
from bmp.bmp_codecs import BmpVersion, CompressionType
from bmp.decode_helpers import decode_image
from bmp.errors import BmpError, BmpErrorKind, WrongMagicNumbers, UnsupportedBitsPerPixel, \
    UnsupportedCompressionType, UnsupportedBmpVersion, UnsupportedHeader
from bmp.image import Image, ImageIndex, Pixel, file_size
from bmp.logging_helpers import initialise_logging


def from_bytes(data):
    """
    Decode a BMP image from its bytes.

    :param data: bytes, bytearray or memoryview holding the whole file
    :return: Image
    :raises BmpError: if the image is not a supported BMP
    """
    return decode_image(data)


decode = from_bytes
