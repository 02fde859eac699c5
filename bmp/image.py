from collections import namedtuple

import numpy as np
from construct import Container

from bmp import bmp_codecs

# Resolution written into freshly created images, in pixels per metre
DEFAULT_RESOLUTION = 1000

Pixel = namedtuple("Pixel", ["r", "g", "b"])
Pixel.__doc__ = "A pixel with red, green and blue channels, each 0-255."


def file_size(bpp, width, height):
    """
    Compute the sizes of an uncompressed V3 image written to disk.

    :param bpp: Bits per pixel
    :param width: Width in pixels
    :param height: Height in pixels
    :return: (header_size, data_size) where each row of data is rounded up to a multiple of 4 bytes
    """

    header_size = len(bmp_codecs.BMP_MAGIC) + 12 + bmp_codecs.DIB_HEADER_V3_SIZE
    row_size = ((bpp * width + 31) // 32) * 4
    return header_size, height * row_size


def new_bmp_header(header_size, data_size):
    return Container(
        file_size=header_size + data_size,
        reserved1=0,
        reserved2=0,
        pixel_offset=header_size
    )


def new_dib_header(width, height):
    _, pixel_array_size = file_size(24, width, height)
    return Container(
        header_size=bmp_codecs.DIB_HEADER_V3_SIZE,
        width=width,
        height=height,
        num_planes=1,
        bits_per_pixel=24,
        compress_type=bmp_codecs.CompressionType.UNCOMPRESSED.value,
        data_size=pixel_array_size,
        hres=DEFAULT_RESOLUTION,
        vres=DEFAULT_RESOLUTION,
        num_colors=0,
        num_imp_colors=0
    )


class Image(object):
    """
    A decoded or newly created image.

    Coordinates run in row-major order from the top, so (0, 0) is the upper left corner. Pixels are kept in
    on-disk order, bottom row first.
    """

    def __init__(self, width, height):
        header_size, data_size = file_size(24, width, height)

        self._header = new_bmp_header(header_size, data_size)
        self._dib_header = new_dib_header(width, height)
        self._color_palette = None
        self._width = width
        self._height = height
        self._padding = width % 4
        self._data = [Pixel(0, 0, 0)] * (width * height)

    @classmethod
    def new(cls, width, height):
        """
        Create a black image.

        :param width: Width in pixels
        :param height: Height in pixels
        :return: Image
        """
        return cls(width, height)

    @classmethod
    def from_decoded(cls, header, dib_header, color_palette, width, height, data):
        if len(data) != width * height:
            raise ValueError("Expected {} pixels for a {}x{} image, got {}".format(
                width * height, width, height, len(data)))

        image = cls.__new__(cls)
        image._header = header
        image._dib_header = dib_header
        image._color_palette = color_palette
        image._width = width
        image._height = height
        image._padding = width % 4
        image._data = list(data)
        return image

    @property
    def header(self):
        return self._header

    @property
    def dib_header(self):
        return self._dib_header

    @property
    def color_palette(self):
        return self._color_palette

    @property
    def padding(self):
        return self._padding

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def get_width(self):
        return self._width

    def get_height(self):
        return self._height

    def _pixel_index(self, x, y):
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError("Coordinate ({}, {}) is outside a {}x{} image".format(x, y, self._width, self._height))

        return (self._height - y - 1) * self._width + x

    def get_pixel(self, x, y):
        return self._data[self._pixel_index(x, y)]

    def set_pixel(self, x, y, val):
        self._data[self._pixel_index(x, y)] = Pixel(*val)

    def coordinates(self):
        """
        :return: An ImageIndex over every (x, y) in the image, row by row from the top
        """
        return ImageIndex(self._width, self._height)

    def to_array(self):
        """
        Export the pixels as a uint8 array of shape (height, width, 3), top row first.
        """
        pixels = np.array(self._data, dtype=np.uint8).reshape(self._height, self._width, 3)
        return np.ascontiguousarray(pixels[::-1])

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented

        return (self._header == other._header and
                self._dib_header == other._dib_header and
                self._color_palette == other._color_palette and
                self._width == other._width and
                self._height == other._height and
                self._data == other._data)

    __hash__ = None

    def __repr__(self):
        return "Image(width={}, height={}, palette={})".format(
            self._width, self._height,
            None if self._color_palette is None else len(self._color_palette))


class ImageIndex(object):
    """Iterator over the (x, y) coordinates of an image, starting in the upper left corner."""

    def __init__(self, width, height):
        self._width = width
        self._height = height
        self._x = 0
        self._y = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self._x < self._width and self._y < self._height:
            coordinate = (self._x, self._y)
            self._x += 1
            if self._x == self._width:
                self._x = 0
                self._y += 1
            return coordinate

        raise StopIteration

    def __len__(self):
        if self._width == 0:
            return 0
        return (self._height - self._y) * self._width - self._x
