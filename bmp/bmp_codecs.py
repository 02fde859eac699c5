from enum import Enum

from construct import \
    Struct, Const, Byte, Int16ul, Int32ul, Int32sl

BMP_MAGIC = b"BM"

# The container header always occupies the first 14 bytes
BMP_HEADER_SIZE = 14
DIB_HEADER_V3_SIZE = 40

# Every palette entry is four bytes for V3, V4 and V5 headers
COLOR_TABLE_ENTRY_SIZE = 4

SUPPORTED_BITS_PER_PIXEL = (1, 4, 8, 24)
INDEXED_BITS_PER_PIXEL = (1, 4, 8)

bmp_id = Const(BMP_MAGIC)

bmp_header = Struct(
    bmp_id,
    "file_size" / Int32ul,
    "reserved1" / Int16ul,
    "reserved2" / Int16ul,
    "pixel_offset" / Int32ul
)

# Shared prefix of the V3, V4 and V5 headers. The larger variants append
# colour space information which is skipped.
bmp_dib_header = Struct(
    "header_size" / Int32ul,
    "width" / Int32sl,
    "height" / Int32sl,
    "num_planes" / Int16ul,
    "bits_per_pixel" / Int16ul,
    "compress_type" / Int32ul,
    "data_size" / Int32ul,
    "hres" / Int32sl,
    "vres" / Int32sl,
    "num_colors" / Int32ul,
    "num_imp_colors" / Int32ul
)

bmp_color_table = Struct(
    "blue" / Byte,
    "green" / Byte,
    "red" / Byte,
    "reserved" / Byte
)


class BmpVersion(Enum):
    TWO = "BMP Version 2"
    THREE = "BMP Version 3"
    THREE_NT = "BMP Version 3 NT"
    FOUR = "BMP Version 4"
    FIVE = "BMP Version 5"

    @classmethod
    def from_dib_header(cls, dib_header):
        """
        Infer the format version from the header size, using the compression type to tell V3 and V3 NT apart.

        :param dib_header: A parsed format header
        :return: A BmpVersion, or None if the header size is unknown
        """
        header_size = dib_header.header_size

        if header_size == 12:
            return cls.TWO
        elif header_size == 40:
            if dib_header.compress_type == CompressionType.BITFIELDS.value:
                return cls.THREE_NT
            return cls.THREE
        elif header_size == 108:
            return cls.FOUR
        elif header_size == 124:
            return cls.FIVE

        return None

    @property
    def supported(self):
        return self in (BmpVersion.THREE, BmpVersion.FOUR, BmpVersion.FIVE)


class CompressionType(Enum):
    UNCOMPRESSED = 0
    RLE_8BIT = 1
    RLE_4BIT = 2
    # Only for BMP version 4
    BITFIELDS = 3

    @classmethod
    def from_u32(cls, value):
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def label(self):
        return {
            CompressionType.UNCOMPRESSED: "Uncompressed",
            CompressionType.RLE_8BIT: "RLE 8-bit",
            CompressionType.RLE_4BIT: "RLE 4-bit",
            CompressionType.BITFIELDS: "Bitfields Encoding",
        }[self]
