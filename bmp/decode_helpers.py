import logging

from construct import Array, ConstError, Container

from bmp import bmp_codecs, bit_helpers, errors, logging_helpers
from bmp.bmp_codecs import BmpVersion, CompressionType
from bmp.image import Image, Pixel, new_dib_header

logger = logging.getLogger(logging_helpers.LOGGER_NAME)

SUPPORTED_VERSIONS = (BmpVersion.THREE, BmpVersion.FOUR, BmpVersion.FIVE)


def decode_image(bmp_data):
    """
    Decodes a BMP image held in memory.

    :param bmp_data: The complete file contents
    :return: An Image
    """

    read_bmp_id(bmp_data)
    header = read_bmp_header(bmp_data)
    dib_header = read_bmp_dib_header(bmp_data)

    color_palette = read_color_palette(bmp_data, dib_header, pixel_offset=header.pixel_offset)

    width = abs(dib_header.width)
    height = abs(dib_header.height)

    if dib_header.height < 0:
        logger.warning("Image declares top-down rows (height {}), rows are still stored bottom-up".format(
            dib_header.height))

    if color_palette is not None and dib_header.bits_per_pixel in bmp_codecs.INDEXED_BITS_PER_PIXEL:
        logger.debug("Decoding {}x{} indexed image at {} bits per pixel".format(
            width, height, dib_header.bits_per_pixel))
        data = read_indexes(bmp_data, color_palette, width, height, dib_header.bits_per_pixel,
                            header.pixel_offset)
    else:
        if color_palette is not None:
            logger.warning("Ignoring {} colour palette on a {} bit image".format(
                len(color_palette), dib_header.bits_per_pixel))
        logger.debug("Decoding {}x{} direct colour image".format(width, height))
        data = read_pixels(bmp_data, width, height, header.pixel_offset)

    return Image.from_decoded(
        header=header,
        dib_header=new_dib_header(width, height),
        color_palette=color_palette,
        width=width,
        height=height,
        data=data
    )


def _fields(parsed):
    # Drop construct's private entries such as _io
    return Container(**{key: value for key, value in parsed.items() if not key.startswith("_")})


def read_bmp_id(bmp_data):
    magic = bytes(bit_helpers.checked_slice(bmp_data, 0, len(bmp_codecs.BMP_MAGIC)))

    try:
        bmp_codecs.bmp_id.parse(magic)
    except ConstError:
        logger.error("Magic numbers were {}, expecting {}".format(list(magic), list(bmp_codecs.BMP_MAGIC)))
        raise errors.WrongMagicNumbers(
            "Expected {}, but was {}".format(list(bmp_codecs.BMP_MAGIC), list(magic)),
            observed=magic, expected=bmp_codecs.BMP_MAGIC)


def read_bmp_header(bmp_data):
    """
    Reads the fields of the 14 byte container header. Only the magic numbers are checked.

    :param bmp_data: The complete file contents
    :return: A Container with file_size, reserved1, reserved2 and pixel_offset
    """

    header = bmp_codecs.bmp_header.parse(
        bytes(bit_helpers.checked_slice(bmp_data, 0, bmp_codecs.BMP_HEADER_SIZE)))
    return _fields(header)


def _check_version(version, header_size):
    if version is None:
        logger.error("Unknown header size {}".format(header_size))
        raise errors.UnsupportedHeader(
            "Only simple BMP images of version 3, 4, and 5 are currently supported. "
            "Cannot decode the image for a header of {} bytes".format(header_size),
            observed=header_size, expected=(40, 108, 124))

    if not version.supported:
        logger.error("{} is not supported".format(version.value))
        raise errors.UnsupportedBmpVersion(version.value, observed=version, expected=SUPPORTED_VERSIONS)


def read_bmp_dib_header(bmp_data):
    """
    Reads and validates the format header. The checks run in a fixed order and the first failure is raised.

    Headers smaller than the V3 layout are rejected from their size field alone, so short V2 files still report
    the version.

    :param bmp_data: The complete file contents
    :return: A Container with the format header fields
    """

    start = bmp_codecs.BMP_HEADER_SIZE
    header_size = bit_helpers.u32_from_slice(bit_helpers.checked_slice(bmp_data, start, start + 4))

    if header_size < bmp_codecs.DIB_HEADER_V3_SIZE:
        _check_version(BmpVersion.from_dib_header(Container(header_size=header_size, compress_type=None)),
                       header_size)

    dib_header = _fields(bmp_codecs.bmp_dib_header.parse(
        bytes(bit_helpers.checked_slice(bmp_data, start, start + bmp_codecs.DIB_HEADER_V3_SIZE))))

    version = BmpVersion.from_dib_header(dib_header)
    logger.debug("Header size {} gives version {}".format(dib_header.header_size, version))

    # V4 and V5 are decoded as V3, ignoring the extra colour space fields
    _check_version(version, dib_header.header_size)

    if dib_header.bits_per_pixel not in bmp_codecs.SUPPORTED_BITS_PER_PIXEL:
        logger.error("{} bits per pixel is not supported".format(dib_header.bits_per_pixel))
        raise errors.UnsupportedBitsPerPixel(
            "Only 1, 4, 8, and 24 bits per pixel are currently supported, was: {}".format(
                dib_header.bits_per_pixel),
            observed=dib_header.bits_per_pixel, expected=bmp_codecs.SUPPORTED_BITS_PER_PIXEL)

    compression = CompressionType.from_u32(dib_header.compress_type)
    if compression is not CompressionType.UNCOMPRESSED:
        label = compression.label if compression is not None else \
            "Unknown compression type {}".format(dib_header.compress_type)
        logger.error("Compression '{}' is not supported".format(label))
        raise errors.UnsupportedCompressionType(label, observed=dib_header.compress_type,
                                                expected=CompressionType.UNCOMPRESSED.value)

    logger.debug("Format header: {}x{}, {} bits per pixel, {} colours".format(
        dib_header.width, dib_header.height, dib_header.bits_per_pixel, dib_header.num_colors))

    return dib_header


def read_color_palette(bmp_data, dib_header, pixel_offset=None):
    """
    Reads the colour palette, if the image has one.

    A nonzero colour count in the header sets the palette size; otherwise 1, 4 and 8 bit images get a full
    2^bpp palette and anything else has none.

    :param bmp_data: The complete file contents
    :param dib_header: The validated format header
    :param pixel_offset: Start of the pixel data, used to spot palettes that overlap it
    :return: A list of Pixel, or None
    """

    if dib_header.num_colors != 0:
        num_entries = dib_header.num_colors
    elif dib_header.bits_per_pixel in bmp_codecs.INDEXED_BITS_PER_PIXEL:
        num_entries = 1 << dib_header.bits_per_pixel
    else:
        return None

    # V2 palettes use three byte entries
    if BmpVersion.from_dib_header(dib_header) is BmpVersion.TWO:
        raise errors.UnsupportedBmpVersion(BmpVersion.TWO.value, observed=BmpVersion.TWO,
                                           expected=SUPPORTED_VERSIONS)

    offset = bmp_codecs.BMP_HEADER_SIZE + dib_header.header_size
    end = offset + num_entries * bmp_codecs.COLOR_TABLE_ENTRY_SIZE

    if pixel_offset is not None and end > pixel_offset:
        logger.warning("Palette of {} entries ends at byte {}, past the pixel data at {}".format(
            num_entries, end, pixel_offset))

    entries = Array(num_entries, bmp_codecs.bmp_color_table).parse(
        bytes(bit_helpers.checked_slice(bmp_data, offset, end)))

    logger.debug("Read {} palette entries at offset {}".format(num_entries, offset))
    return [Pixel(entry.red, entry.green, entry.blue) for entry in entries]


def read_indexes(bmp_data, palette, width, height, bpp, offset):
    """
    Reads palette indexed pixel rows. Each row is padded to a multiple of 4 bytes on disk; the padding is skipped.

    :return: A flat list of Pixel, in on-disk row order
    """

    data = []
    bytes_per_row = (width * bpp + bit_helpers.BITS - 1) // bit_helpers.BITS
    padding = (4 - bytes_per_row % 4) % 4

    for y in range(height):
        start = offset + (bytes_per_row + padding) * y
        row = bit_helpers.checked_slice(bmp_data, start, start + bytes_per_row)

        for i in bit_helpers.bit_index(row, bpp, width):
            data.append(palette[i])

    return data


def read_pixels(bmp_data, width, height, offset):
    """
    Reads 24 bit pixels as (blue, green, red) triplets on a 4 byte stride.

    Rows are not padded individually, so only images whose pixel data follows that stride decode as stored.
    """

    if width > 1:
        logger.warning("Reading {} pixel wide direct colour rows on a 4 byte stride".format(width))

    count = width * height
    if count == 0:
        return []

    # The last pixel only needs its three colour bytes
    block = bytes(bit_helpers.checked_slice(bmp_data, offset, offset + count * 4 - 1))
    return [Pixel(block[i + 2], block[i + 1], block[i]) for i in range(0, count * 4, 4)]
