from enum import Enum


class BmpErrorKind(Enum):
    WRONG_MAGIC_NUMBERS = "Wrong magic numbers"
    UNSUPPORTED_BITS_PER_PIXEL = "Unsupported bits per pixel"
    UNSUPPORTED_COMPRESSION_TYPE = "Unsupported compression type"
    UNSUPPORTED_BMP_VERSION = "Unsupported BMP version"
    UNSUPPORTED_HEADER = "Unsupported header"


class BmpError(Exception):
    """
    Raised when an image cannot be decoded.

    The subclass (or ``kind``) identifies what went wrong; ``observed`` and ``expected`` hold the offending value
    and what would have been accepted, where that makes sense.
    """

    kind = None

    def __init__(self, details, observed=None, expected=None):
        label = self.kind.value if self.kind is not None else "BMP Error"
        super(BmpError, self).__init__("{}: {}".format(label, details))
        self.details = details
        self.observed = observed
        self.expected = expected


class WrongMagicNumbers(BmpError):
    kind = BmpErrorKind.WRONG_MAGIC_NUMBERS


class UnsupportedBitsPerPixel(BmpError):
    kind = BmpErrorKind.UNSUPPORTED_BITS_PER_PIXEL


class UnsupportedCompressionType(BmpError):
    kind = BmpErrorKind.UNSUPPORTED_COMPRESSION_TYPE


class UnsupportedBmpVersion(BmpError):
    kind = BmpErrorKind.UNSUPPORTED_BMP_VERSION


class UnsupportedHeader(BmpError):
    kind = BmpErrorKind.UNSUPPORTED_HEADER
