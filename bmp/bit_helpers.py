from construct import Int16ul, Int32ul

BITS = 8


def checked_slice(data, start, end):
    """
    Return data[start:end], refusing ranges that run past the end of the buffer.

    :param data: The byte buffer
    :param start: First byte offset (inclusive)
    :param end: Last byte offset (exclusive)
    :return: The requested bytes
    """

    if start < 0 or start > end or end > len(data):
        raise IndexError("Byte range [{}, {}) lies outside a buffer of {} bytes".format(start, end, len(data)))

    return data[start:end]


def u32_from_slice(data):
    return Int32ul.parse(bytes(checked_slice(data, 0, 4)))


def u16_from_slice(data):
    return Int16ul.parse(bytes(checked_slice(data, 0, 2)))


class BitIndex(object):
    """
    Iterates over the nbits-wide indices packed into a row of bytes, most significant bits first.

    nbits must divide 8, so an index never spans two bytes. Iteration stops after ``size`` indices, or earlier
    if the bytes run out.
    """

    def __init__(self, data, nbits, size):
        self._data = data
        self._nbits = nbits
        self._size = size
        self._bits_left = BITS - nbits
        self._mask = 0xFF >> self._bits_left
        self._index = 0

    def __iter__(self):
        return self

    def __next__(self):
        if self._size == 0:
            raise StopIteration

        n = self._index // BITS
        offset = self._bits_left - self._index % BITS

        self._index += self._nbits
        self._size -= 1

        if n >= len(self._data):
            self._size = 0
            raise StopIteration

        return (self._data[n] & (self._mask << offset)) >> offset


def bit_index(data, nbits, size):
    return BitIndex(data, nbits, size)
