
def single_varint(data, index=0):
    """
    Processes a single Varint and returns its value and length.
    A length of 0 means the data ran out before the Varint terminated.
    The value is unsigned (0 <= value < 2**64); a 9-byte Varint is not
    folded into a negative 64-bit integer.
    """
    varint = 0
    for i in range(9):
        if index + i >= len(data):
            break
        byte = data[index + i]
        # The 9th byte contributes all 8 bits
        if i == 8:
            return (varint << 8) | byte, 9
        varint = (varint << 7) | (byte & 0x7F)
        if byte < 0x80:
            return varint, i + 1
    return 0, 0


def multi_varint(data, start=0, end=None):
    """
    Processes consecutive Varints between start and end and returns a list of values and the index reached.
    """
    if end is None:
        end = len(data)
    varints = []
    index = start
    while index < end:
        varint, varint_length = single_varint(data, index)
        if varint_length == 0:
            break
        varints.append(varint)
        index += varint_length
    return varints, index


def encode_varint(value):
    """
    Encodes an unsigned 64-bit integer as a canonical 1-9 byte Varint.
    """
    if value < 0 or value >= 1 << 64:
        raise ValueError(f"Varint out of range: {value}")

    if value >= 1 << 56:
        encoded = bytearray(9)
        encoded[8] = value & 0xFF
        value >>= 8
        for i in range(7, -1, -1):
            encoded[i] = (value & 0x7F) | 0x80
            value >>= 7
        return bytes(encoded)

    encoded = bytearray([value & 0x7F])
    value >>= 7
    while value:
        encoded.insert(0, (value & 0x7F) | 0x80)
        value >>= 7
    return bytes(encoded)
