# tga_codec.py

from tga_errors import CorruptData, TruncatedData

CHUNK_SIZE = 128


def read_exact(stream, size):
    data = stream.read(size)
    if len(data) != size:
        raise TruncatedData(f"Expected {size} bytes, got {len(data)}")
    return data


def decode_raw(stream, size):
    return bytearray(read_exact(stream, size))


def encode_raw(data):
    return bytes(data)


def decode_rle(stream, channels, size):
    result = bytearray()
    while len(result) < size:
        chunk = read_exact(stream, channels + 1)
        control = chunk[0]
        pixel = chunk[1:]
        count = control & 0x7F

        if len(result) + (count + 1) * channels > size:
            raise CorruptData(
                f"Run-length chunk of {count + 1} pixels overruns image data "
                f"at byte {len(result)} of {size}")

        result.extend(pixel)
        if control & 0x80:
            result.extend(pixel * count)
        else:
            result.extend(read_exact(stream, count * channels))
    return result


def iter_rle_chunks(data, channels):
    """Yield ``(is_raw, start_pixel, length)`` for each chunk of ``data``."""
    total = len(data) // channels
    current = 0
    while current < total:
        offset = current * channels
        run = 1
        raw = True
        while current + run < total and run < CHUNK_SIZE:
            pos = offset + (run - 1) * channels
            same = data[pos:pos + channels] == data[pos + channels:pos + 2 * channels]
            if run == 1:
                raw = not same
            elif raw and same:
                # leave the repeated pixel to open the next chunk
                run -= 1
                break
            elif not raw and not same:
                break
            run += 1
        yield raw, current, run
        current += run


def encode_rle(data, channels):
    if len(data) % channels:
        raise ValueError(f"Buffer length {len(data)} is not a multiple of {channels}")
    result = bytearray()
    for raw, start, run in iter_rle_chunks(data, channels):
        offset = start * channels
        if raw:
            result.append(run - 1)
            result.extend(data[offset:offset + run * channels])
        else:
            result.append(run + 127)
            result.extend(data[offset:offset + channels])
    return result
