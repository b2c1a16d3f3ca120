# tga_resize.py

import multiprocessing

MAX_DIMENSION = 32767


def half_size(width, height):
    return max(1, width >> 1), max(1, height >> 1)


def clamp(value, low, high):
    return min(max(value, low), high)


def bilinear_at(src, src_w, src_h, channels, u, v):
    """Sample all channels of ``src`` at normalized position (u, v).

    Neighbour indices are clamped to the last row/column, so the sample
    never reads outside the source.
    """
    su = clamp(u * src_w - 0.5, 0, src_w - 1)
    sv = clamp(v * src_h - 0.5, 0, src_h - 1)

    x0 = int(su)
    y0 = int(sv)
    x1 = min(x0 + 1, src_w - 1)
    y1 = min(y0 + 1, src_h - 1)

    fu = su - x0
    fv = sv - y0
    gu = 1 - fu
    gv = 1 - fv

    i00 = (x0 + y0 * src_w) * channels
    i01 = (x1 + y0 * src_w) * channels
    i10 = (x0 + y1 * src_w) * channels
    i11 = (x1 + y1 * src_w) * channels

    out = bytearray(channels)
    for c in range(channels):
        value = ((src[i00 + c] * gu + src[i01 + c] * fu) * gv +
                 (src[i10 + c] * gu + src[i11 + c] * fu) * fv)
        out[c] = int(value)
    return out


def resample_rows(src, src_w, src_h, channels, dst_w, dst_h, y_start, y_end):
    out = bytearray()
    for y in range(y_start, y_end):
        v = y / dst_h
        for x in range(dst_w):
            u = x / dst_w
            out.extend(bilinear_at(src, src_w, src_h, channels, u, v))
    return out


def resample_worker(task):
    return resample_rows(*task)


def resample(src, src_w, src_h, channels, dst_w, dst_h, dest=None, workers=1):
    if src_w < 1 or src_h < 1 or dst_w < 1 or dst_h < 1:
        raise ValueError(f"Cannot resample {src_w}x{src_h} to {dst_w}x{dst_h}")
    if len(src) != src_w * src_h * channels:
        raise ValueError(
            f"Source buffer holds {len(src)} bytes, expected {src_w * src_h * channels}")

    size = dst_w * dst_h * channels
    if dest is None:
        dest = bytearray(size)
    elif len(dest) != size:
        raise ValueError(f"Destination buffer holds {len(dest)} bytes, expected {size}")

    src = bytes(src)
    workers = max(1, min(workers, dst_h))
    if workers == 1:
        dest[:] = resample_rows(src, src_w, src_h, channels, dst_w, dst_h, 0, dst_h)
        return dest

    band = -(-dst_h // workers)
    tasks = [
        (src, src_w, src_h, channels, dst_w, dst_h, y, min(y + band, dst_h))
        for y in range(0, dst_h, band)
    ]
    with multiprocessing.Pool(workers) as pool:
        bands = pool.map(resample_worker, tasks)

    pos = 0
    for part in bands:
        dest[pos:pos + len(part)] = part
        pos += len(part)
    return dest
