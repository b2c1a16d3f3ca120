from __future__ import annotations

import random

import pytest

from tga_resize import bilinear_at, half_size, resample

RED = bytes([255, 0, 0, 255])
GREEN = bytes([0, 255, 0, 255])


def pixel(buf, x, y, width, channels):
    pos = (x + y * width) * channels
    return bytes(buf[pos:pos + channels])


def quadrant_image() -> bytes:
    rows = []
    for y in range(4):
        rows.append(b"".join(RED if x < 2 and y < 2 else GREEN for x in range(4)))
    return b"".join(rows)


class BoundsCheckedBuffer:
    def __init__(self, data):
        self.data = data

    def __getitem__(self, index):
        assert 0 <= index < len(self.data), index
        return self.data[index]


def test_quadrant_to_two_by_two():
    out = resample(quadrant_image(), 4, 4, 4, 2, 2)
    assert pixel(out, 0, 0, 2, 4) == bytes([255, 0, 0, 255])
    assert pixel(out, 1, 0, 2, 4) == bytes([127, 127, 0, 255])
    assert pixel(out, 0, 1, 2, 4) == bytes([127, 127, 0, 255])
    assert pixel(out, 1, 1, 2, 4) == bytes([63, 191, 0, 255])


def test_same_size_uniform_is_exact():
    src = bytes([12, 34, 56]) * 32
    assert resample(src, 8, 4, 3, 8, 4) == src


def test_same_size_origin_pixel_is_exact():
    rng = random.Random(1)
    src = bytes(rng.randrange(256) for _ in range(6 * 4 * 3))
    out = resample(src, 6, 4, 3, 6, 4)
    assert pixel(out, 0, 0, 6, 3) == pixel(src, 0, 0, 6, 3)


def test_upscale_single_pixel():
    src = bytes([1, 2, 3, 4])
    assert resample(src, 1, 1, 4, 3, 2) == src * 6


def test_output_truncates_instead_of_rounding():
    # 0 and 255 side by side, sampled half way: 127.5 -> 127
    src = bytes([0, 0, 0, 255, 255, 255])
    out = resample(src, 2, 1, 3, 1, 1, dest=None)
    assert out == bytes([0, 0, 0])
    out = resample(src + src, 2, 2, 3, 2, 2)
    assert pixel(out, 1, 0, 2, 3) == bytes([127, 127, 127])


@pytest.mark.parametrize(
    "src_size, dst_size",
    [((1, 1), (5, 3)), ((7, 5), (1, 1)), ((3, 3), (10, 10)), ((5, 2), (2, 7)), ((2, 2), (2, 2))],
)
def test_sampling_stays_inside_source(src_size, dst_size):
    src_w, src_h = src_size
    dst_w, dst_h = dst_size
    channels = 3
    src = BoundsCheckedBuffer(bytes(range(src_w * src_h * channels)))
    for y in range(dst_h):
        for x in range(dst_w):
            bilinear_at(src, src_w, src_h, channels, x / dst_w, y / dst_h)
    # the far edge itself is also safe
    bilinear_at(src, src_w, src_h, channels, 1.0, 1.0)


def test_fills_given_destination():
    dest = bytearray(2 * 2 * 4)
    out = resample(quadrant_image(), 4, 4, 4, 2, 2, dest=dest)
    assert out is dest
    assert pixel(dest, 1, 1, 2, 4) == bytes([63, 191, 0, 255])


def test_rejects_wrong_destination_size():
    with pytest.raises(ValueError):
        resample(quadrant_image(), 4, 4, 4, 2, 2, dest=bytearray(3))


def test_rejects_wrong_source_size():
    with pytest.raises(ValueError):
        resample(b"\x00" * 10, 4, 4, 4, 2, 2)


def test_rejects_empty_target():
    with pytest.raises(ValueError):
        resample(quadrant_image(), 4, 4, 4, 0, 2)


def test_parallel_matches_serial():
    rng = random.Random(7)
    src = bytes(rng.randrange(256) for _ in range(9 * 7 * 4))
    serial = resample(src, 9, 7, 4, 4, 3)
    assert resample(src, 9, 7, 4, 4, 3, workers=2) == serial


@pytest.mark.parametrize(
    "size, expected",
    [((4, 4), (2, 2)), ((5, 3), (2, 1)), ((1, 1), (1, 1)), ((1, 9), (1, 4))],
)
def test_half_size(size, expected):
    assert half_size(*size) == expected
