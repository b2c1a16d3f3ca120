# tga_header.py

from tga_errors import TruncatedHeader, UnsupportedFormat

HEADER_SIZE = 18

TYPE_RAW = 2
TYPE_RAW_GRAY = 3
TYPE_RLE = 10

RAW24 = "raw24"
RAW32 = "raw32"
RUN_LENGTH = "run_length"


# (name, size, signed) in wire order
FIELDS = [
    ("id_length", 1, False),
    ("color_map_type", 1, False),
    ("image_type", 1, False),
    ("color_map_origin", 2, True),
    ("color_map_length", 2, True),
    ("color_map_depth", 1, False),
    ("x_origin", 2, True),
    ("y_origin", 2, True),
    ("width", 2, True),
    ("height", 2, True),
    ("bits_per_pixel", 1, False),
    ("descriptor", 1, False),
]


class TGAHeader:
    def __init__(self, id_length=0, color_map_type=0, image_type=TYPE_RAW,
                 color_map_origin=0, color_map_length=0, color_map_depth=0,
                 x_origin=0, y_origin=0, width=0, height=0,
                 bits_per_pixel=24, descriptor=0, image_id=b""):
        self.id_length = id_length
        self.color_map_type = color_map_type
        self.image_type = image_type
        self.color_map_origin = color_map_origin
        self.color_map_length = color_map_length
        self.color_map_depth = color_map_depth
        self.x_origin = x_origin
        self.y_origin = y_origin
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.descriptor = descriptor
        # optional id field that follows the header on disk
        self.image_id = image_id

    @property
    def bytes_per_pixel(self):
        return self.bits_per_pixel >> 3

    @property
    def data_size(self):
        return self.width * self.height * self.bytes_per_pixel

    def to_bytes(self):
        out = bytearray()
        for name, size, signed in FIELDS:
            out.extend(getattr(self, name).to_bytes(size, "little", signed=signed))
        return bytes(out)

    @classmethod
    def from_bytes(cls, data):
        if len(data) < HEADER_SIZE:
            raise TruncatedHeader(f"Header needs {HEADER_SIZE} bytes, got {len(data)}")
        values = {}
        pos = 0
        for name, size, signed in FIELDS:
            values[name] = int.from_bytes(data[pos:pos + size], "little", signed=signed)
            pos += size
        return cls(**values)

    def copy(self):
        out = TGAHeader(**{name: getattr(self, name) for name, _, _ in FIELDS})
        out.image_id = self.image_id
        return out

    def __eq__(self, other):
        if not isinstance(other, TGAHeader):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name, _, _ in FIELDS)

    def __repr__(self):
        return (f"TGAHeader(type={self.image_type}, {self.width}x{self.height}, "
                f"bpp={self.bits_per_pixel}, descriptor=0x{self.descriptor:02x})")


def read_header(stream):
    return TGAHeader.from_bytes(stream.read(HEADER_SIZE))


def write_header(header):
    return header.to_bytes()


def derive_output_header(header, width, height, image_type=None):
    """Copy of ``header`` with new geometry and, optionally, a new image type."""
    out = header.copy()
    out.width = width
    out.height = height
    if image_type is not None:
        out.image_type = image_type
    return out


def image_kind(header):
    if header.color_map_type != 0:
        raise UnsupportedFormat(f"Color-mapped images are not supported (color map type {header.color_map_type})")
    if header.image_type not in (TYPE_RAW, TYPE_RAW_GRAY, TYPE_RLE):
        raise UnsupportedFormat(f"Unsupported image type: {header.image_type}")
    if header.bits_per_pixel not in (24, 32):
        raise UnsupportedFormat(f"Unsupported pixel depth: {header.bits_per_pixel} bits")
    if header.width <= 0 or header.height <= 0:
        raise UnsupportedFormat(f"Invalid image size: {header.width}x{header.height}")

    if header.image_type == TYPE_RLE:
        return RUN_LENGTH
    return RAW32 if header.bits_per_pixel == 32 else RAW24
