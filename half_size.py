# half_size.py

import sys

from tga_codec import decode_raw, decode_rle, encode_raw, encode_rle, read_exact
from tga_errors import TGAError, WriteFailed
from tga_header import (RUN_LENGTH, TYPE_RAW, TYPE_RLE, derive_output_header,
                        image_kind, read_header)
from tga_resize import MAX_DIMENSION, half_size, resample

OUTPUT_FORMATS = ["keep", "raw", "rle"]

USAGE = "Usage: python half_size.py input.tga output.tga [--size WxH] [--format keep|raw|rle] [--workers N] [--quiet]"


def load_tga(filename):
    """Read a TGA file and return ``(header, pixels)``."""
    with open(filename, "rb") as f:
        header = read_header(f)
        kind = image_kind(header)
        header.image_id = read_exact(f, header.id_length)
        if kind == RUN_LENGTH:
            pixels = decode_rle(f, header.bytes_per_pixel, header.data_size)
        else:
            pixels = decode_raw(f, header.data_size)
    return header, pixels


def output_type(image_type, output_format):
    if output_format == "keep":
        return image_type
    if output_format == "rle":
        return TYPE_RLE
    if output_format == "raw":
        return TYPE_RAW if image_type == TYPE_RLE else image_type
    raise ValueError(f"Unknown output format '{output_format}'")


def encode_tga(header, pixels):
    kind = image_kind(header)
    if kind == RUN_LENGTH:
        body = encode_rle(pixels, header.bytes_per_pixel)
    else:
        body = encode_raw(pixels)
    image_id = header.image_id[:header.id_length].ljust(header.id_length, b"\0")
    return header.to_bytes() + image_id + bytes(body)


def save_tga(filename, header, pixels):
    data = encode_tga(header, pixels)
    try:
        with open(filename, "wb") as f:
            f.write(data)
    except OSError as exc:
        raise WriteFailed(f"Failed to write \"{filename}\": {exc}") from exc
    return len(data)


def check_size(width, height):
    for value in (width, height):
        if not 1 <= value <= MAX_DIMENSION:
            raise ValueError(f"Target size {width}x{height} out of range 1..{MAX_DIMENSION}")


def convert(input_file, output_file, size=None, output_format="keep", workers=1, quiet=False):
    def log(message):
        if not quiet:
            print(message)

    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format '{output_format}'")
    if size is not None:
        check_size(*size)

    log(f"Reading \"{input_file}\"...")
    header, pixels = load_tga(input_file)
    log("Done.")

    out_w, out_h = size if size is not None else half_size(header.width, header.height)
    log(f"Original size: {header.width}x{header.height}")
    log(f"Resizing to: {out_w}x{out_h}")

    channels = header.bytes_per_pixel
    resized = bytearray(out_w * out_h * channels)
    resample(pixels, header.width, header.height, channels, out_w, out_h, dest=resized, workers=workers)
    log("Done.")

    out_header = derive_output_header(header, out_w, out_h, output_type(header.image_type, output_format))
    log(f"Saving \"{output_file}\"...")
    save_tga(output_file, out_header, resized)
    log("Done.")
    return out_header


def parse_size(text):
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"Invalid size '{text}', expected WxH")
    width, height = int(parts[0]), int(parts[1])
    check_size(width, height)
    return width, height


def parse_args(argv):
    options = {"size": None, "output_format": "keep", "workers": 1, "quiet": False}
    positional = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in ("--size", "--format", "--workers"):
            if i + 1 >= len(argv):
                raise ValueError(f"{arg} flag requires a value")
            value = argv[i + 1]
            if arg == "--size":
                options["size"] = parse_size(value)
            elif arg == "--format":
                if value not in OUTPUT_FORMATS:
                    raise ValueError(f"Unknown output format '{value}'")
                options["output_format"] = value
            else:
                options["workers"] = int(value)
                if options["workers"] < 1:
                    raise ValueError("--workers must be at least 1")
            i += 2
            continue
        if arg == "--quiet":
            options["quiet"] = True
        elif arg.startswith("--"):
            raise ValueError(f"Unknown flag '{arg}'")
        else:
            positional.append(arg)
        i += 1
    return positional, options


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        positional, options = parse_args(argv)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if len(positional) < 2:
        print(USAGE)
        return 0

    input_file, output_file = positional[0], positional[1]
    try:
        convert(input_file, output_file, **options)
    except WriteFailed as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except TGAError as exc:
        print(f"Error: failed to read \"{input_file}\": {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: failed to open \"{exc.filename or input_file}\": {exc.strerror or exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
