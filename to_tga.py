# to_tga.py

from PIL import Image
import sys

from half_size import save_tga
from tga_header import TGAHeader, TYPE_RAW, TYPE_RLE

TOP_LEFT_ORIGIN = 0x20


def has_alpha(img):
    if img.mode != "RGBA":
        return False
    low, _ = img.getchannel("A").getextrema()
    return low != 255


def image_to_tga(img, rle=True):
    """Return ``(header, pixels)`` for a PIL image, top-left origin."""
    img = img.convert("RGBA")
    use_alpha = has_alpha(img)
    w, h = img.size
    if use_alpha:
        pixels = img.tobytes("raw", "BGRA")
        bits, descriptor = 32, TOP_LEFT_ORIGIN | 8
    else:
        pixels = img.convert("RGB").tobytes("raw", "BGR")
        bits, descriptor = 24, TOP_LEFT_ORIGIN
    header = TGAHeader(image_type=TYPE_RLE if rle else TYPE_RAW, width=w, height=h,
                       bits_per_pixel=bits, descriptor=descriptor)
    return header, bytearray(pixels)


def save_tga_from_image(img, output_file, rle=True):
    header, pixels = image_to_tga(img, rle)
    size = save_tga(output_file, header, pixels)
    return header, size


def to_tga(input_file, output_file, rle=True):
    img = Image.open(input_file)
    header, size = save_tga_from_image(img, output_file, rle)
    orig = header.data_size
    ratio = (orig - size) / orig * 100
    print(f"Saved: {output_file}")
    print(f"Method: {'rle' if rle else 'raw'} (type={header.image_type})")
    print(f"Size: {size:,} bytes")
    print(f"Alpha: {'yes' if header.bits_per_pixel == 32 else 'no'}")
    print(f"Ratio: {ratio:.2f}%")
    return header


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python to_tga.py input.png output.tga [--raw]")
        sys.exit(0)
    try:
        to_tga(sys.argv[1], sys.argv[2], rle="--raw" not in sys.argv)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
