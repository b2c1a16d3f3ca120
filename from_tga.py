# Convert from TGA to PNG

from PIL import Image
import sys

from half_size import load_tga
from tga_errors import TGAError

TOP_LEFT_ORIGIN = 0x20


def tga_to_image(header, pixels):
    """Build an RGB/RGBA PIL image from a decoded BGR(A) pixel buffer."""
    if header.bytes_per_pixel == 4:
        img = Image.frombytes("RGBA", (header.width, header.height), bytes(pixels), "raw", "BGRA")
    else:
        img = Image.frombytes("RGB", (header.width, header.height), bytes(pixels), "raw", "BGR")
    if not header.descriptor & TOP_LEFT_ORIGIN:
        img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    return img


def load_tga_image(filename):
    header, pixels = load_tga(filename)
    print(f"Loading: {header.width}x{header.height}, {'RGBA' if header.bytes_per_pixel == 4 else 'RGB'}, type={header.image_type}")
    return tga_to_image(header, pixels)


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python from_tga.py input.tga output.png")
    else:
        try:
            img = load_tga_image(sys.argv[1])
        except (TGAError, OSError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        img.save(sys.argv[2])
