"""
Image preprocessing for OCR.

Normalizes a photographed or scanned newspaper page before it is sent to the
vision model: RGB, bounded width, auto contrast, sharpening, brightness and
contrast boost, gamma correction, then a maximum-quality JPEG.
"""
import asyncio
from functools import partial
from pathlib import Path

from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from ..api.exceptions import ImagePreprocessingError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

MAX_WIDTH = 4000
SHARPEN_RADIUS = 2.0
BRIGHTNESS_FACTOR = 1.2
CONTRAST_FACTOR = 1.3
GAMMA = 1.2
JPEG_QUALITY = 100

PROCESSED_SUFFIX = "_processed.jpg"


def processed_path_for(image_path: Path) -> Path:
    """'<dir>/<stem>_processed.jpg' next to the original."""
    image_path = Path(image_path)
    return image_path.with_name(f"{image_path.stem}{PROCESSED_SUFFIX}")


def _gamma_table(gamma: float) -> list:
    # PIL point() takes one 256-entry table per band
    table = [min(255, int(round(255 * ((i / 255.0) ** (1.0 / gamma))))) for i in range(256)]
    return table * 3


def _to_rgb(source: Image.Image) -> Image.Image:
    """RGB copy of ``source``; 16-bit grayscale is scaled down to 8 bits first."""
    if source.mode == "I" or source.mode.startswith("I;16"):
        # A plain convert("L") clips everything above 255 to white
        eight_bit = source.convert("I").point(lambda v: v * (1 / 256)).convert("L")
        return eight_bit.convert("RGB")
    return source.convert("RGB")


def preprocess_image_sync(image_path: Path) -> Path:
    """
    Run the preprocessing chain and write the result beside the original.

    Raises:
        ImagePreprocessingError: the file cannot be opened or written
    """
    image_path = Path(image_path)
    output_path = processed_path_for(image_path)

    try:
        with Image.open(image_path) as source:
            img = _to_rgb(source)

        if img.width > MAX_WIDTH:
            new_height = max(1, round(img.height * MAX_WIDTH / img.width))
            img = img.resize((MAX_WIDTH, new_height), Image.LANCZOS)

        img = ImageOps.autocontrast(img)
        img = img.filter(ImageFilter.UnsharpMask(radius=SHARPEN_RADIUS))
        img = ImageEnhance.Brightness(img).enhance(BRIGHTNESS_FACTOR)
        img = ImageEnhance.Contrast(img).enhance(CONTRAST_FACTOR)
        img = img.point(_gamma_table(GAMMA))

        img.save(output_path, format="JPEG", quality=JPEG_QUALITY)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.error(f"Image preprocessing failed for {image_path.name}: {e}")
        raise ImagePreprocessingError(f"Image preprocessing failed: {e}") from e

    logger.info(f"Preprocessed {image_path.name} -> {output_path.name} ({img.width}x{img.height})")
    return output_path


async def preprocess_image(image_path: Path) -> Path:
    """Async wrapper; Pillow work runs in the default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(preprocess_image_sync, image_path))
