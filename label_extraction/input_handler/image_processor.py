"""
Image Processor Module.

Preparation of rendered label images for OCR:
    - Grayscale conversion for pixel projection
    - Band cropping with padding
    - Contrast/sharpness enhancement of small text rows

Author: ML Engineering Team
"""

import numpy as np
from PIL import Image, ImageEnhance, ImageOps

from config import get_config
from label_extraction.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class ImageProcessor:
    """
    Image helpers used by region and band OCR.

    Attributes:
        band_min_height: Bands shorter than this are upscaled before OCR
        contrast: Contrast enhancement factor
        sharpness: Sharpness enhancement factor

    Example:
        >>> processor = ImageProcessor()
        >>> gray = processor.to_grayscale_array(image)
        >>> band = processor.crop_band(image, top=120, height=40)
    """

    def __init__(self) -> None:
        """Initialize the image processor with configuration."""
        self.band_min_height = get_config("input.image.band_min_height", 64)
        self.contrast = get_config("input.image.contrast", 1.2)
        self.sharpness = get_config("input.image.sharpness", 1.1)

    def to_grayscale_array(self, image: Image.Image) -> np.ndarray:
        """Convert an image to a 2-D uint8 array (rows x columns)."""
        return np.asarray(ImageOps.grayscale(image), dtype=np.uint8)

    def crop_band(
        self,
        image: Image.Image,
        top: int,
        height: int,
        padding: int = 0
    ) -> Image.Image:
        """
        Crop a full-width horizontal band, padded and clamped to the image.

        Args:
            image: Source image.
            top: First row of the band.
            height: Band height in rows.
            padding: Extra rows added above and below.

        Returns:
            Cropped band image.
        """
        upper = max(0, top - padding)
        lower = min(image.height, top + height + padding)
        return image.crop((0, upper, image.width, lower))

    def enhance_band(self, band: Image.Image) -> Image.Image:
        """
        Make a single text row easier to recognize.

        Small rows are upscaled (Lanczos) to ``band_min_height`` and a mild
        contrast and sharpness boost is applied.
        """
        if band.height and band.height < self.band_min_height:
            scale = self.band_min_height / band.height
            band = band.resize(
                (int(band.width * scale), self.band_min_height),
                Image.LANCZOS
            )

        band = ImageEnhance.Contrast(band).enhance(self.contrast)
        band = ImageEnhance.Sharpness(band).enhance(self.sharpness)

        logger.debug(f"Enhanced band to {band.width}x{band.height}")
        return band
