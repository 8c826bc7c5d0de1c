"""
Horizontal Pixel Projection.

Finds horizontal bands of text in a grayscale image by counting dark
pixels per row. Used to isolate individual table rows on image-heavy
labels before handing each row to Tesseract on its own.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from typing import List

import numpy as np


@dataclass(frozen=True)
class TextBand:
    """A horizontal strip of rows containing ink."""
    top: int
    height: int

    @property
    def bottom(self) -> int:
        return self.top + self.height


def row_density(
    gray: np.ndarray,
    sample_step: int = 10,
    dark_threshold: int = 200
) -> np.ndarray:
    """
    Count dark pixels per row, sampling every ``sample_step``-th column.

    Args:
        gray: 2-D uint8 array (rows x columns).
        sample_step: Column stride used for sampling.
        dark_threshold: Pixel values below this count as ink.

    Returns:
        1-D array with one count per row.
    """
    sampled = gray[:, ::sample_step]
    return (sampled < dark_threshold).sum(axis=1)


def find_text_bands(
    gray: np.ndarray,
    sample_step: int = 10,
    dark_threshold: int = 200,
    density_threshold: int = 5,
    min_height: int = 10
) -> List[TextBand]:
    """
    Split an image into text bands separated by blank rows.

    A row belongs to a band when its sampled dark-pixel count exceeds
    ``density_threshold``. Bands no taller than ``min_height`` are noise.

    Args:
        gray: 2-D uint8 array (rows x columns).
        sample_step: Column stride used for sampling.
        dark_threshold: Pixel values below this count as ink.
        density_threshold: Minimum dark samples for a row to carry text.
        min_height: Bands must be strictly taller than this.

    Returns:
        Bands ordered top-to-bottom.
    """
    has_content = row_density(gray, sample_step, dark_threshold) > density_threshold

    bands: List[TextBand] = []
    start = None

    for y, filled in enumerate(has_content):
        if filled and start is None:
            start = y
        elif not filled and start is not None:
            if y - start > min_height:
                bands.append(TextBand(top=start, height=y - start))
            start = None

    if start is not None and len(has_content) - start > min_height:
        bands.append(TextBand(top=start, height=len(has_content) - start))

    return bands
