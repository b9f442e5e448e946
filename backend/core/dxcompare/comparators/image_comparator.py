# comparators/image_comparator.py
"""
Comparación de imágenes por similitud RMS (Pillow).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from PIL import Image, ImageChops, ImageStat, UnidentifiedImageError

from ..errors import CompareErrors
from ..rules import ImageCompareConfig, ImageMode
from .base import BaseComparator

PIL_MODES = {
    ImageMode.RGB: "RGB",
    ImageMode.RGBA: "RGBA",
    ImageMode.GRAY: "L",
}


@dataclass
class ImageDiff:
    score: float
    threshold: float
    mode: str
    channel_rms: List[float]

    @property
    def passed(self) -> bool:
        return self.score >= self.threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "score": self.score,
            "threshold": self.threshold,
            "mode": self.mode,
            "channel_rms": list(self.channel_rms),
        }


def image_similarity(nominal: Image.Image, actual: Image.Image) -> List[float]:
    """RMS por canal de la diferencia absoluta (0 = idénticas, 255 = opuestas)."""
    diff = ImageChops.difference(nominal, actual)
    return [float(v) for v in ImageStat.Stat(diff).rms]


class ImageComparator(BaseComparator):
    def __init__(self, settings=None):
        super().__init__(
            kind=ImageCompareConfig.KIND,
            description="Similitud de imágenes (1 - RMS máximo por canal / 255)",
            settings=settings
        )

    def compare(self, nominal: Path, actual: Path, config: ImageCompareConfig):
        pil_mode = PIL_MODES[config.mode]
        images = []
        for path in (nominal, actual):
            try:
                with Image.open(path) as img:
                    images.append(img.convert(pil_mode))
            except UnidentifiedImageError as e:
                return self.failure(
                    nominal, actual, CompareErrors.parse_error("IMAGE_DECODE_FAILED", str(path), e)
                )

        nominal_img, actual_img = images
        if nominal_img.size != actual_img.size:
            return self.failure(
                nominal, actual, CompareErrors.image_size_mismatch(nominal_img.size, actual_img.size)
            )

        channel_rms = image_similarity(nominal_img, actual_img)
        # Canal con mayor desviación = menor similitud
        score = 1.0 - max(channel_rms) / 255.0

        diff = ImageDiff(
            score=score,
            threshold=config.threshold,
            mode=config.mode.value,
            channel_rms=channel_rms
        )
        return self.outcome(nominal, actual, diff.passed, diff)
