import io
import logging

from PIL import Image, ImageEnhance, ImageOps, UnidentifiedImageError

from vehicle_checker import settings
from vehicle_checker.models.captured_image import CapturedImage

LOG = logging.getLogger(__name__)


class ImagePreprocessor:
    """Prepares a captured photo for text recognition.

    Every image is converted to grayscale with boosted contrast and
    brightness. Images over the byte budget are also scaled down to the
    maximum width. The result is re-encoded as JPEG at decreasing quality
    until it fits the budget or the quality floor is reached; the floor
    result is returned even when it is still too large.
    """

    OUTPUT_MIME_TYPE = 'image/jpeg'

    def __init__(self,
                 max_bytes: int = settings.MAX_IMAGE_BYTES,
                 max_width: int = settings.MAX_IMAGE_WIDTH,
                 initial_quality: float = settings.INITIAL_JPEG_QUALITY,
                 quality_step: float = settings.JPEG_QUALITY_STEP,
                 min_quality: float = settings.MIN_JPEG_QUALITY,
                 contrast: float = settings.CONTRAST_FACTOR,
                 brightness: float = settings.BRIGHTNESS_FACTOR):
        self.brightness = brightness
        self.contrast = contrast
        self.max_bytes = max_bytes
        self.max_width = max_width

        # work in whole percent to avoid float drift across steps
        self.initial_quality = round(initial_quality * 100)
        self.min_quality = round(min_quality * 100)
        self.quality_step = round(quality_step * 100)

    def preprocess(self, image: CapturedImage) -> CapturedImage:
        try:
            picture: Image.Image = Image.open(io.BytesIO(image.data))
            picture.load()
        except (UnidentifiedImageError, OSError) as exc:
            LOG.warning(f'could not decode {image.mime_type} image, '
                        f'passing it through unchanged: {exc}')
            return image

        picture = self.enhance(picture)

        if image.size > self.max_bytes:
            picture = self.resize(picture)

        data, quality = self._encode_within_budget(picture)

        LOG.info(f'preprocessed image: {image.size} -> {len(data)} bytes, '
                 f'{picture.width}x{picture.height}, quality {quality / 100:.1f}')

        return CapturedImage(data=data, mime_type=self.OUTPUT_MIME_TYPE)

    def enhance(self, picture: Image.Image) -> Image.Image:
        # EXIF orientation first so the plate is upright
        picture = ImageOps.exif_transpose(picture)
        picture = ImageOps.grayscale(picture)
        picture = ImageEnhance.Contrast(picture).enhance(self.contrast)

        return ImageEnhance.Brightness(picture).enhance(self.brightness)

    def resize(self, picture: Image.Image) -> Image.Image:
        if picture.width <= self.max_width:
            return picture

        height: int = max(1, round(picture.height * self.max_width / picture.width))

        LOG.debug(f'resizing {picture.width}x{picture.height} '
                  f'to {self.max_width}x{height}')

        return picture.resize((self.max_width, height), Image.LANCZOS)

    def _encode(self, picture: Image.Image, quality: int) -> bytes:
        buffer = io.BytesIO()
        picture.save(buffer, format='JPEG', quality=quality)

        return buffer.getvalue()

    def _encode_within_budget(self, picture: Image.Image):
        quality: int = self.initial_quality
        data: bytes = self._encode(picture, quality)

        while len(data) > self.max_bytes and quality - self.quality_step >= self.min_quality:
            quality -= self.quality_step
            data = self._encode(picture, quality)

            LOG.debug(f're-encoded at quality {quality / 100:.1f}: {len(data)} bytes')

        if len(data) > self.max_bytes:
            LOG.warning(f'image still {len(data)} bytes at minimum quality '
                        f'{quality / 100:.1f}, using it anyway')

        return data, quality
