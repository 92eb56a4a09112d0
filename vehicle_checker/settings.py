import os

from typing import Optional

MIN_CACHE_EXPIRY_DAYS = 1
MAX_CACHE_EXPIRY_DAYS = 30
DEFAULT_CACHE_EXPIRY_DAYS = 7

HISTORY_LIMIT = 50

# Image preprocessing
MAX_IMAGE_BYTES = 800 * 1024
MAX_IMAGE_WIDTH = 1920
INITIAL_JPEG_QUALITY = 0.8
JPEG_QUALITY_STEP = 0.1
MIN_JPEG_QUALITY = 0.1
CONTRAST_FACTOR = 1.5
BRIGHTNESS_FACTOR = 1.2

OCR_ENGINE: str = os.getenv('OCR_ENGINE') or 'tesseract'
OCR_SPACE_API_KEY: Optional[str] = os.getenv('OCR_SPACE_API_KEY')
OCR_SPACE_ENDPOINT: str = (os.getenv('OCR_SPACE_ENDPOINT')
                           or 'https://api.ocr.space/parse/image')

VEHICLE_LOOKUP_ENDPOINT: Optional[str] = os.getenv('VEHICLE_LOOKUP_ENDPOINT')

DATABASE_URL: str = os.getenv('DATABASE_URL') or 'sqlite:///vehicle_checker.db'

REQUEST_TIMEOUT_SECONDS: Optional[float] = (
    float(os.getenv('REQUEST_TIMEOUT_SECONDS'))
    if os.getenv('REQUEST_TIMEOUT_SECONDS') else None)


def clamp_cache_expiry_days(days: int) -> int:
    return max(MIN_CACHE_EXPIRY_DAYS, min(MAX_CACHE_EXPIRY_DAYS, days))


def _read_cache_expiry_days() -> int:
    raw = os.getenv('CACHE_EXPIRY_DAYS')
    try:
        return clamp_cache_expiry_days(int(raw)) if raw else DEFAULT_CACHE_EXPIRY_DAYS
    except ValueError:
        return DEFAULT_CACHE_EXPIRY_DAYS


CACHE_EXPIRY_DAYS: int = _read_cache_expiry_days()
