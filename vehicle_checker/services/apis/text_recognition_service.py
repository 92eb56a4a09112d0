import io
import logging
import requests

from statistics import mean
from typing import Any, Dict, List, Optional

import pytesseract

from PIL import Image

from vehicle_checker import settings
from vehicle_checker.constants import L10N
from vehicle_checker.models.captured_image import CapturedImage
from vehicle_checker.models.recognition_result import RecognizedText
from vehicle_checker.services.constants.exceptions import (
    ConfigurationException, NetworkException, RecognitionException)

LOG = logging.getLogger(__name__)


class TextRecognitionEngine:
    """Turns an image into text and a confidence on a 0..100 scale.

    Implementations raise on failure; callers decide how to degrade.
    """

    def ensure_configured(self) -> None:
        pass

    def recognize(self, image: CapturedImage) -> RecognizedText:
        raise NotImplementedError(
            'Subclassed engine must implement this method.')


class TesseractRecognitionEngine(TextRecognitionEngine):
    """On-device recognition through the tesseract binary."""

    # --psm 11: sparse text, the plate may sit anywhere in the photo
    TESSERACT_CONFIG = '--oem 3 --psm 11'

    def __init__(self, language: str = 'eng', config: str = TESSERACT_CONFIG):
        self.config = config
        self.language = language

    def recognize(self, image: CapturedImage) -> RecognizedText:
        try:
            picture: Image.Image = Image.open(io.BytesIO(image.data))

            data: Dict[str, List[Any]] = pytesseract.image_to_data(
                picture,
                lang=self.language,
                config=self.config,
                output_type=pytesseract.Output.DICT)
        except (pytesseract.TesseractError, OSError) as exc:
            LOG.error(f"tesseract failed: {exc}")
            raise RecognitionException() from exc

        words: List[str] = []
        confidences: List[float] = []

        for text, confidence in zip(data.get('text', []), data.get('conf', [])):
            if not str(text).strip():
                continue

            words.append(str(text).strip())

            # tesseract reports -1 for non-word boxes
            if float(confidence) >= 0:
                confidences.append(float(confidence))

        LOG.debug(f'tesseract words: {words}')

        return RecognizedText(
            confidence=mean(confidences) if confidences else 0.0,
            text=' '.join(words))


class OcrSpaceRecognitionEngine(TextRecognitionEngine):
    """Remote recognition through the OCR.space parse API.

    The API gives no overall confidence, so a successful non-empty parse is
    reported as fully confident.
    """

    FULL_CONFIDENCE = 100.0

    OCR_ENGINE_VERSION = '2'

    def __init__(self,
                 api_key: Optional[str] = None,
                 endpoint: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.api_key = api_key if api_key is not None else settings.OCR_SPACE_API_KEY
        self.endpoint = endpoint or settings.OCR_SPACE_ENDPOINT
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS

        self.api = requests.Session()

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationException(L10N.OCR_API_KEY_MISSING_STRING)

    def recognize(self, image: CapturedImage) -> RecognizedText:
        self.ensure_configured()

        extension: str = image.mime_type.split('/')[-1]

        try:
            response = self.api.post(
                self.endpoint,
                data={
                    'apikey': self.api_key,
                    'language': 'eng',
                    'OCREngine': self.OCR_ENGINE_VERSION,
                    'scale': 'true',
                },
                files={'file': (f'capture.{extension}', image.data, image.mime_type)},
                timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            LOG.error(f"OCR.space request failed: {exc}")
            raise NetworkException() from exc

        try:
            body: Any = response.json()
        except ValueError as exc:
            raise RecognitionException() from exc

        if not isinstance(body, dict):
            LOG.error(f'Unexpected OCR.space body: {body!r}')
            raise RecognitionException()

        if body.get('IsErroredOnProcessing'):
            LOG.error(f"OCR.space error: {body.get('ErrorMessage')}")
            raise RecognitionException()

        parsed_results: Any = body.get('ParsedResults') or []

        if not isinstance(parsed_results, list) or not all(
                isinstance(result, dict) for result in parsed_results):
            LOG.error(f'Unexpected OCR.space results: {parsed_results!r}')
            raise RecognitionException()

        text: str = '\n'.join(str(result.get('ParsedText') or '')
                              for result in parsed_results)

        LOG.debug(f'OCR.space text: {text!r}')

        return RecognizedText(
            confidence=self.FULL_CONFIDENCE if text.strip() else 0.0,
            text=text)


def build_engine(engine_name: Optional[str] = None) -> TextRecognitionEngine:
    name: str = (engine_name or settings.OCR_ENGINE).lower()

    if name == 'ocr_space':
        return OcrSpaceRecognitionEngine()

    if name == 'tesseract':
        return TesseractRecognitionEngine()

    raise ConfigurationException(f'Unknown OCR engine: {engine_name}')
