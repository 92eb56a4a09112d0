import logging

from enum import Enum
from typing import Callable, Optional

from vehicle_checker.constants import L10N
from vehicle_checker.constants.lookup_sources import LookupSource
from vehicle_checker.models.captured_image import CapturedImage
from vehicle_checker.models.history_entry import HistoryEntry
from vehicle_checker.models.recognition_result import (RecognitionResult,
    RecognizedText)
from vehicle_checker.models.response.lookup_response import LookupResponse
from vehicle_checker.models.vehicle_record import VehicleRecord
from vehicle_checker.services.apis.text_recognition_service import (
    TextRecognitionEngine, build_engine)
from vehicle_checker.services.apis.vehicle_lookup_service import \
    VehicleLookupService
from vehicle_checker.services.constants.exceptions import (
    LookupFailureException, RecognitionException, ValidationException)
from vehicle_checker.services.history_log import HistoryLog
from vehicle_checker.services.image_preprocessor import ImagePreprocessor
from vehicle_checker.services.plate_extractor import (PlateExtractor,
    canonicalize_plate, is_valid_uk_plate)
from vehicle_checker.services.result_cache import ResultCache
from vehicle_checker.storage.key_value_store import (DatabaseKeyValueStore,
    KeyValueStore)
from vehicle_checker.utils import time_utils

LOG = logging.getLogger(__name__)


class LookupState(Enum):
    CACHE_CHECK = 'cache_check'
    CACHE_WRITE = 'cache_write'
    CANONICALIZING = 'canonicalizing'
    DONE = 'done'
    ERROR = 'error'
    EXTRACTING = 'extracting'
    FETCHING = 'fetching'
    HISTORY_APPEND = 'history_append'
    IDLE = 'idle'
    PREPROCESSING = 'preprocessing'
    RECOGNIZING = 'recognizing'


class VehicleLookupOrchestrator:
    """Runs one lookup from a photo or typed registration to a vehicle record.

    Each invocation is a linear sequence of states ending in DONE or ERROR.
    Only the result cache and the history log outlive an invocation. A cache
    hit ends the lookup without a fetch and without a history entry.

    Nothing here prevents two overlapping invocations for the same plate;
    callers are expected to check `in_progress` before starting another.
    """

    def __init__(self,
                 cache: ResultCache,
                 history: HistoryLog,
                 lookup_service: VehicleLookupService,
                 recognition_engine: TextRecognitionEngine,
                 preprocessor: Optional[ImagePreprocessor] = None,
                 extractor: Optional[PlateExtractor] = None):
        self.cache = cache
        self.extractor = extractor or PlateExtractor()
        self.history = history
        self.lookup_service = lookup_service
        self.preprocessor = preprocessor or ImagePreprocessor()
        self.recognition_engine = recognition_engine

        self.in_progress: bool = False
        self.state: LookupState = LookupState.IDLE

    @classmethod
    def create(cls,
               store: Optional[KeyValueStore] = None,
               engine_name: Optional[str] = None) -> 'VehicleLookupOrchestrator':
        """Build an orchestrator from settings and sweep expired cache
        entries once."""

        key_value_store: KeyValueStore = store or DatabaseKeyValueStore()

        orchestrator = cls(cache=ResultCache(store=key_value_store),
                           history=HistoryLog(store=key_value_store),
                           lookup_service=VehicleLookupService(),
                           recognition_engine=build_engine(engine_name))

        orchestrator.cache.clear_expired()

        return orchestrator

    def look_up_image(self, image: CapturedImage) -> LookupResponse:
        return self._run(source=LookupSource.CAMERA,
                         resolve_plate=lambda: self._read_plate(image))

    def look_up_text(self, text: str) -> LookupResponse:
        return self._run(source=LookupSource.MANUAL,
                         resolve_plate=lambda: self._canonicalize(text))

    def _run(self,
             source: LookupSource,
             resolve_plate: Callable[[], str]) -> LookupResponse:
        self.in_progress = True
        self.state = LookupState.IDLE
        plate: Optional[str] = None

        try:
            if source == LookupSource.CAMERA:
                self.recognition_engine.ensure_configured()
                self.lookup_service.ensure_configured()

            plate = resolve_plate()

            self._transition(LookupState.CACHE_CHECK)
            cached_record: Optional[VehicleRecord] = self.cache.get(plate)

            if cached_record is not None:
                LOG.info(f'Using cached record for {plate}')
                self._transition(LookupState.DONE)

                return LookupResponse(data=cached_record,
                                      from_cache=True,
                                      plate=plate,
                                      source=source.value,
                                      success=True)

            record: VehicleRecord = self._fetch(plate)

            self._transition(LookupState.DONE)

            return LookupResponse(data=record,
                                  plate=plate,
                                  source=source.value,
                                  success=True)

        except LookupFailureException as exc:
            LOG.info(f'Lookup failed ({exc.kind.value}): {exc.message}')
            self._transition(LookupState.ERROR)

            return LookupResponse(error_kind=exc.kind,
                                  message=exc.message,
                                  plate=plate,
                                  source=source.value,
                                  success=False)

        finally:
            self.in_progress = False

    def _canonicalize(self, text: str) -> str:
        self._transition(LookupState.CANONICALIZING)

        if not text or not text.strip():
            raise ValidationException(L10N.EMPTY_REGISTRATION_STRING)

        plate: str = canonicalize_plate(text)

        if not is_valid_uk_plate(plate):
            LOG.warning(f'{plate} does not look like a UK registration')

        return plate

    def _fetch(self, plate: str) -> VehicleRecord:
        self.lookup_service.ensure_configured()

        self._transition(LookupState.FETCHING)
        record: VehicleRecord = self.lookup_service.look_up_vehicle(plate)

        self._transition(LookupState.CACHE_WRITE)
        self.cache.set(plate, record)

        self._transition(LookupState.HISTORY_APPEND)
        self.history.append(HistoryEntry(data=record,
                                         plate=plate,
                                         timestamp=time_utils.now_millis()))

        return record

    def _read_plate(self, image: CapturedImage) -> str:
        self._transition(LookupState.PREPROCESSING)
        prepared_image: CapturedImage = self.preprocessor.preprocess(image)

        self._transition(LookupState.RECOGNIZING)
        try:
            recognized_text: RecognizedText = self.recognition_engine.recognize(
                prepared_image)
        except Exception:
            # any engine failure reads as an unreadable photo
            LOG.exception('Text recognition failed')
            recognized_text = RecognizedText(confidence=0.0, text='')

        self._transition(LookupState.EXTRACTING)
        result: RecognitionResult = self.extractor.extract(
            text=recognized_text.text,
            confidence=self._normalize_confidence(recognized_text.confidence))

        LOG.debug(f'recognition result: {result}')

        if not result.found_plate():
            raise RecognitionException()

        return result.plate

    def _normalize_confidence(self, confidence: float) -> float:
        return max(0.0, min(1.0, confidence / 100))

    def _transition(self, state: LookupState) -> None:
        LOG.debug(f'{self.state.value} -> {state.value}')
        self.state = state
