import logging
import re

from typing import List, Optional

from vehicle_checker.constants import regexps as regexp_constants
from vehicle_checker.models.recognition_result import RecognitionResult

LOG = logging.getLogger(__name__)


class PlateExtractor:
    """Finds a UK registration plate in noisy recognized text."""

    MAX_PLATE_LENGTH = 8
    MIN_PLATE_LENGTH = 2

    def __init__(self, patterns: Optional[List[re.Pattern]] = None):
        self.patterns = patterns or regexp_constants.PLATE_PATTERNS

    def extract(self, text: str, confidence: float) -> RecognitionResult:
        """Return the plate found in text, or a negative result carrying the
        recognition confidence.

        Patterns are tried in priority order. The first pattern with any
        match decides the candidate: its longest match wins, earliest on
        ties. A later pattern is only consulted when that candidate fails
        length validation.
        """

        cleaned_text: str = self.clean_text(text)

        LOG.debug(f'cleaned recognized text: {cleaned_text!r}')

        for pattern in self.patterns:
            matches: List[str] = [match.group(0)
                                  for match in pattern.finditer(cleaned_text)]

            if not matches:
                continue

            # max() keeps the first of equally long matches
            best_match: str = max(matches, key=len)
            plate: str = regexp_constants.WHITESPACE_PATTERN.sub('', best_match)

            if self.MIN_PLATE_LENGTH <= len(plate) <= self.MAX_PLATE_LENGTH:
                LOG.debug(f'pattern {pattern.pattern} matched plate {plate}')

                return RecognitionResult(confidence=confidence, plate=plate)

        LOG.debug('no plate pattern matched')

        return RecognitionResult(confidence=confidence, plate=None)

    def clean_text(self, text: str) -> str:
        # line breaks and tabs from the engine become plain separators
        upper_text: str = regexp_constants.WHITESPACE_PATTERN.sub(
            ' ', (text or '').upper())
        filtered_text: str = regexp_constants.DISALLOWED_CHARACTERS_PATTERN.sub(
            '', upper_text)

        return regexp_constants.GB_TAG_PATTERN.sub('', filtered_text).strip()


def canonicalize_plate(plate: str) -> str:
    return regexp_constants.WHITESPACE_PATTERN.sub('', plate).upper()


def is_valid_uk_plate(plate: str) -> bool:
    canonical_plate: str = canonicalize_plate(plate)

    return any(pattern.match(canonical_plate)
               for pattern in regexp_constants.ANCHORED_PLATE_PATTERNS)
