from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RecognizedText:
    """ Raw output of a text recognition engine, confidence on a 0..100 scale """

    confidence: float
    text: str


@dataclass(frozen=True)
class RecognitionResult:
    """ Outcome of one plate recognition attempt, confidence on a 0..1 scale """

    confidence: float
    plate: Optional[str] = None

    def found_plate(self) -> bool:
        return self.plate is not None
