from dataclasses import dataclass
from typing import Optional

from vehicle_checker.models.vehicle_record import VehicleRecord
from vehicle_checker.services.constants.exceptions import ErrorKind


@dataclass(frozen=True)
class LookupResponse:
    """ Represents the terminal state of one orchestrator invocation """
    success: bool

    data: Optional[VehicleRecord] = None
    error_kind: Optional[ErrorKind] = None
    from_cache: bool = False
    message: Optional[str] = None
    plate: Optional[str] = None
    source: Optional[str] = None
