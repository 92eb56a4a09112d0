from enum import Enum
from typing import Optional

from vehicle_checker.constants import L10N


class ErrorKind(Enum):
    CACHE_CORRUPTION = 'cache_corruption'
    CONFIGURATION = 'configuration'
    NETWORK = 'network'
    RECOGNITION = 'recognition'
    REMOTE = 'remote'
    VALIDATION = 'validation'


class LookupFailureException(Exception):
    """Base for every failure a lookup can end in. Carries a machine-readable
    kind and the single message shown to the user."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CacheCorruptionException(LookupFailureException):
    kind = ErrorKind.CACHE_CORRUPTION


class ConfigurationException(LookupFailureException):
    kind = ErrorKind.CONFIGURATION


class NetworkException(LookupFailureException):
    kind = ErrorKind.NETWORK

    def __init__(self, message: str = L10N.NETWORK_FAILURE_STRING):
        super().__init__(message)


class RecognitionException(LookupFailureException):
    kind = ErrorKind.RECOGNITION

    def __init__(self, message: str = L10N.COULD_NOT_READ_PLATE_STRING):
        super().__init__(message)


class RemoteServiceException(LookupFailureException):
    kind = ErrorKind.REMOTE

    MESSAGES_BY_STATUS = {
        400: L10N.INVALID_REGISTRATION_STRING,
        403: L10N.SERVICE_ACCESS_DENIED_STRING,
        404: L10N.VEHICLE_NOT_FOUND_STRING,
        429: L10N.RATE_LIMITED_STRING,
    }

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or self.MESSAGES_BY_STATUS.get(
            status_code, L10N.SERVICE_UNAVAILABLE_STRING))
        self.status_code = status_code


class ValidationException(LookupFailureException):
    kind = ErrorKind.VALIDATION
