import logging
import requests

from datetime import datetime
from typing import Any, Dict, Optional

from vehicle_checker import settings
from vehicle_checker.constants import L10N
from vehicle_checker.models.vehicle_record import VehicleRecord
from vehicle_checker.services.constants.exceptions import (
    ConfigurationException, NetworkException, RemoteServiceException,
    ValidationException)

LOG = logging.getLogger(__name__)


class VehicleLookupService:
    """Client for the proxy in front of the DVLA vehicle enquiry API.

    Requests are never retried.
    """

    REGISTRATION_NUMBER_KEY = 'registrationNumber'

    def __init__(self,
                 endpoint: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.endpoint = endpoint if endpoint is not None else settings.VEHICLE_LOOKUP_ENDPOINT
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS

        self.api = requests.Session()

    def ensure_configured(self) -> None:
        if not self.endpoint:
            raise ConfigurationException(L10N.LOOKUP_ENDPOINT_MISSING_STRING)

    def look_up_vehicle(self, registration_number: str) -> VehicleRecord:
        self.ensure_configured()

        if not registration_number:
            raise ValidationException(L10N.EMPTY_REGISTRATION_STRING)

        LOG.debug(f'Looking up vehicle {registration_number} at {self.endpoint}')

        try:
            response = self.api.post(
                self.endpoint,
                json={self.REGISTRATION_NUMBER_KEY: registration_number},
                timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            LOG.error(f'Vehicle lookup transport failure: {exc}')
            raise NetworkException() from exc

        if not response.ok:
            LOG.error(f'Vehicle lookup failed with status {response.status_code}: '
                      f'{self._error_detail(response)}')
            raise RemoteServiceException(status_code=response.status_code)

        try:
            payload: Dict[str, Any] = response.json()
            return VehicleRecord.from_api_response(
                registration_number=registration_number,
                response=payload,
                current_year=datetime.now().year)
        except (AttributeError, TypeError, ValueError) as exc:
            LOG.error(f'Unreadable vehicle lookup response: {exc}')
            raise RemoteServiceException(status_code=response.status_code,
                                         message=L10N.SERVICE_UNAVAILABLE_STRING) from exc

    def _error_detail(self, response: requests.Response) -> str:
        try:
            body: Dict[str, Any] = response.json()
        except ValueError:
            return response.text

        if not isinstance(body, dict):
            return str(body)

        return str(body.get('error') or body.get('detail') or f'HTTP {response.status_code}')
