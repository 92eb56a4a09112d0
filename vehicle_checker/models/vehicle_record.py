from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from vehicle_checker.constants import L10N


@dataclass(frozen=True)
class VehicleRecord:
    """ Represents the tax and MOT status of a vehicle returned by the
    vehicle lookup service """

    colour: str
    fuel_type: str
    make: str
    mot_status: str
    registration_number: str
    tax_status: str
    year_of_manufacture: int

    co2_emissions: Optional[int] = None
    engine_capacity: Optional[int] = None
    mot_expiry_date: Optional[date] = None
    tax_due_date: Optional[date] = None

    @classmethod
    def from_api_response(cls,
                          registration_number: str,
                          response: Dict[str, Any],
                          current_year: int) -> 'VehicleRecord':
        """Build a record from a lookup service payload, replacing absent
        fields with explicit sentinels."""

        return cls(
            colour=response.get('colour') or L10N.UNKNOWN_STRING,
            co2_emissions=_optional_int(response.get('co2Emissions')),
            engine_capacity=_optional_int(response.get('engineCapacity')),
            fuel_type=response.get('fuelType') or L10N.UNKNOWN_STRING,
            make=response.get('make') or L10N.UNKNOWN_STRING,
            mot_expiry_date=_optional_date(response.get('motExpiryDate')),
            mot_status=response.get('motStatus') or L10N.NO_MOT_DETAILS_STRING,
            registration_number=registration_number,
            tax_due_date=_optional_date(response.get('taxDueDate')),
            tax_status=response.get('taxStatus') or L10N.UNKNOWN_STRING,
            year_of_manufacture=int(
                response.get('yearOfManufacture') or current_year))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VehicleRecord':
        """Inverse of to_dict. Raises KeyError, TypeError or ValueError on
        malformed input."""

        return cls(
            colour=data['colour'],
            co2_emissions=_optional_int(data.get('co2Emissions')),
            engine_capacity=_optional_int(data.get('engineCapacity')),
            fuel_type=data['fuelType'],
            make=data['make'],
            mot_expiry_date=_optional_date(data.get('motExpiryDate')),
            mot_status=data['motStatus'],
            registration_number=data['registrationNumber'],
            tax_due_date=_optional_date(data.get('taxDueDate')),
            tax_status=data['taxStatus'],
            year_of_manufacture=int(data['yearOfManufacture']))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'co2Emissions': self.co2_emissions,
            'colour': self.colour,
            'engineCapacity': self.engine_capacity,
            'fuelType': self.fuel_type,
            'make': self.make,
            'motExpiryDate': (self.mot_expiry_date.isoformat()
                              if self.mot_expiry_date else None),
            'motStatus': self.mot_status,
            'registrationNumber': self.registration_number,
            'taxDueDate': (self.tax_due_date.isoformat()
                           if self.tax_due_date else None),
            'taxStatus': self.tax_status,
            'yearOfManufacture': self.year_of_manufacture,
        }


def _optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None

    return date.fromisoformat(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None

    return int(value)
