from datetime import date
from typing import Optional, Union

from vehicle_checker.constants import L10N
from vehicle_checker.models.vehicle_record import VehicleRecord


def format_date(value: Optional[Union[date, str]]) -> str:
    if not value:
        return L10N.UNKNOWN_STRING

    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value

    return f'{value.day} {value:%B %Y}'


def format_tax_status(status: str) -> str:
    return L10N.TAX_STATUS_DESCRIPTIONS.get(status, status)


def format_vehicle_record(record: VehicleRecord) -> str:
    return L10N.LOOKUP_RESULT_STRING.format(
        record.registration_number,
        record.make,
        record.colour,
        record.fuel_type,
        record.year_of_manufacture,
        format_tax_status(record.tax_status),
        format_date(record.tax_due_date),
        record.mot_status,
        format_date(record.mot_expiry_date))
