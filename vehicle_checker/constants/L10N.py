from vehicle_checker.constants.tax_statuses import TaxStatus

CACHE_EXPIRY_OUT_OF_RANGE_STRING = 'Cache expiry must be between {} and {} days.'

COULD_NOT_READ_PLATE_STRING = (
    'Could not read license plate. Please try again or enter manually.')

EMPTY_REGISTRATION_STRING = 'Please enter a registration number'

INVALID_REGISTRATION_STRING = (
    'Invalid registration format. Please check and try again.')

LOOKUP_ENDPOINT_MISSING_STRING = (
    'Vehicle lookup endpoint not configured. Please check settings.')

NETWORK_FAILURE_STRING = (
    'Failed to fetch vehicle data. Please check your connection and try again.')

NO_MOT_DETAILS_STRING = 'No details held by DVLA'

OCR_API_KEY_MISSING_STRING = 'OCR API key not configured. Please check settings.'

RATE_LIMITED_STRING = 'Too many requests. Please wait and try again.'

SERVICE_ACCESS_DENIED_STRING = 'API access denied. Please check your DVLA API key.'

SERVICE_UNAVAILABLE_STRING = (
    'Vehicle service temporarily unavailable. Please try again later.')

UNKNOWN_STRING = 'Unknown'

VEHICLE_NOT_FOUND_STRING = (
    'Vehicle not found. Please check the registration number.')

HISTORY_ENTRY_STRING = '{} | {} | {} {} | {}'

LOOKUP_RESULT_STRING = (
    'Registration: {}\n'
    'Make: {}\n'
    'Colour: {}\n'
    'Fuel type: {}\n'
    'Year of manufacture: {}\n'
    'Tax status: {}\n'
    'Tax due: {}\n'
    'MOT status: {}\n'
    'MOT expiry: {}')

CACHED_RESULT_SUFFIX_STRING = '(cached result)'

TAX_STATUS_DESCRIPTIONS = {
    TaxStatus.TAXED.value: 'Taxed',
    TaxStatus.UNTAXED.value: 'Untaxed',
    TaxStatus.SORN.value: 'SORN (Statutory Off Road Notification)',
}


def pluralize(number: int) -> str:
    return '' if number == 1 else 'es'
