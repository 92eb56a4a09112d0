import argparse
import logging
import mimetypes
import sys

from typing import List

from vehicle_checker.constants import L10N
from vehicle_checker.models.captured_image import CapturedImage
from vehicle_checker.models.history_entry import HistoryEntry
from vehicle_checker.models.response.lookup_response import LookupResponse
from vehicle_checker.services.constants.exceptions import ValidationException
from vehicle_checker.utils import string_utils, time_utils
from vehicle_checker.vehicle_lookup_orchestrator import \
    VehicleLookupOrchestrator

LOGGING_LEVELS = {'critical': logging.CRITICAL,
                  'error': logging.ERROR,
                  'warning': logging.WARNING,
                  'info': logging.INFO,
                  'debug': logging.DEBUG}

LOG = logging.getLogger(__name__)


def print_lookup_response(response: LookupResponse) -> int:
    if not response.success:
        print(response.message)
        return 1

    print(string_utils.format_vehicle_record(response.data))

    if response.from_cache:
        print(L10N.CACHED_RESULT_SUFFIX_STRING)

    return 0


def print_history(entries: List[HistoryEntry]) -> int:
    for entry in entries:
        print(L10N.HISTORY_ENTRY_STRING.format(
            time_utils.format_timestamp(entry.timestamp),
            entry.plate,
            entry.data.colour,
            entry.data.make,
            string_utils.format_tax_status(entry.data.tax_status)))

    print(f'{len(entries)} search{L10N.pluralize(len(entries))}')

    return 0


def run(args: argparse.Namespace) -> int:
    orchestrator = VehicleLookupOrchestrator.create(engine_name=args.ocr_engine)

    if args.command == 'lookup':
        return print_lookup_response(
            orchestrator.look_up_text(' '.join(args.registration)))

    elif args.command == 'scan':
        mime_type = mimetypes.guess_type(args.image)[0] or 'image/jpeg'
        with open(args.image, 'rb') as image_file:
            image = CapturedImage(data=image_file.read(), mime_type=mime_type)

        return print_lookup_response(orchestrator.look_up_image(image))

    elif args.command == 'history':
        return print_history(orchestrator.history.entries())

    elif args.command == 'clear-cache':
        orchestrator.cache.clear()

    elif args.command == 'clear-history':
        orchestrator.history.clear()

    elif args.command == 'set-expiry':
        try:
            orchestrator.cache.set_expiry_days(args.days)
        except ValidationException as exc:
            print(exc.message)
            return 1

    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Check the tax and MOT status of UK vehicles')
    parser.add_argument(
        '-l',
        '--log-level',
        help='Log level')
    parser.add_argument(
        '-f',
        '--log-file',
        help='Log file name')
    parser.add_argument(
        '-o',
        '--ocr-engine',
        choices=['tesseract', 'ocr_space'],
        help='Text recognition engine for scans')

    subparsers = parser.add_subparsers(dest='command', required=True)

    lookup_parser = subparsers.add_parser(
        'lookup', help='Look up a typed registration number')
    lookup_parser.add_argument('registration', nargs='+')

    scan_parser = subparsers.add_parser(
        'scan', help='Read a registration plate from a photo and look it up')
    scan_parser.add_argument('image')

    subparsers.add_parser('history', help='Show recent lookups')
    subparsers.add_parser('clear-cache', help='Remove all cached results')
    subparsers.add_parser('clear-history', help='Remove all recent lookups')

    expiry_parser = subparsers.add_parser(
        'set-expiry', help='Set how many days results stay cached')
    expiry_parser.add_argument('days', type=int)

    return parser.parse_args(argv)


if __name__ == '__main__':
    args = parse_args()

    logging_level: int = LOGGING_LEVELS.get(
        args.log_level, logging.NOTSET)
    logging.basicConfig(level=logging_level, filename=args.log_file,
                        format='%(asctime)s %(levelname)s: %(message)s',
                        datefmt='%Y-%m-%d %H:%M:%S')

    sys.exit(run(args))
