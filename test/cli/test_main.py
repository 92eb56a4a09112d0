import ddt
import mock
import unittest

from unittest.mock import MagicMock

import main

from vehicle_checker.models.history_entry import HistoryEntry
from vehicle_checker.models.response.lookup_response import LookupResponse
from vehicle_checker.models.vehicle_record import VehicleRecord
from vehicle_checker.services.constants.exceptions import (ErrorKind,
    ValidationException)

RECORD = VehicleRecord(
    colour='BLUE',
    fuel_type='PETROL',
    make='FORD',
    mot_status='Valid',
    registration_number='AB12CDE',
    tax_status='TAXED',
    year_of_manufacture=2015)


@ddt.ddt
class TestMain(unittest.TestCase):

    @ddt.data(
        (['lookup', 'AB12', 'CDE'], 'lookup'),
        (['scan', 'plate.jpg'], 'scan'),
        (['history'], 'history'),
        (['-l', 'debug', 'set-expiry', '3'], 'set-expiry'),
    )
    @ddt.unpack
    def test_parse_args(self, argv, command):
        self.assertEqual(main.parse_args(argv).command, command)

    @mock.patch('main.VehicleLookupOrchestrator')
    def test_run_lookup(self, mocked_orchestrator_class):
        orchestrator = MagicMock(name='orchestrator')
        orchestrator.look_up_text.return_value = LookupResponse(
            data=RECORD, plate='AB12CDE', success=True)
        mocked_orchestrator_class.create.return_value = orchestrator

        with mock.patch('builtins.print') as mocked_print:
            exit_code = main.run(main.parse_args(['lookup', 'AB12', 'CDE']))

        self.assertEqual(exit_code, 0)
        orchestrator.look_up_text.assert_called_once_with('AB12 CDE')
        self.assertIn('Registration: AB12CDE', mocked_print.call_args_list[0].args[0])

    @mock.patch('main.VehicleLookupOrchestrator')
    def test_run_lookup_failure(self, mocked_orchestrator_class):
        orchestrator = MagicMock(name='orchestrator')
        orchestrator.look_up_text.return_value = LookupResponse(
            error_kind=ErrorKind.REMOTE, message='Vehicle not found.', success=False)
        mocked_orchestrator_class.create.return_value = orchestrator

        with mock.patch('builtins.print') as mocked_print:
            exit_code = main.run(main.parse_args(['lookup', 'ZZ99ZZZ']))

        self.assertEqual(exit_code, 1)
        mocked_print.assert_called_once_with('Vehicle not found.')

    @mock.patch('main.VehicleLookupOrchestrator')
    def test_run_set_expiry_out_of_range(self, mocked_orchestrator_class):
        orchestrator = MagicMock(name='orchestrator')
        orchestrator.cache.set_expiry_days.side_effect = ValidationException('nope')
        mocked_orchestrator_class.create.return_value = orchestrator

        with mock.patch('builtins.print') as mocked_print:
            exit_code = main.run(main.parse_args(['set-expiry', '45']))

        self.assertEqual(exit_code, 1)
        mocked_print.assert_called_once_with('nope')

    def test_print_history(self):
        entries = [HistoryEntry(data=RECORD, plate='AB12CDE', timestamp=1705320000000)]

        with mock.patch('builtins.print') as mocked_print:
            main.print_history(entries)

        mocked_print.assert_has_calls([
            mock.call('15 Jan 2024 12:00 | AB12CDE | BLUE FORD | Taxed'),
            mock.call('1 search'),
        ])
