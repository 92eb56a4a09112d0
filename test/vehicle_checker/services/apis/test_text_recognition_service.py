import ddt
import io
import mock
import pytesseract
import requests
import unittest

from unittest.mock import MagicMock

from PIL import Image

from vehicle_checker.models.captured_image import CapturedImage
from vehicle_checker.models.recognition_result import RecognizedText
from vehicle_checker.services.apis.text_recognition_service import (
    OcrSpaceRecognitionEngine, TesseractRecognitionEngine, build_engine)
from vehicle_checker.services.constants.exceptions import (
    ConfigurationException, NetworkException, RecognitionException)


def _build_image() -> CapturedImage:
    buffer = io.BytesIO()
    Image.new('L', (32, 16), 255).save(buffer, format='JPEG')

    return CapturedImage(data=buffer.getvalue(), mime_type='image/jpeg')


class TestTesseractRecognitionEngine(unittest.TestCase):

    def setUp(self):
        self.engine = TesseractRecognitionEngine()

    @mock.patch(
        'vehicle_checker.services.apis.text_recognition_service.pytesseract.image_to_data')
    def test_recognize(self, mocked_image_to_data):
        mocked_image_to_data.return_value = {
            'text': ['', 'AB12', ' ', 'CDE'],
            'conf': ['-1', '90', '-1', 80],
        }

        result: RecognizedText = self.engine.recognize(_build_image())

        self.assertEqual(result, RecognizedText(confidence=85.0, text='AB12 CDE'))

    @mock.patch(
        'vehicle_checker.services.apis.text_recognition_service.pytesseract.image_to_data')
    def test_recognize_without_words(self, mocked_image_to_data):
        mocked_image_to_data.return_value = {'text': ['', ' '], 'conf': ['-1', '-1']}

        self.assertEqual(self.engine.recognize(_build_image()),
                         RecognizedText(confidence=0.0, text=''))

    @mock.patch(
        'vehicle_checker.services.apis.text_recognition_service.pytesseract.image_to_data')
    def test_recognize_wraps_engine_failure(self, mocked_image_to_data):
        mocked_image_to_data.side_effect = pytesseract.TesseractError(1, 'boom')

        with self.assertRaises(RecognitionException):
            self.engine.recognize(_build_image())

    def test_recognize_wraps_undecodable_image(self):
        with self.assertRaises(RecognitionException):
            self.engine.recognize(CapturedImage(data=b'nope', mime_type='image/jpeg'))


@ddt.ddt
class TestOcrSpaceRecognitionEngine(unittest.TestCase):

    def setUp(self):
        self.engine = OcrSpaceRecognitionEngine(
            api_key='K123', endpoint='https://api.ocr.space/parse/image')
        self.engine.api = MagicMock(name='api')

        self.response = MagicMock(name='response')
        self.engine.api.post.return_value = self.response

    def test_recognize(self):
        self.response.json.return_value = {
            'IsErroredOnProcessing': False,
            'ParsedResults': [{'ParsedText': 'GB\r\nAB12 CDE\r\n'}],
        }

        result: RecognizedText = self.engine.recognize(_build_image())

        self.assertEqual(result.confidence, 100.0)
        self.assertEqual(result.text, 'GB\r\nAB12 CDE\r\n')

        _, kwargs = self.engine.api.post.call_args
        self.assertEqual(kwargs['data']['apikey'], 'K123')
        self.assertEqual(kwargs['files']['file'][0], 'capture.jpeg')

    def test_recognize_empty_text_has_no_confidence(self):
        self.response.json.return_value = {
            'IsErroredOnProcessing': False,
            'ParsedResults': [{'ParsedText': ''}],
        }

        self.assertEqual(self.engine.recognize(_build_image()).confidence, 0.0)

    @ddt.data(
        {'IsErroredOnProcessing': False, 'ParsedResults': [{'ParsedText': None}]},
        {'IsErroredOnProcessing': False, 'ParsedResults': [{}]},
        {'IsErroredOnProcessing': False, 'ParsedResults': None},
        {'IsErroredOnProcessing': False},
    )
    def test_recognize_missing_text_is_empty(self, body):
        self.response.json.return_value = body

        result: RecognizedText = self.engine.recognize(_build_image())

        self.assertEqual(result.confidence, 0.0)
        self.assertEqual(result.text, '')

    @ddt.data(
        None,
        ['GB AB12 CDE'],
        'AB12 CDE',
        {'IsErroredOnProcessing': False, 'ParsedResults': ['AB12 CDE']},
        {'IsErroredOnProcessing': False, 'ParsedResults': [None]},
        {'IsErroredOnProcessing': False, 'ParsedResults': {'ParsedText': 'AB12 CDE'}},
    )
    def test_recognize_malformed_body(self, body):
        self.response.json.return_value = body

        with self.assertRaises(RecognitionException):
            self.engine.recognize(_build_image())

    def test_recognize_processing_error(self):
        self.response.json.return_value = {
            'IsErroredOnProcessing': True,
            'ErrorMessage': ['Unable to recognize the file type'],
        }

        with self.assertRaises(RecognitionException):
            self.engine.recognize(_build_image())

    def test_recognize_unreadable_body(self):
        self.response.json.side_effect = ValueError('no json')

        with self.assertRaises(RecognitionException):
            self.engine.recognize(_build_image())

    @ddt.data(
        requests.exceptions.ConnectionError('refused'),
        requests.exceptions.HTTPError('500 Server Error'),
    )
    def test_recognize_transport_failure(self, error):
        self.engine.api.post.side_effect = error

        with self.assertRaises(NetworkException):
            self.engine.recognize(_build_image())

    def test_recognize_requires_api_key(self):
        engine = OcrSpaceRecognitionEngine(api_key='')
        engine.api = MagicMock(name='api')

        with self.assertRaises(ConfigurationException):
            engine.recognize(_build_image())

        engine.api.post.assert_not_called()


@ddt.ddt
class TestBuildEngine(unittest.TestCase):

    @ddt.data(
        ('tesseract', TesseractRecognitionEngine),
        ('ocr_space', OcrSpaceRecognitionEngine),
        ('OCR_SPACE', OcrSpaceRecognitionEngine),
    )
    @ddt.unpack
    def test_build_engine(self, name, engine_class):
        self.assertIsInstance(build_engine(name), engine_class)

    def test_build_engine_rejects_unknown_name(self):
        with self.assertRaises(ConfigurationException):
            build_engine('abacus')
