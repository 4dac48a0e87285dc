"""Tests for structured JSON logging."""

import json
import logging
import sys
import unittest
from datetime import datetime, timezone

from utils.logging import JSONFormatter


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def _record(self, msg='Todo created', level=logging.INFO, extra=None, exc_info=None):
        record = logging.LogRecord('services.todo_service', level, __file__, 10, msg, (), exc_info)
        for key, value in (extra or {}).items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        data = json.loads(self.formatter.format(self._record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'services.todo_service')
        self.assertEqual(data['message'], 'Todo created')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_are_included(self):
        data = json.loads(self.formatter.format(self._record(extra={'todoId': 't1', 'userId': 'u1'})))

        self.assertEqual(data['todoId'], 't1')
        self.assertEqual(data['userId'], 'u1')
        self.assertNotIn('lineno', data)
        self.assertNotIn('args', data)

    def test_exception_is_formatted(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = self._record(level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(self.formatter.format(record))

        self.assertIn('ValueError: boom', data['exception'])

    def test_non_json_values_are_stringified(self):
        when = datetime(2026, 1, 1, tzinfo=timezone.utc)

        data = json.loads(self.formatter.format(self._record(extra={'at': when})))

        self.assertEqual(data['at'], str(when))


if __name__ == '__main__':
    unittest.main()
