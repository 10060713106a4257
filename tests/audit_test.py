#!/usr/bin/python

"""Testcases for module audit"""

import logging
import threading
import unittest

from ctxcodec import audit
from ctxcodec import errors


def _signal():
    return errors.IntrusionSignal(
        ('mixed',), ('PercentCodec', 'HTMLEntityCodec'))


class _ListHandler(logging.Handler):
    """Collects records, optionally waiting on an event first."""

    def __init__(self, gate=None):
        logging.Handler.__init__(self)
        self.gate = gate
        self.records = []

    def emit(self, record):
        if self.gate is not None:
            self.gate.wait(5)
        self.records.append(record)


class AuditTest(unittest.TestCase):
    """Testcases for module audit"""

    def test_snippet(self):
        """Untrusted input is quoted and truncated for logs."""
        self.assertEqual("'abc'", audit.snippet('abc'))
        self.assertEqual("'a\\nb'", audit.snippet('a\nb'))
        long_snippet = audit.snippet('x' * 500)
        self.assertEqual(audit.SNIPPET_LENGTH, len(long_snippet))
        self.assertTrue(long_snippet.endswith('...'))

    def test_logging_sink_levels(self):
        """Blocked input is an error and tolerated input a warning."""
        sink = audit.LoggingAuditSink()
        with self.assertLogs(audit.AUDIT_LOGGER_NAME, 'WARNING') as logs:
            sink.report(_signal(), '%26lt;', False)
            sink.report(_signal(), '%26lt;\r\nFAKE', True)
        warning, error = logs.records
        self.assertEqual(logging.WARNING, warning.levelno)
        self.assertEqual(logging.ERROR, error.levelno)
        self.assertEqual(
            "Tolerated input: Mixed encoding detected"
            " (codecs: PercentCodec x1, HTMLEntityCodec x1) in '%26lt;'",
            warning.getMessage())
        self.assertFalse('\n' in error.getMessage())

    def test_abstract_sink(self):
        self.assertRaises(
            NotImplementedError, audit.AuditSink().report, _signal(), '', True)

    def test_queued_logging(self):
        """Records flow through the queue to the handlers."""
        handler = _ListHandler()
        queued = audit.start_queued_audit_logging(
            handler, logger_name='ctxcodec.audit.test_queued')
        try:
            sink = audit.LoggingAuditSink(queued.logger)
            sink.report(_signal(), 'a', False)
            sink.report(_signal(), 'b', True)
        finally:
            queued.stop()
        self.assertEqual(
            [logging.WARNING, logging.ERROR],
            [r.levelno for r in handler.records])
        self.assertEqual(0, queued.dropped_records)
        self.assertFalse(queued.logger.handlers)

    def test_queued_logging_drops_when_full(self):
        """A full queue drops records instead of blocking the caller."""
        gate = threading.Event()
        handler = _ListHandler(gate)
        queued = audit.start_queued_audit_logging(
            handler, queue_size=1, logger_name='ctxcodec.audit.test_full')
        try:
            for i in range(20):
                queued.logger.warning('record %d', i)
            self.assertTrue(queued.dropped_records > 0)
        finally:
            gate.set()
            queued.stop()
        self.assertEqual(20, len(handler.records) + queued.dropped_records)

    def test_queue_size(self):
        self.assertRaises(
            ValueError, audit.start_queued_audit_logging, queue_size=0)


if __name__ == '__main__':
    unittest.main()
