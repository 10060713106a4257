#!/usr/bin/env python

"""
Reporting of intrusion signals.

The canonicalizer reports every multiple or mixed encoding it finds to an
audit sink, whether or not policy lets the input through.  The default sink
writes to the "ctxcodec.audit" logger.  start_queued_audit_logging puts a
bounded queue between that logger and its handlers so that a slow handler
never holds up canonicalization.
"""

import logging
import logging.handlers
import queue
import threading
import time


AUDIT_LOGGER_NAME = 'ctxcodec.audit'

# Longest repr of untrusted input that goes into a log record.
SNIPPET_LENGTH = 80


def snippet(value):
    """
    A bounded, printable rendering of untrusted input for log messages.
    repr() escapes control characters so input cannot forge log lines.
    """
    rendered = repr(value)
    if len(rendered) > SNIPPET_LENGTH:
        rendered = rendered[:SNIPPET_LENGTH - 3] + '...'
    return rendered


class AuditSink(object):
    """
    Receives intrusion signals from a Canonicalizer.
    """

    def report(self, signal, value, blocked):
        """
        signal - an IntrusionSignal describing what was detected.
        value - the input that was being canonicalized.
        blocked - True if the signal is about to be raised to the caller,
            False if policy tolerated the input.
        """
        raise NotImplementedError('abstract')  # pragma: no cover


class LoggingAuditSink(AuditSink):
    """
    Writes tolerated encodings as warnings and blocked ones as errors.
    """

    def __init__(self, logger=None):
        if logger is None:
            logger = logging.getLogger(AUDIT_LOGGER_NAME)
        self.logger = logger

    def report(self, signal, value, blocked):
        if blocked:
            self.logger.error(
                'Blocked input: %s in %s', signal.log_message, snippet(value))
        else:
            self.logger.warning(
                'Tolerated input: %s in %s', signal.log_message,
                snippet(value))


class _NonBlockingQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that drops records when the queue is full."""

    def __init__(self, log_queue):
        logging.handlers.QueueHandler.__init__(self, log_queue)
        self._lock = threading.Lock()
        self.dropped = 0

    def enqueue(self, record):
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            with self._lock:
                self.dropped += 1


class QueuedAuditLogging(object):
    """
    A running queue between the audit logger and its handlers.
    """

    def __init__(self, logger, log_queue, queue_handler, listener):
        self.logger = logger
        self._queue = log_queue
        self._queue_handler = queue_handler
        self._listener = listener
        self._stop_lock = threading.Lock()
        self._stopped = False

    @property
    def dropped_records(self):
        """Records discarded because the queue was full."""
        return self._queue_handler.dropped

    def flush(self, timeout_seconds=2.0):
        """Waits for the listener to hand queued records to the handlers."""
        deadline = time.monotonic() + max(timeout_seconds, 0.0)
        while self._queue.unfinished_tasks > 0 and time.monotonic() < deadline:
            time.sleep(0.01)

    def stop(self, timeout_seconds=2.0):
        """
        Detaches from the logger, drains the queue, and stops the listener
        thread.  Calling it again does nothing.
        """
        with self._stop_lock:
            if self._stopped:
                return
            self.logger.removeHandler(self._queue_handler)
            self.flush(timeout_seconds)
            self._listener.stop()
            self._queue_handler.close()
            self.logger.propagate = True
            self._stopped = True


def start_queued_audit_logging(*handlers, queue_size=1024,
                               logger_name=AUDIT_LOGGER_NAME):
    """
    Routes the audit logger through a bounded queue drained by a background
    thread that feeds handlers.

    handlers - the logging handlers that should receive audit records.
    queue_size - records held before new ones are dropped.
    logger_name - the logger to attach to.

    Returns a QueuedAuditLogging whose stop() undoes this.
    """
    if queue_size < 1:
        raise ValueError('queue_size must be positive: %r' % queue_size)
    log_queue = queue.Queue(maxsize=queue_size)
    queue_handler = _NonBlockingQueueHandler(log_queue)
    listener = logging.handlers.QueueListener(
        log_queue, *handlers, respect_handler_level=True)
    logger = logging.getLogger(logger_name)
    logger.addHandler(queue_handler)
    logger.propagate = False
    listener.start()
    return QueuedAuditLogging(logger, log_queue, queue_handler, listener)
