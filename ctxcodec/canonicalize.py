#!/usr/bin/env python

"""
Reduces text to the single form every encoding layer decodes to, and
detects inputs that were encoded more than once or under more than one
scheme.

Validation that runs on text which is decoded again later can be bypassed
by encoding an attack twice ("%253C" is "%3C" is "<") or by mixing schemes
("%26lt;" is "&lt;" is "<").  Canonicalizing before validation closes that
gap, and reporting such inputs lets the caller reject them outright.
"""

import logging

from ctxcodec import audit as _audit
from ctxcodec import errors


logger = logging.getLogger(__name__)

# Upper bound on decode passes.  Each pass is linear in the input.
MAX_DECODE_PASSES = 5


def decode_all(value, codecs):
    """
    Repeatedly decodes value with each of codecs in order until no codec
    matches or MAX_DECODE_PASSES is reached.

    value - the text to decode.
    codecs - an ordered sequence of Codecs.

    Returns (decoded, counts, fired, exhausted) where counts maps codec name
    to the number of passes in which it matched, fired lists codec names in
    the order they first matched, and exhausted is True if every allowed
    pass made progress, so the result may not be fully decoded.
    """
    working = value
    counts = {}
    fired = []
    for _ in range(MAX_DECODE_PASSES):
        progressed = False
        for a_codec in codecs:
            working, matches = a_codec.decode_pass(working)
            if matches:
                progressed = True
                name = a_codec.name
                if name not in counts:
                    counts[name] = 0
                    fired.append(name)
                counts[name] += 1
        if not progressed:
            return working, counts, fired, False
    return working, counts, fired, True


def detect(counts, fired, exhausted):
    """
    The tuple of conditions ("multiple", "mixed") present in a decode_all
    result.
    """
    conditions = []
    if exhausted or [n for n in counts.values() if n > 1]:
        conditions.append('multiple')
    if len(fired) > 1:
        conditions.append('mixed')
    return tuple(conditions)


class Canonicalizer(object):
    """
    Canonicalizes text against an ordered list of codecs and applies a
    policy to multiple or mixed encoding.
    """

    def __init__(self, codecs, audit=None):
        """
        codecs - an ordered sequence of Codecs that can decode.  Earlier
            codecs get the first chance at each pass.
        audit - an AuditSink that is told about every multiple or mixed
            encoding.  Defaults to a LoggingAuditSink.
        """
        codecs = tuple(codecs)
        if not codecs:
            raise errors.ConfigurationError(
                'Invalid configuration', 'Canonicalizer needs a codec')
        names = [c.name for c in codecs]
        for a_codec in codecs:
            if names.count(a_codec.name) > 1:
                raise errors.ConfigurationError(
                    'Invalid configuration',
                    'Duplicate codec %s in %s' % (a_codec.name, names))
            if not a_codec.can_decode:
                raise errors.ConfigurationError(
                    'Invalid configuration',
                    '%s cannot decode so it cannot canonicalize'
                    % a_codec.name)
        if audit is None:
            audit = _audit.LoggingAuditSink()
        self.codecs = codecs
        self.audit = audit

    def canonicalize(self, value, restrict_multiple=True, restrict_mixed=True):
        """
        Decodes value to its canonical form.

        value - untrusted text, or None.
        restrict_multiple - raise if any one scheme was applied repeatedly.
        restrict_mixed - raise if more than one scheme was applied.

        Raises IntrusionSignal when a restricted condition is found.  Any
        condition found is reported to the audit sink either way.
        """
        if value is None:
            return None
        if not value:
            return value
        working, counts, fired, exhausted = decode_all(value, self.codecs)
        conditions = detect(counts, fired, exhausted)
        if not conditions:
            return working
        signal = errors.IntrusionSignal(conditions, fired, counts)
        blocked = ((signal.multiple and restrict_multiple)
                   or (signal.mixed and restrict_mixed))
        self._report(signal, value, blocked)
        if blocked:
            raise signal
        return working

    def _report(self, signal, value, blocked):
        """Tells the audit sink, without letting a broken sink escape."""
        try:
            self.audit.report(signal, value, blocked)
        except Exception:  # pylint: disable=broad-except
            logger.exception('Audit sink %r failed', self.audit)
