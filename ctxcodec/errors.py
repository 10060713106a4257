#!/usr/bin/env python

"""
Exceptions raised by the encoder and the canonicalizer.

Every error carries two messages: a user_message that is safe to show to an
end user, and a log_message with enough detail (codec names, conditions) for
an operator to tell an attack from a legitimate encoding mismatch.
"""


class EncoderError(Exception):
    """Base class of all errors raised by this package."""

    def __init__(self, user_message, log_message=None):
        Exception.__init__(self, log_message or user_message)
        self.user_message = user_message
        self.log_message = log_message or user_message


class IntrusionSignal(EncoderError):
    """
    Canonicalization found multiple or mixed encoding that the active policy
    does not allow.
    """

    def __init__(self, conditions, codecs, counts=None):
        """
        conditions - a tuple containing "multiple", "mixed", or both.
        codecs - names of the codecs that fired, in first-firing order.
        counts - maps codec name to the number of passes in which it fired.
        """
        self.conditions = tuple(conditions)
        self.codecs = tuple(codecs)
        self.counts = dict(counts or {})
        EncoderError.__init__(
            self, 'Input validation failure',
            '%s encoding detected (codecs: %s)' % (
                ' and '.join(self.conditions).capitalize(),
                ', '.join(
                    ['%s x%d' % (name, self.counts.get(name, 1))
                     for name in self.codecs])))

    @property
    def multiple(self):
        """True iff one scheme was applied more than once."""
        return 'multiple' in self.conditions

    @property
    def mixed(self):
        """True iff more than one scheme was applied."""
        return 'mixed' in self.conditions


class EncodingError(EncoderError, ValueError):
    """
    Input could not be interpreted under a target scheme, or an encoding
    operation was handed an unusable codec.
    """

    def __init__(self, user_message, log_message=None, codec=None):
        EncoderError.__init__(self, user_message, log_message)
        # Name of the codec that rejected the input, if any.
        self.codec = codec


class NotConfiguredError(EncoderError):
    """
    A dangerous method was called without being enabled in the
    configuration's allow_unsafe_methods.
    """

    def __init__(self, method):
        self.method = method
        EncoderError.__init__(
            self, 'Method not enabled',
            '%s is disabled by default; add it to allow_unsafe_methods'
            ' to use it' % method)


class ConfigurationError(EncoderError, ValueError):
    """The encoder configuration is invalid."""
