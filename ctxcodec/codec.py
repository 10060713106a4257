#!/usr/bin/env python

"""
The codec abstraction shared by every escaping scheme.

A codec converts between one logical character and its escaped textual form
in a single target language.  Codecs are immutable module level singletons
so they can be shared between threads; a new scheme is a new Codec instance
built from an encoder function and a decoder function, not a subclass.
"""


# ASCII letters and digits are safe in almost every target language.
ALPHANUMERICS = frozenset(
    '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz')

REPLACEMENT_CHARACTER = '\ufffd'

MAX_CODE_POINT = 0x10ffff


class Codec(object):
    """
    A named, stateless escaper and unescaper for one target language.
    """

    def __init__(self, name, encode_char, decode_char=None, lead=None):
        """
        name - stable identifier used in configuration and diagnostics.
        encode_char - maps a single character to its escaped form.  Must be
            total: defined for every code point and never raising.
        decode_char - given (value, pos) where value[pos] == lead, returns
            (decoded_text, end) for one escape sequence, or None if there
            is no well formed escape at pos.  None for encode-only codecs.
        lead - the character that starts every escape sequence.
        """
        if (decode_char is None) != (lead is None):
            raise ValueError('decode_char and lead go together: %s' % name)
        self.name = name
        self.lead = lead
        self._encode_char = encode_char
        self._decode_char = decode_char

    def __repr__(self):
        return '<Codec %s>' % self.name

    @property
    def can_decode(self):
        """False for codecs that only encode."""
        return self._decode_char is not None

    def encode_character(self, char, immune=()):
        """
        Returns the escaped representation of char, or char itself if it
        is in immune.
        """
        if char in immune:
            return char
        return self._encode_char(char)

    def encode(self, value, immune=()):
        """
        Escapes every code point of value that is not immune.
        """
        encode_char = self._encode_char
        return ''.join([
            char if char in immune else encode_char(char) for char in value])

    def decode_character(self, value, pos):
        """
        Attempts to parse one escape sequence starting at value[pos].

        Returns (decoded_text, end) where end is the index just past the
        sequence, or None if there is no well formed escape at pos.
        Never raises on malformed input.
        """
        if self._decode_char is None or not value.startswith(self.lead, pos):
            return None
        return self._decode_char(value, pos)

    def decode_pass(self, value):
        """
        Decodes every escape sequence in value in a single left to right
        scan.  Text produced by a replacement is not rescanned.

        Returns (decoded, count) where count is the number of escape
        sequences replaced.
        """
        lead = self.lead
        if self._decode_char is None or lead not in value:
            return value, 0
        decode_char = self._decode_char
        parts = []
        count = 0
        start = 0
        pos = value.find(lead)
        while pos >= 0:
            match = decode_char(value, pos)
            if match is None:
                # A malformed escape is left as is.
                pos = value.find(lead, pos + 1)
                continue
            decoded, end = match
            parts.append(value[start:pos])
            parts.append(decoded)
            count += 1
            start = end
            pos = value.find(lead, end)
        if not count:
            return value, 0
        parts.append(value[start:])
        return ''.join(parts), count

    def decode(self, value):
        """Decodes every escape sequence in value once."""
        return self.decode_pass(value)[0]


def utf8_bytes(char):
    """
    The UTF-8 encoding of char.  Lone surrogates are encoded as their three
    byte form so that byte oriented encoders stay total.
    """
    return char.encode('UTF-8', 'surrogatepass')


def decode_utf8(octets):
    """
    Decodes octets as UTF-8, replacing invalid sequences with U+FFFD rather
    than failing.
    """
    return octets.decode('UTF-8', 'replace')


def is_surrogate(code_point):
    """True iff code_point is a UTF-16 surrogate."""
    return 0xd800 <= code_point <= 0xdfff


def safe_chr(code_point):
    """
    Like chr but maps NUL, surrogates and out of range values to U+FFFD.
    """
    if (code_point <= 0 or code_point > MAX_CODE_POINT
            or is_surrogate(code_point)):
        return REPLACEMENT_CHARACTER
    return chr(code_point)


def parse_code_point(digits, base):
    """
    Parses a run of digits into a code point.  Runs too long to name a
    valid code point yield a value past MAX_CODE_POINT instead of doing
    arbitrary precision arithmetic on attacker controlled input.
    """
    digits = digits.lstrip('0') or '0'
    if len(digits) > 8:
        return MAX_CODE_POINT + 1
    return int(digits, base)


def to_surrogates(code_point):
    """Splits a supplementary code point into a UTF-16 (high, low) pair."""
    code_point -= 0x10000
    return 0xd800 | (code_point >> 10), 0xdc00 | (code_point & 0x3ff)


def from_surrogates(high, low):
    """Joins a UTF-16 surrogate pair into a supplementary code point."""
    return 0x10000 + ((high - 0xd800) << 10) + (low - 0xdc00)
