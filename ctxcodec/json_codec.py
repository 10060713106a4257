#!/usr/bin/env python

"""
The JSON string codec (RFC 8259 section 7).
"""

import re

from ctxcodec import codec


_ESCAPE_MAP_FOR_JSON = {
    '"': '\\"',
    '\\': '\\\\',
    '\x08': '\\b',
    '\x0c': '\\f',
    '\x0a': '\\n',
    '\x0d': '\\r',
    '\x09': '\\t',
    }

_ESCAPE_MAP_FOR_JSON_DECODE = {
    '"': '"',
    '\\': '\\',
    '/': '/',
    'b': '\x08',
    'f': '\x0c',
    'n': '\x0a',
    'r': '\x0d',
    't': '\x09',
    }

# Four hex digits in group 1 or a short escape in group 2.
_JSON_ESCAPE = re.compile(r'\\(?:u([0-9A-Fa-f]{4})|(["\\/bfnrt]))')

_JSON_LOW_SURROGATE = re.compile(r'\\u([dD][c-fC-F][0-9A-Fa-f]{2})')


def _encode_json_char(char):
    """
    Escapes only what RFC 8259 requires: the quote, the backslash and the
    control characters, preferring the two character forms.  Lone
    surrogates are escaped too since no encoding of the document can carry
    them raw.
    """
    encoded = _ESCAPE_MAP_FOR_JSON.get(char)
    if encoded is not None:
        return encoded
    code_point = ord(char)
    if code_point < 0x20 or codec.is_surrogate(code_point):
        return '\\u%04x' % code_point
    return char


def _decode_json_escape(value, pos):
    """Decodes one escape at value[pos], joining surrogate pairs."""
    match = _JSON_ESCAPE.match(value, pos)
    if match is None:
        return None
    hex_unit, short = match.groups()
    if short is not None:
        return _ESCAPE_MAP_FOR_JSON_DECODE[short], match.end()
    unit = int(hex_unit, 16)
    if 0xd800 <= unit <= 0xdbff:
        low = _JSON_LOW_SURROGATE.match(value, match.end())
        if low is not None:
            return (chr(codec.from_surrogates(unit, int(low.group(1), 16))),
                    low.end())
    return chr(unit), match.end()


JSON_CODEC = codec.Codec(
    'JSONCodec', _encode_json_char, _decode_json_escape, '\\')
