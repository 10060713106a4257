#!/usr/bin/env python

"""
Codecs for string literals in JavaScript and VBScript.
"""

import re

from ctxcodec import codec


_ESCAPE_MAP_FOR_JS_DECODE = {
    'b': '\x08',
    'f': '\x0c',
    'n': '\x0a',
    'r': '\x0d',
    't': '\x09',
    'v': '\x0b',
    '"': '"',
    "'": "'",
    '\\': '\\',
    '/': '/',
    }

# Two hex digits in group 1, or four in group 2, or a single character
# escape in group 3.
_JS_ESCAPE = re.compile(
    r'\\(?:x([0-9A-Fa-f]{2})|u([0-9A-Fa-f]{4})|([bfnrtv"\'\\/]))')

# A \u escape of a low surrogate.
_JS_LOW_SURROGATE = re.compile(r'\\u([dD][c-fC-F][0-9A-Fa-f]{2})')


def _encode_js_char(char):
    """ '<' -> '\\x3C', U+2028 -> '\\u2028' """
    if char in codec.ALPHANUMERICS:
        return char
    code_point = ord(char)
    if code_point < 0x100:
        return '\\x%02X' % code_point
    if code_point < 0x10000:
        return '\\u%04X' % code_point
    return '\\u%04X\\u%04X' % codec.to_surrogates(code_point)


def _decode_js_escape(value, pos):
    """
    Decodes one escape at value[pos].  A \\u escaped high surrogate followed
    by a \\u escaped low surrogate decodes to a single supplementary code
    point; a lone surrogate decodes to itself.
    """
    match = _JS_ESCAPE.match(value, pos)
    if match is None:
        return None
    hex_byte, hex_unit, single = match.groups()
    if single is not None:
        return _ESCAPE_MAP_FOR_JS_DECODE[single], match.end()
    if hex_byte is not None:
        return chr(int(hex_byte, 16)), match.end()
    unit = int(hex_unit, 16)
    if 0xd800 <= unit <= 0xdbff:
        low = _JS_LOW_SURROGATE.match(value, match.end())
        if low is not None:
            return (chr(codec.from_surrogates(unit, int(low.group(1), 16))),
                    low.end())
    return chr(unit), match.end()


JAVASCRIPT_CODEC = codec.Codec(
    'JavaScriptCodec', _encode_js_char, _decode_js_escape, '\\')


def _encode_vbscript_char(char):
    """ '<' -> 'chrw(60)' """
    if char in codec.ALPHANUMERICS:
        return char
    return 'chrw(%d)' % ord(char)


# VBScript has no escape sequences inside string literals, so there is
# nothing to decode.
VBSCRIPT_CODEC = codec.Codec('VBScriptCodec', _encode_vbscript_char)


def encode_vbscript(value, immune):
    """
    Encodes value as a VBScript string expression: runs of safe characters
    become quoted literals, and everything else becomes a chrw() call.

    'a<b' -> '"a"&chrw(60)&"b"'
    """
    parts = []
    literal = []
    for char in value:
        if char in immune or char in codec.ALPHANUMERICS:
            literal.append(char)
            continue
        if literal:
            parts.append('"%s"' % ''.join(literal))
            literal = []
        parts.append(VBSCRIPT_CODEC.encode_character(char, immune))
    if literal:
        parts.append('"%s"' % ''.join(literal))
    return '&'.join(parts)
