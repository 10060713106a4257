#!/usr/bin/env python

"""
The CSS codec, for values inside style sheets and style attributes.
"""

import re

from ctxcodec import codec


# One to six hex digits in group 1.  A single whitespace character after
# the digits terminates the escape and is consumed with it; CSS treats
# CR LF as one whitespace character.
_CSS_ESC = re.compile(r'\\([0-9A-Fa-f]{1,6})(?:\r\n|[\t\n\f\r ])?')


def _encode_css_char(char):
    """ '<' -> '\\3c ' """
    if char in codec.ALPHANUMERICS:
        return char
    if char == '\0':
        # CSS parsers replace NUL with U+FFFD anyway.
        return '\\fffd '
    return '\\%x ' % ord(char)


def _css_decode_one(value, pos):
    """
    r'\\a ' -> '\\n'.
    NUL, surrogates and values past U+10FFFF decode to U+FFFD.
    """
    match = _CSS_ESC.match(value, pos)
    if match is None:
        return None
    return codec.safe_chr(int(match.group(1), 16)), match.end()


CSS_CODEC = codec.Codec('CSSCodec', _encode_css_char, _css_decode_one, '\\')
