#!/usr/bin/env python

"""
Codecs for XML character data, XML attribute values, and XPath
expressions.
"""

import re

from ctxcodec import codec
from ctxcodec import html


_XML_ENTITY_TO_CHAR = {
    'lt': '<',
    'gt': '>',
    'amp': '&',
    'quot': '"',
    'apos': "'",
    }

_CHAR_TO_XML_ENTITY = dict(
    [(char, name) for name, char in _XML_ENTITY_TO_CHAR.items()])

# Hex digits in group 1, decimal digits in group 2, or one of the five
# predefined entities in group 3.  XML always requires the ';'.
_XML_REF = re.compile(
    r'&(?:#(?:x([0-9A-Fa-f]+)|([0-9]+))|(lt|gt|amp|quot|apos));')


def _is_legal_in_xml(code_point):
    """
    The XML 1.0 Char production.
    """
    return (code_point in (0x09, 0x0a, 0x0d)
            or 0x20 <= code_point <= 0xd7ff
            or 0xe000 <= code_point <= 0xfffd
            or 0x10000 <= code_point <= codec.MAX_CODE_POINT)


def _encode_xml_char(char):
    """ '<' -> '&lt;', '\\t' -> '&#x9;' """
    if char in codec.ALPHANUMERICS:
        return char
    name = _CHAR_TO_XML_ENTITY.get(char)
    if name is not None:
        return '&%s;' % name
    code_point = ord(char)
    if not _is_legal_in_xml(code_point):
        # Not even a character reference can carry these.
        return '&#xfffd;'
    return '&#x%x;' % code_point


def _decode_xml_ref(value, pos):
    """Decodes one character or predefined entity reference at value[pos]."""
    match = _XML_REF.match(value, pos)
    if match is None:
        return None
    hex_digits, decimal_digits, name = match.groups()
    if name is not None:
        return _XML_ENTITY_TO_CHAR[name], match.end()
    if hex_digits is not None:
        code_point = codec.parse_code_point(hex_digits, 16)
    else:
        code_point = codec.parse_code_point(decimal_digits, 10)
    if not _is_legal_in_xml(code_point):
        return codec.REPLACEMENT_CHARACTER, match.end()
    return chr(code_point), match.end()


XML_CODEC = codec.Codec('XMLCodec', _encode_xml_char, _decode_xml_ref, '&')

XML_ATTRIBUTE_CODEC = codec.Codec(
    'XMLAttributeCodec', _encode_xml_char, _decode_xml_ref, '&')

# XPath has no escape syntax of its own; string literals in XPath queries
# are embedded in markup, so the HTML entity forms are used.
XPATH_CODEC = codec.Codec(
    'XPathCodec', html.encode_html_char, html.decode_html_entity, '&')
