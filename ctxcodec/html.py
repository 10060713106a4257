#!/usr/bin/env python

"""
HTML definitions: the entity table and the HTML entity codec.
"""

from html.entities import codepoint2name, name2codepoint
import re

from ctxcodec import codec


# Maps entity names (excluding & and ;) to their expansion.
# These are case-sensitive : "&Gt;" does not decode to ">".
# The HTML 4 set plus &apos; from XML.
_ENTITY_NAME_TO_EXPANSION = dict(
    [(name, chr(code_point)) for name, code_point in name2codepoint.items()])
_ENTITY_NAME_TO_EXPANSION['apos'] = "'"

# &apos; is deliberately absent; it is not an HTML 4 entity.
_CHAR_TO_ENTITY_NAME = dict(
    [(chr(code_point), name) for code_point, name in codepoint2name.items()])

# Hex digits in group 1, or decimal digits in group 2, or a named entity in
# group 3.  Numeric references tolerate a missing ';' like legacy browsers;
# named references require it.
_ENTITY_REF = re.compile(
    r'&(?:#(?:[xX]([0-9A-Fa-f]+)|([0-9]+));?|([A-Za-z][A-Za-z0-9]*);)')


def _is_illegal_in_html(code_point):
    """
    True for code points that cannot appear in an HTML document: C0 controls
    other than tab, LF and CR, DEL, the C1 controls, and surrogates.
    """
    if code_point <= 0x1f:
        return code_point not in (0x09, 0x0a, 0x0d)
    return 0x7f <= code_point <= 0x9f or codec.is_surrogate(code_point)


def encode_html_char(char):
    """ '<' -> '&lt;', '\\'' -> '&#x27;' """
    if char in codec.ALPHANUMERICS:
        return char
    code_point = ord(char)
    if _is_illegal_in_html(code_point):
        return '&#xfffd;'
    name = _CHAR_TO_ENTITY_NAME.get(char)
    if name is not None:
        return '&%s;' % name
    return '&#x%x;' % code_point


def decode_html_entity(value, pos):
    """
    Decodes one entity reference at value[pos].
    Unknown names like "&noSuchEntity;" do not match.
    """
    match = _ENTITY_REF.match(value, pos)
    if match is None:
        return None
    hex_digits, decimal_digits, name = match.groups()
    if name is not None:
        expansion = _ENTITY_NAME_TO_EXPANSION.get(name)
        if expansion is None:
            return None
        return expansion, match.end()
    if hex_digits is not None:
        code_point = codec.parse_code_point(hex_digits, 16)
    else:
        code_point = codec.parse_code_point(decimal_digits, 10)
    return codec.safe_chr(code_point), match.end()


HTML_ENTITY_CODEC = codec.Codec(
    'HTMLEntityCodec', encode_html_char, decode_html_entity, '&')


def unescape_html(html):
    """
    Given HTML that would parse to a single text node, returns the text
    value of that node.
    """
    # Fast path for common case.
    if html.find('&') < 0:
        return html
    return HTML_ENTITY_CODEC.decode(html)
