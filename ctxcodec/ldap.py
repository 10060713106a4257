#!/usr/bin/env python

"""
Codecs for LDAP search filters (RFC 4515) and distinguished names
(RFC 4514).

Both escape a character by hex encoding each octet of its UTF-8 form, as in
"\\2a" for '*'.  They differ only in which characters may appear raw.
"""

import re

from ctxcodec import codec


# A run of one or more hex-escaped octets.
_HEX_OCTET_RUN = re.compile(r'(?:\\[0-9A-Fa-f]{2})+')


def _escape_octets(char):
    """ '*' -> '\\2a', U+00E9 -> '\\c3\\a9' """
    return ''.join(['\\%02x' % octet for octet in codec.utf8_bytes(char)])


def _decode_octet_run(value, pos):
    """Decodes a run of hex-escaped octets at value[pos] as UTF-8."""
    match = _HEX_OCTET_RUN.match(value, pos)
    if match is None:
        return None
    octets = bytes.fromhex(match.group(0).replace('\\', ''))
    return codec.decode_utf8(octets), match.end()


def _is_filter_safe(code_point):
    """
    RFC 4515 valid ranges 0x01-0x27, 0x2B-0x5B and 0x5D-0x7F, minus '/'
    which Active Directory treats specially.
    """
    if code_point == 0x2f:
        return False
    return (0x01 <= code_point <= 0x27 or 0x2b <= code_point <= 0x5b
            or 0x5d <= code_point <= 0x7f)


def _is_dn_safe(code_point):
    """
    RFC 4514 valid ranges 0x01-0x21, 0x23-0x2A, 0x2D-0x3A, 0x3D, 0x3F-0x5B
    and 0x5D-0x7F, minus '/'.
    """
    if code_point == 0x2f:
        return False
    return (0x01 <= code_point <= 0x21 or 0x23 <= code_point <= 0x2a
            or 0x2d <= code_point <= 0x3a or code_point == 0x3d
            or 0x3f <= code_point <= 0x5b or 0x5d <= code_point <= 0x7f)


def _encode_filter_char(char):
    """ '(' -> '\\28' """
    if _is_filter_safe(ord(char)):
        return char
    return _escape_octets(char)


def _encode_dn_char(char):
    """ ',' -> '\\2c' """
    if _is_dn_safe(ord(char)):
        return char
    return _escape_octets(char)


LDAP_FILTER_CODEC = codec.Codec(
    'LDAPFilterCodec', _encode_filter_char, _decode_octet_run, '\\')

LDAP_DN_CODEC = codec.Codec(
    'LDAPDNCodec', _encode_dn_char, _decode_octet_run, '\\')


def encode_filter(value, encode_wildcards=True):
    """
    Encodes value for use as an assertion value in an LDAP search filter.

    value - the string to encode.
    encode_wildcards - if False, '*' passes through so that the caller can
        build substring matches.
    """
    if encode_wildcards:
        return LDAP_FILTER_CODEC.encode(value)
    return LDAP_FILTER_CODEC.encode(value, ('*',))


def encode_dn(value):
    """
    Encodes value for use as an attribute value in a distinguished name.

    A leading space or '#' and a trailing space are significant to DN
    parsers, so they are escaped even though they are safe mid-string.
    """
    encoded = [LDAP_DN_CODEC.encode_character(char) for char in value]
    if encoded:
        if value[0] in ' #':
            encoded[0] = _escape_octets(value[0])
        if value[-1] == ' ':
            encoded[-1] = _escape_octets(value[-1])
    return ''.join(encoded)
