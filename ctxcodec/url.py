#!/usr/bin/env python

"""
Percent-encoding, and canonicalization of URIs component by component.
"""

import re

from ctxcodec import codec
from ctxcodec import errors


# A run of one or more percent-encoded octets.
_PCT_RUN = re.compile(r'(?:%[0-9A-Fa-f]{2})+')

# unreserved  = ALPHA / DIGIT / "-" / "." / "_" / "~"
_NOT_URL_UNRESERVED = re.compile(r'[^0-9A-Za-z\._~\-]+')

# A '%' that does not start a valid escape.
_MALFORMED_PCT = re.compile(r'%(?![0-9A-Fa-f]{2})')

# The URI reference regex from RFC 3986 appendix B, with the
# scheme, authority, path, query and fragment in groups 1 to 5.
_URI_PARTS = re.compile(
    r'\A(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?\Z',
    re.DOTALL)


def _encode_pct_char(char):
    """ ' ' -> '%20', U+00E9 -> '%C3%A9' """
    if char in codec.ALPHANUMERICS:
        return char
    return ''.join(['%%%02X' % octet for octet in codec.utf8_bytes(char)])


def _decode_pct_run(value, pos):
    """
    Decodes a run of percent-encoded octets at value[pos] as UTF-8.
    "%2" and "%zz" do not match.
    """
    match = _PCT_RUN.match(value, pos)
    if match is None:
        return None
    octets = bytes.fromhex(match.group(0).replace('%', ''))
    return codec.decode_utf8(octets), match.end()


PERCENT_CODEC = codec.Codec(
    'PercentCodec', _encode_pct_char, _decode_pct_run, '%')


def _pct_encode(match):
    """URL encodes octets in a run of reserved characters."""
    return ''.join(
        ['%%%02X' % octet for octet in match.group(0).encode('UTF-8')])


def encode_url(value):
    """
    Percent-encodes everything in value but RFC 3986 unreserved characters.

    value - a string.

    Raises EncodingError if value contains a lone surrogate, which has no
    UTF-8 form.
    """
    try:
        value.encode('UTF-8')
    except UnicodeEncodeError as exc:
        raise errors.EncodingError(
            'Unable to URL encode input',
            'PercentCodec: %s at index %d cannot be encoded as UTF-8' % (
                ascii(value[exc.start:exc.end]), exc.start),
            codec=PERCENT_CODEC.name) from exc
    return _NOT_URL_UNRESERVED.sub(_pct_encode, value)


def check_no_stray_percent(value):
    """
    Raises EncodingError if value holds a '%' that does not start an escape,
    as in "100%" or "%zz".
    """
    match = _MALFORMED_PCT.search(value)
    if match is not None:
        raise errors.EncodingError(
            'Invalid URL encoding',
            'PercentCodec: malformed escape at index %d' % match.start(),
            codec=PERCENT_CODEC.name)
    return value


def split_uri(uri):
    """
    Splits uri into its components without decoding anything.

    Returns (scheme, userinfo, host, port, path, query, fragment).
    query is a list of (name, value) pairs where value is None for a
    parameter with no '='.  Absent components are None, except path which
    is always a string.
    """
    scheme, authority, path, query, fragment = _URI_PARTS.match(uri).groups()
    userinfo = host = port = None
    if authority is not None:
        userinfo, at_sign, host = authority.rpartition('@')
        if not at_sign:
            userinfo = None
        # Only a colon after any IPv6 literal's closing bracket
        # introduces the port.
        colon = host.rfind(':')
        if colon > host.rfind(']'):
            host, port = host[:colon], host[colon + 1:]
    if query is not None:
        pairs = []
        for param in query.split('&'):
            name, equals, param_value = param.partition('=')
            pairs.append((name, param_value if equals else None))
        query = pairs
    return scheme, userinfo, host, port, path, query, fragment


def join_uri(scheme, userinfo, host, port, path, query, fragment):
    """
    Reassembles the components produced by split_uri.
    """
    parts = []
    if scheme is not None:
        parts.append('%s:' % scheme)
    if host is not None:
        parts.append('//')
        if userinfo is not None:
            parts.append('%s@' % userinfo)
        parts.append(host)
        if port is not None:
            parts.append(':%s' % port)
    parts.append(path)
    if query is not None:
        parts.append('?')
        parts.append('&'.join([
            name if param_value is None else '%s=%s' % (name, param_value)
            for name, param_value in query]))
    if fragment is not None:
        parts.append('#%s' % fragment)
    return ''.join(parts)


def canonicalize_uri(uri, canonicalize):
    """
    Canonicalizes each component of uri on its own so that decoded
    delimiters cannot change the structure of the URI.

    uri - the URI to canonicalize.
    canonicalize - a function from an encoded string to its canonical form.
        It may raise IntrusionSignal.

    Returns the reassembled URI.
    """
    scheme, userinfo, host, port, path, query, fragment = split_uri(uri)

    def canon(part):
        """Canonicalizes a component that might be absent."""
        if part is None:
            return None
        return canonicalize(part)

    if query is not None:
        query = [(canonicalize(name), canon(param_value))
                 for name, param_value in query]
    return join_uri(
        canon(scheme), canon(userinfo), canon(host), canon(port),
        canonicalize(path), query, canon(fragment))
