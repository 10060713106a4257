#!/usr/bin/env python

"""
Base64 (RFC 4648) framing.  Unlike the character codecs this works on a
whole buffer at a time, so it never takes part in canonicalization.
"""

import base64
import re

from ctxcodec import errors


NAME = 'Base64Codec'

# Output characters per line when wrapping.
LINE_LENGTH = 64

_WHITESPACE = re.compile(r'\s+')


def encode(data, wrap=False):
    """
    Encodes data as Base64.

    data - bytes, or a string which is encoded as UTF-8 first.
    wrap - if true, a newline follows every LINE_LENGTH output characters
        except at the very end.
    """
    if isinstance(data, str):
        try:
            data = data.encode('UTF-8')
        except UnicodeEncodeError as exc:
            raise errors.EncodingError(
                'Unable to encode input',
                '%s: input is not encodable as UTF-8: %s' % (NAME, exc),
                codec=NAME) from exc
    encoded = base64.b64encode(bytes(data)).decode('ascii')
    if not wrap:
        return encoded
    return '\n'.join([encoded[i:i + LINE_LENGTH]
                      for i in range(0, len(encoded), LINE_LENGTH)])


def decode(text):
    """
    Decodes Base64 text, ignoring whitespace such as line wrapping.

    Raises EncodingError if the remaining length is not a multiple of four,
    or it contains characters outside the Base64 alphabet, or padding is
    misplaced.
    """
    stripped = _WHITESPACE.sub('', text)
    if len(stripped) % 4:
        raise errors.EncodingError(
            'Invalid Base64 input',
            '%s: length %d is not a multiple of 4' % (NAME, len(stripped)),
            codec=NAME)
    try:
        return base64.b64decode(stripped, validate=True)
    except ValueError as exc:
        # binascii.Error for a bad alphabet or padding, plain ValueError
        # for non-ASCII text.
        raise errors.EncodingError(
            'Invalid Base64 input', '%s: %s' % (NAME, exc),
            codec=NAME) from exc
