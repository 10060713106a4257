#!/usr/bin/env python

"""
Codecs for operating system command shells: POSIX sh and Windows cmd.exe.
Both escape a character by prefixing it with the shell's escape character.
"""

from ctxcodec import codec


def _escape_with(escape_char):
    """
    Makes an encoder that prefixes every non-alphanumeric character with
    escape_char.
    """
    def encode_char(char):
        """ ';' -> escape_char + ';' """
        if char in codec.ALPHANUMERICS:
            return char
        return escape_char + char
    return encode_char


def _decode_escaped(value, pos):
    """
    The character after the escape character at value[pos].  A trailing
    escape character does not match.
    """
    end = pos + 2
    if end > len(value):
        return None
    return value[pos + 1], end


UNIX_CODEC = codec.Codec('UnixCodec', _escape_with('\\'), _decode_escaped, '\\')

WINDOWS_CODEC = codec.Codec(
    'WindowsCodec', _escape_with('^'), _decode_escaped, '^')
