#!/usr/bin/env python

"""
Codecs for string literals in SQL dialects.

These back the deprecated Encoder.encode_for_sql.  Parameterized queries
are the real defense against SQL injection; escaping is a last resort.
"""

from ctxcodec import codec


_ESCAPE_MAP_FOR_MYSQL = {
    '\x00': '\\0',
    '\x08': '\\b',
    '\x09': '\\t',
    '\x0a': '\\n',
    '\x0d': '\\r',
    '\x1a': '\\Z',
    }

_ESCAPE_MAP_FOR_MYSQL_DECODE = dict(
    [(encoded[1], char) for char, encoded in _ESCAPE_MAP_FOR_MYSQL.items()])


def _encode_mysql_char(char):
    """ "'" -> "\\'", '\\n' -> '\\\\n' """
    if char in codec.ALPHANUMERICS:
        return char
    encoded = _ESCAPE_MAP_FOR_MYSQL.get(char)
    if encoded is not None:
        return encoded
    return '\\' + char


def _decode_mysql_escape(value, pos):
    """ '\\\\n' -> '\\n', "\\'" -> "'" """
    end = pos + 2
    if end > len(value):
        return None
    escaped = value[pos + 1]
    return _ESCAPE_MAP_FOR_MYSQL_DECODE.get(escaped, escaped), end


# MySQL in its default (not ANSI_QUOTES / NO_BACKSLASH_ESCAPES) mode.
MYSQL_CODEC = codec.Codec(
    'MySQLCodec', _encode_mysql_char, _decode_mysql_escape, '\\')


def _encode_oracle_char(char):
    """ "'" -> "''" """
    if char == "'":
        return "''"
    return char


def _decode_oracle_quote(value, pos):
    """ "''" -> "'" """
    if value.startswith("''", pos):
        return "'", pos + 2
    return None


ORACLE_CODEC = codec.Codec(
    'OracleCodec', _encode_oracle_char, _decode_oracle_quote, "'")
