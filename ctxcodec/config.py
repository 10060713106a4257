#!/usr/bin/env python

"""
Encoder configuration.

An EncoderConfig is an immutable value passed to an Encoder.  load_config
builds one from, in decreasing order of precedence, CTXCODEC_* environment
variables, the [encoder] table of a TOML file, and built-in defaults.

Example file:

    [encoder]
    default_codecs = ["HTMLEntityCodec", "PercentCodec", "JavaScriptCodec"]
    allow_multiple_encoding = false
    allow_mixed_encoding = false
    allow_unsafe_methods = []
"""

import logging
import os
import tomllib

from ctxcodec import base64_codec
from ctxcodec import errors
from ctxcodec import registry


logger = logging.getLogger(__name__)

ENV_PREFIX = 'CTXCODEC_'

# Names the dangerous facade methods go by in allow_unsafe_methods.
UNSAFE_METHODS = frozenset(['encode_for_sql', 'encode_for_os'])

_BOOLEAN_TRUE = frozenset(['1', 'true', 'yes', 'on'])
_BOOLEAN_FALSE = frozenset(['0', 'false', 'no', 'off'])

_KEYS = ('default_codecs', 'allow_multiple_encoding', 'allow_mixed_encoding',
         'allow_unsafe_methods')


def _invalid(log_message):
    return errors.ConfigurationError('Invalid configuration', log_message)


class EncoderConfig(object):
    """
    Settings for an Encoder.  Validated on construction.
    """

    __slots__ = ('_default_codecs', '_allow_multiple_encoding',
                 '_allow_mixed_encoding', '_allow_unsafe_methods')

    def __init__(self, default_codecs=registry.DEFAULT_CODEC_NAMES,
                 allow_multiple_encoding=False, allow_mixed_encoding=False,
                 allow_unsafe_methods=()):
        """
        default_codecs - ordered codec names used by canonicalize.
        allow_multiple_encoding - tolerate one scheme applied repeatedly.
        allow_mixed_encoding - tolerate more than one scheme.
        allow_unsafe_methods - names of deprecated facade methods that may
            be called: encode_for_sql, encode_for_os.
        """
        if isinstance(default_codecs, str):
            raise _invalid('default_codecs must be a list of codec names')
        default_codecs = tuple(default_codecs)
        if not default_codecs:
            raise _invalid('default_codecs must not be empty')
        for name in default_codecs:
            if name == base64_codec.NAME:
                raise _invalid(
                    '%s works on whole buffers and cannot canonicalize'
                    % name)
            if name not in registry.CODEC_FOR_NAME:
                raise _invalid('Unknown codec %r; expected one of %s' % (
                    name, ', '.join(sorted(registry.CODEC_FOR_NAME))))
            if default_codecs.count(name) > 1:
                raise _invalid('Duplicate codec %s in default_codecs' % name)
        for key, flag in (('allow_multiple_encoding', allow_multiple_encoding),
                          ('allow_mixed_encoding', allow_mixed_encoding)):
            if not isinstance(flag, bool):
                raise _invalid('%s must be a boolean: %r' % (key, flag))
        if isinstance(allow_unsafe_methods, str):
            raise _invalid('allow_unsafe_methods must be a list of names')
        allow_unsafe_methods = frozenset(allow_unsafe_methods)
        unknown = allow_unsafe_methods - UNSAFE_METHODS
        if unknown:
            raise _invalid('Unknown unsafe methods %s; expected any of %s' % (
                ', '.join(sorted(unknown)), ', '.join(sorted(UNSAFE_METHODS))))
        object.__setattr__(self, '_default_codecs', default_codecs)
        object.__setattr__(
            self, '_allow_multiple_encoding', allow_multiple_encoding)
        object.__setattr__(self, '_allow_mixed_encoding', allow_mixed_encoding)
        object.__setattr__(self, '_allow_unsafe_methods', allow_unsafe_methods)

    def __setattr__(self, name, value):
        raise AttributeError('EncoderConfig is immutable')

    @property
    def default_codecs(self):
        """Codec names, in decoding order."""
        return self._default_codecs

    @property
    def allow_multiple_encoding(self):
        return self._allow_multiple_encoding

    @property
    def allow_mixed_encoding(self):
        return self._allow_mixed_encoding

    @property
    def allow_unsafe_methods(self):
        return self._allow_unsafe_methods

    @property
    def restrict_multiple(self):
        """Default policy for canonicalize: reject repeated encoding."""
        return not self._allow_multiple_encoding

    @property
    def restrict_mixed(self):
        """Default policy for canonicalize: reject mixed encoding."""
        return not self._allow_mixed_encoding

    def codecs(self):
        """The configured Codec singletons, in order."""
        return tuple([registry.CODEC_FOR_NAME[name]
                      for name in self._default_codecs])

    def unsafe_method_allowed(self, method):
        return method in self._allow_unsafe_methods

    def __eq__(self, other):
        if not isinstance(other, EncoderConfig):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash(self._fields())

    def __repr__(self):
        return ('EncoderConfig(default_codecs=%r, allow_multiple_encoding=%r,'
                ' allow_mixed_encoding=%r, allow_unsafe_methods=%r)') % (
                    self._default_codecs, self._allow_multiple_encoding,
                    self._allow_mixed_encoding,
                    tuple(sorted(self._allow_unsafe_methods)))

    def _fields(self):
        return (self._default_codecs, self._allow_multiple_encoding,
                self._allow_mixed_encoding, self._allow_unsafe_methods)


def load_config(path=None, environ=None):
    """
    Builds an EncoderConfig.

    path - a TOML file whose [encoder] table supplies settings.  If None,
        the file named by CTXCODEC_CONFIG is used, if any.  A file that was
        named but is missing is an error.
    environ - the environment to read CTXCODEC_* overrides from.  Defaults
        to os.environ.

    Raises ConfigurationError on any invalid setting.
    """
    if environ is None:
        environ = os.environ
    if path is None:
        path = environ.get(ENV_PREFIX + 'CONFIG') or None
    settings = {}
    if path is not None:
        settings.update(_load_toml(path))
    settings.update(_from_environ(environ))
    logger.debug('Encoder settings from %s and environment: %r',
                 path or 'defaults', settings)
    return EncoderConfig(**settings)


def _load_toml(path):
    """The [encoder] table of the TOML file at path, checked for unknown keys."""
    try:
        with open(path, 'rb') as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise _invalid('Invalid TOML in %s: %s' % (path, exc)) from exc
    except OSError as exc:
        raise _invalid(
            'Unable to read config file %s: %s' % (path, exc)) from exc
    unknown = set(parsed) - set(['encoder'])
    if unknown:
        raise _invalid('Unknown tables in %s: %s' % (
            path, ', '.join(sorted(unknown))))
    table = parsed.get('encoder', {})
    if not isinstance(table, dict):
        raise _invalid('[encoder] in %s must be a table' % path)
    unknown = set(table) - set(_KEYS)
    if unknown:
        raise _invalid('Unknown keys in [encoder] of %s: %s' % (
            path, ', '.join(sorted(unknown))))
    for key in ('default_codecs', 'allow_unsafe_methods'):
        if key in table and not isinstance(table[key], list):
            raise _invalid('%s in %s must be an array' % (key, path))
    return table


def _from_environ(environ):
    """Settings given by CTXCODEC_* variables."""
    settings = {}
    for key in _KEYS:
        env_name = ENV_PREFIX + key.upper()
        raw = environ.get(env_name)
        if raw is None:
            continue
        if key.startswith('allow_') and key != 'allow_unsafe_methods':
            settings[key] = _parse_bool(env_name, raw)
        else:
            settings[key] = _parse_list(raw)
    return settings


def _parse_bool(env_name, raw):
    lowered = raw.strip().lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise _invalid(
        '%s must be a boolean (true/false/1/0/yes/no/on/off): %r'
        % (env_name, raw))


def _parse_list(raw):
    """ 'a, b,,c' -> ['a', 'b', 'c'] """
    return [item.strip() for item in raw.split(',') if item.strip()]
