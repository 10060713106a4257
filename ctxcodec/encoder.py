#!/usr/bin/env python

"""
The context encoder: one method per downstream interpreter.

Each encode_for_* method escapes untrusted text so that it is interpreted
as plain data in one specific context.  Picking the method that matches
the context the text lands in is the caller's job; HTML body escaping
does not make text safe inside a <script> block.
"""

import functools

from ctxcodec import base64_codec
from ctxcodec import canonicalize as _canonicalize
from ctxcodec import codec
from ctxcodec import config as _config
from ctxcodec import css
from ctxcodec import errors
from ctxcodec import html
from ctxcodec import js
from ctxcodec import json_codec
from ctxcodec import ldap
from ctxcodec import registry
from ctxcodec import url
from ctxcodec import xml


# Characters passed through unescaped, beyond each codec's own safe set.
IMMUNE_HTML = frozenset(',.-_ ')
IMMUNE_HTML_ATTRIBUTE = frozenset(',.-_')
IMMUNE_CSS = frozenset()
IMMUNE_JAVASCRIPT = frozenset(',._')
IMMUNE_VBSCRIPT = frozenset(',._ ')
IMMUNE_XML = frozenset(',.-_ ')
IMMUNE_XML_ATTRIBUTE = frozenset(',.-_')
IMMUNE_XPATH = frozenset(',.-_ ')
IMMUNE_OS = frozenset('-')
IMMUNE_SQL = frozenset(' ')


def _text(value):
    """Coerces non-string input so that encoders stay total."""
    if isinstance(value, str):
        return value
    return str(value)


class Encoder(object):
    """
    Canonicalizes untrusted input and encodes output for a target context.

    Instances are immutable and may be shared between threads.
    """

    def __init__(self, config=None, codecs=None, audit=None):
        """
        config - an EncoderConfig.  Defaults to the built-in settings, not
            to load_config(); use default_encoder() for that.
        codecs - overrides config.default_codecs: a sequence of codec names
            or Codec instances, in decoding order.
        audit - the AuditSink that canonicalize reports to.
        """
        if config is None:
            config = _config.EncoderConfig()
        if codecs is None:
            codecs = config.codecs()
        else:
            codecs = tuple([_resolve_codec(c) for c in codecs])
        self.config = config
        self.canonicalizer = _canonicalize.Canonicalizer(codecs, audit)

    @property
    def codecs(self):
        """The codecs canonicalize decodes with, in order."""
        return self.canonicalizer.codecs

    def canonicalize(self, value, restrict_multiple=None, restrict_mixed=None):
        """
        Reduces value to its canonical decoded form.

        canonicalize(value) applies the configured policy,
        canonicalize(value, strict) applies strict to both conditions, and
        canonicalize(value, restrict_multiple, restrict_mixed) applies each
        flag to its condition.

        Raises IntrusionSignal if a restricted condition is found.
        """
        if restrict_multiple is None:
            restrict_multiple = self.config.restrict_multiple
            if restrict_mixed is None:
                restrict_mixed = self.config.restrict_mixed
        elif restrict_mixed is None:
            restrict_mixed = restrict_multiple
        return self.canonicalizer.canonicalize(
            value, restrict_multiple, restrict_mixed)

    def encode_for_html(self, value):
        """
        Encodes value for an HTML text node.

        '<b>' -> '&lt;b&gt;'
        """
        if value is None:
            return None
        return html.HTML_ENTITY_CODEC.encode(_text(value), IMMUNE_HTML)

    def encode_for_html_attribute(self, value):
        """
        Encodes value for a quoted or unquoted HTML attribute value.
        Unlike encode_for_html, spaces are escaped.
        """
        if value is None:
            return None
        return html.HTML_ENTITY_CODEC.encode(
            _text(value), IMMUNE_HTML_ATTRIBUTE)

    def decode_for_html(self, value):
        """
        Decodes the character references in value once.

        '&lt;b&gt;' -> '<b>'
        """
        if value is None:
            return None
        return html.unescape_html(_text(value))

    def encode_for_css(self, value):
        """Encodes value for a CSS property value or quoted string."""
        if value is None:
            return None
        return css.CSS_CODEC.encode(_text(value), IMMUNE_CSS)

    def encode_for_javascript(self, value):
        """
        Encodes value for a quoted JavaScript string literal, including
        one inside an HTML event handler attribute.
        """
        if value is None:
            return None
        return js.JAVASCRIPT_CODEC.encode(_text(value), IMMUNE_JAVASCRIPT)

    def encode_for_vbscript(self, value):
        """
        Encodes value as a VBScript string expression.

        'a<b' -> '"a"&chrw(60)&"b"'
        """
        if value is None:
            return None
        return js.encode_vbscript(_text(value), IMMUNE_VBSCRIPT)

    def encode_for_xml(self, value):
        if value is None:
            return None
        return xml.XML_CODEC.encode(_text(value), IMMUNE_XML)

    def encode_for_xml_attribute(self, value):
        if value is None:
            return None
        return xml.XML_ATTRIBUTE_CODEC.encode(
            _text(value), IMMUNE_XML_ATTRIBUTE)

    def encode_for_xpath(self, value):
        """Encodes value for a string literal in an XPath expression."""
        if value is None:
            return None
        return xml.XPATH_CODEC.encode(_text(value), IMMUNE_XPATH)

    def encode_for_json(self, value):
        """
        Encodes value for the inside of a JSON string literal.  The
        surrounding quotes are not added.
        """
        if value is None:
            return None
        return json_codec.JSON_CODEC.encode(_text(value))

    def decode_from_json(self, value):
        """Decodes the escapes in the inside of a JSON string literal once."""
        if value is None:
            return None
        return json_codec.JSON_CODEC.decode(_text(value))

    def encode_for_ldap(self, value, encode_wildcards=True):
        """
        Encodes value for an assertion value in an LDAP search filter.

        encode_wildcards - if False, '*' is left alone for substring
            matches.
        """
        if value is None:
            return None
        return ldap.encode_filter(_text(value), encode_wildcards)

    def encode_for_dn(self, value):
        """Encodes value for an attribute value in an LDAP DN."""
        if value is None:
            return None
        return ldap.encode_dn(_text(value))

    def encode_for_url(self, value):
        """
        Percent-encodes value for a URL path segment or query component.

        Raises EncodingError if value has no UTF-8 form.
        """
        if value is None:
            return None
        return url.encode_url(_text(value))

    def decode_from_url(self, value):
        """
        Canonicalizes a URL-encoded value under the configured policy.
        '+' is not treated as a space.

        Raises EncodingError if the value is multiply or mixed encoded
        contrary to policy, or holds a malformed percent escape.
        """
        if value is None:
            return None
        value = url.check_no_stray_percent(_text(value))
        try:
            return self.canonicalize(value)
        except errors.IntrusionSignal as exc:
            raise errors.EncodingError(
                'Invalid URL encoding', exc.log_message,
                codec=url.PERCENT_CODEC.name) from exc

    def encode_for_base64(self, data, wrap=False):
        """
        Base64 encodes data, a byte string or a string taken as UTF-8.

        wrap - break the output into lines of 64 characters.
        """
        if data is None:
            return None
        return base64_codec.encode(data, wrap)

    def decode_from_base64(self, text):
        """
        Decodes Base64 text to bytes.

        Raises EncodingError if text is not valid Base64.
        """
        if text is None:
            return None
        return base64_codec.decode(_text(text))

    def get_canonicalized_uri(self, uri):
        """
        Canonicalizes each component of uri separately under the
        configured policy and reassembles them.

        'http://host/%2e%2e?a=%26b' -> 'http://host/..?a=&b'

        Raises IntrusionSignal if any component is multiply or mixed
        encoded contrary to policy.
        """
        if uri is None:
            return None
        return url.canonicalize_uri(_text(uri), self.canonicalize)

    def encode_for_sql(self, sql_codec, value):
        """
        Deprecated: use parameterized queries.

        Escapes value for a string literal of the dialect sql_codec targets.
        Raises NotConfiguredError unless allow_unsafe_methods names this
        method.
        """
        return self._encode_unsafe('encode_for_sql', sql_codec, value,
                                   IMMUNE_SQL)

    def encode_for_os(self, os_codec, value):
        """
        Deprecated: pass arguments without a shell instead.

        Escapes value as a single argument for the shell os_codec targets.
        Raises NotConfiguredError unless allow_unsafe_methods names this
        method.
        """
        return self._encode_unsafe('encode_for_os', os_codec, value, IMMUNE_OS)

    def _encode_unsafe(self, method, a_codec, value, immune):
        if not self.config.unsafe_method_allowed(method):
            raise errors.NotConfiguredError(method)
        if not isinstance(a_codec, codec.Codec):
            raise errors.EncodingError(
                'Invalid codec', '%s needs a Codec, got %r' % (method, a_codec))
        if value is None:
            return None
        return a_codec.encode(_text(value), immune)


def _resolve_codec(name_or_codec):
    """A Codec given either itself or its registered name."""
    if isinstance(name_or_codec, codec.Codec):
        return name_or_codec
    try:
        return registry.CODEC_FOR_NAME[name_or_codec]
    except (KeyError, TypeError) as exc:
        raise errors.ConfigurationError(
            'Invalid configuration',
            'Unknown codec %r' % (name_or_codec,)) from exc


@functools.lru_cache(maxsize=None)
def default_encoder():
    """
    The process-wide Encoder, configured by load_config() on first use.
    """
    return Encoder(_config.load_config())
