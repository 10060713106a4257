#!/usr/bin/env python

"""
The closed set of character codecs, by stable name.
"""

from ctxcodec import css
from ctxcodec import html
from ctxcodec import js
from ctxcodec import json_codec
from ctxcodec import ldap
from ctxcodec import shell
from ctxcodec import sql
from ctxcodec import url
from ctxcodec import xml


CODECS = (
    html.HTML_ENTITY_CODEC,
    url.PERCENT_CODEC,
    js.JAVASCRIPT_CODEC,
    js.VBSCRIPT_CODEC,
    css.CSS_CODEC,
    ldap.LDAP_FILTER_CODEC,
    ldap.LDAP_DN_CODEC,
    xml.XML_CODEC,
    xml.XML_ATTRIBUTE_CODEC,
    xml.XPATH_CODEC,
    json_codec.JSON_CODEC,
    shell.UNIX_CODEC,
    shell.WINDOWS_CODEC,
    sql.MYSQL_CODEC,
    sql.ORACLE_CODEC,
    )

CODEC_FOR_NAME = dict([(c.name, c) for c in CODECS])

# The order matters: it decides which scheme gets the first chance to
# decode at each pass.
DEFAULT_CODEC_NAMES = ('HTMLEntityCodec', 'PercentCodec', 'JavaScriptCodec')
