"""
Canonicalization of untrusted input and context-specific output encoding.

    from ctxcodec import default_encoder
    enc = default_encoder()
    name = enc.canonicalize(request_param)
    page = '<p>Hello, %s</p>' % enc.encode_for_html(name)
"""

from ctxcodec.audit import AuditSink, LoggingAuditSink
from ctxcodec.audit import start_queued_audit_logging
from ctxcodec.canonicalize import Canonicalizer, MAX_DECODE_PASSES
from ctxcodec.codec import Codec
from ctxcodec.config import EncoderConfig, load_config
from ctxcodec.encoder import Encoder, default_encoder
from ctxcodec.errors import ConfigurationError, EncoderError, EncodingError
from ctxcodec.errors import IntrusionSignal, NotConfiguredError
from ctxcodec.registry import CODEC_FOR_NAME, CODECS
