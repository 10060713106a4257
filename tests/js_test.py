#!/usr/bin/python

"""Testcases for module js"""

import unittest

from ctxcodec import js
import test_common


class JsTest(unittest.TestCase):
    """Testcases for module js"""

    def test_escape_js_string(self):
        """Test escaping of JavaScript string literal content"""
        test_input = test_common.ASCII_AND_SELECTED_CODEPOINTS
        want = (
            '\\x00\\x01\\x02\\x03\\x04\\x05\\x06\\x07'
            '\\x08\\x09\\x0A\\x0B\\x0C\\x0D\\x0E\\x0F'
            '\\x10\\x11\\x12\\x13\\x14\\x15\\x16\\x17'
            '\\x18\\x19\\x1A\\x1B\\x1C\\x1D\\x1E\\x1F'
            '\\x20\\x21\\x22\\x23\\x24\\x25\\x26\\x27'
            '\\x28\\x29\\x2A\\x2B\\x2C\\x2D\\x2E\\x2F'
            '0123456789\\x3A\\x3B\\x3C\\x3D\\x3E\\x3F'
            '\\x40ABCDEFGHIJKLMNO'
            'PQRSTUVWXYZ\\x5B\\x5C\\x5D\\x5E\\x5F'
            '\\x60abcdefghijklmno'
            'pqrstuvwxyz\\x7B\\x7C\\x7D\\x7E\\x7F'
            '\\xA0\\u0100\\u2028\\u2029\\uFDEC\\uFEFF\\uD834\\uDD1E')
        got = js.JAVASCRIPT_CODEC.encode(test_input)
        self.assertEqual(want, got, 'escaped:\n\t%r\n!=\n\t%r' % (want, got))
        self.assertEqual(test_input, js.JAVASCRIPT_CODEC.decode(got))

    def test_decode_js_string(self):
        """Test decoding of the escapes a JavaScript parser recognizes"""
        tests = (
            ('', ''),
            ('foo', 'foo'),
            ('\\x3c\\x3C', '<<'),
            ('\\u003c\\u003C', '<<'),
            ('\\b\\f\\n\\r\\t\\v', '\b\f\n\r\t\v'),
            ('\\"\\\'\\\\\\/', '"\'\\/'),
            # Surrogate pairs join.
            ('\\ud834\\udd1e', '\U0001D11E'),
            # Lone surrogates are kept.
            ('\\ud834x', chr(0xd834) + 'x'),
            ('\\udd1e', chr(0xdd1e)),
            # Malformed escapes are left alone.
            ('\\x4', '\\x4'),
            ('\\u12', '\\u12'),
            ('\\q', '\\q'),
            ('\\0', '\\0'),
            ('trailing\\', 'trailing\\'),
            )
        for test_input, want in tests:
            self.assertEqual(
                want, js.JAVASCRIPT_CODEC.decode(test_input), test_input)

    def test_encode_vbscript(self):
        """Runs of safe characters are quoted and the rest use chrw()."""
        tests = (
            ('', ''),
            ('abc', '"abc"'),
            ('a<b', '"a"&chrw(60)&"b"'),
            ('<>', 'chrw(60)&chrw(62)'),
            ('a "b"', '"a "&chrw(34)&"b"&chrw(34)'),
            ('\U0001D11E', 'chrw(119070)'),
            )
        for test_input, want in tests:
            self.assertEqual(
                want, js.encode_vbscript(test_input, frozenset(' ')),
                test_input)


if __name__ == '__main__':
    unittest.main()
