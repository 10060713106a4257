#!/usr/bin/env python -O

"""Testcases for module url"""

import unittest

from ctxcodec import errors
from ctxcodec import url
import test_common


class UrlTest(unittest.TestCase):
    """Testcases for module url"""

    def test_encode_url(self):
        """Test percent-encoding on selected codepoints"""
        test_input = test_common.ASCII_AND_SELECTED_CODEPOINTS
        want = (
            "%00%01%02%03%04%05%06%07%08%09%0A%0B%0C%0D%0E%0F"
            "%10%11%12%13%14%15%16%17%18%19%1A%1B%1C%1D%1E%1F"
            "%20%21%22%23%24%25%26%27%28%29%2A%2B%2C-.%2F"
            "0123456789%3A%3B%3C%3D%3E%3F"
            "%40ABCDEFGHIJKLMNO"
            "PQRSTUVWXYZ%5B%5C%5D%5E_"
            "%60abcdefghijklmno"
            "pqrstuvwxyz%7B%7C%7D~%7F"
            "%C2%A0%C4%80%E2%80%A8%E2%80%A9%EF%B7%AC%EF%BB%BF%F0%9D%84%9E")
        got = url.encode_url(test_input)
        self.assertEqual(want, got, 'escaped:\n\t%r\n!=\n\t%r' % (want, got))
        self.assertEqual(test_input, url.PERCENT_CODEC.decode(got))

    def test_encode_url_lone_surrogate(self):
        """A lone surrogate has no UTF-8 form to percent-encode."""
        with self.assertRaises(errors.EncodingError) as caught:
            url.encode_url('a\U0001D11E' + chr(0xdead) + 'b')
        self.assertEqual('PercentCodec', caught.exception.codec)
        self.assertTrue('index 2' in caught.exception.log_message)

    def test_percent_codec_encodes_surrogates(self):
        """The codec itself stays total by encoding surrogates as WTF-8."""
        self.assertEqual(
            '%ED%A0%80', url.PERCENT_CODEC.encode_character(chr(0xd800)))

    def test_decode_invalid_utf8(self):
        """Octets that are not UTF-8 decode to U+FFFD."""
        tests = (
            ('%C3%A9', '\xe9'),
            ('%C3', '\U0000fffd'),
            ('%FF%41', '\U0000fffdA'),
            ('%e2%82%ac', '\U000020ac'),
            )
        for test_input, want in tests:
            self.assertEqual(want, url.PERCENT_CODEC.decode(test_input))

    def test_check_no_stray_percent(self):
        """Only well formed escapes may use '%'."""
        for good in ('', 'abc', '%41', '%2525', 'a%C3%A9b'):
            self.assertEqual(good, url.check_no_stray_percent(good))
        for bad in ('%', '100%', '%2', '%zz', '%41%4'):
            self.assertRaises(
                errors.EncodingError, url.check_no_stray_percent, bad)

    def test_split_uri(self):
        """Test splitting of URIs into components"""
        tests = (
            ('http://host/path',
             ('http', None, 'host', None, '/path', None, None)),
            ('https://user:pw@host:8443/a/b?x=1&y&z=a=b#frag',
             ('https', 'user:pw', 'host', '8443', '/a/b',
              [('x', '1'), ('y', None), ('z', 'a=b')], 'frag')),
            ('http://[::1]:80/',
             ('http', None, '[::1]', '80', '/', None, None)),
            ('http://[::1]/',
             ('http', None, '[::1]', None, '/', None, None)),
            ('mailto:someone@example.com',
             ('mailto', None, None, None, 'someone@example.com', None,
              None)),
            ('/relative?q=',
             (None, None, None, None, '/relative', [('q', '')], None)),
            ('',
             (None, None, None, None, '', None, None)),
            )
        for test_input, want in tests:
            got = url.split_uri(test_input)
            self.assertEqual(want, got, test_input)
            self.assertEqual(test_input, url.join_uri(*got))

    def test_canonicalize_uri(self):
        """Each component is decoded on its own."""
        got = url.canonicalize_uri(
            'http://us%65r@h%6Fst:8%30/%2e%2e?a=%26b&c%3Dd#%23x',
            url.PERCENT_CODEC.decode)
        self.assertEqual('http://user@host:80/..?a=&b&c=d##x', got)


if __name__ == '__main__':
    unittest.main()
