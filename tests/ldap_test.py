#!/usr/bin/python

"""Testcases for module ldap"""

import unittest

from ctxcodec import ldap
import test_common


class LdapTest(unittest.TestCase):
    """Testcases for module ldap"""

    def test_encode_filter(self):
        """Test RFC 4515 escaping of filter assertion values"""
        tests = (
            ('', ''),
            ('jsmith', 'jsmith'),
            ('a*b', 'a\\2ab'),
            ('*)(uid=*))(|(uid=*', '\\2a\\29\\28uid=\\2a\\29\\29\\28|\\28uid=\\2a'),
            ('a\\b', 'a\\5cb'),
            ('a/b', 'a\\2fb'),
            ('\x00', '\\00'),
            ('\xe9', '\\c3\\a9'),
            (' #,+"<>;', ' #,+"<>;'),
            )
        for test_input, want in tests:
            self.assertEqual(want, ldap.encode_filter(test_input), test_input)

    def test_encode_filter_wildcards(self):
        """Wildcards may be left in for substring matches."""
        self.assertEqual('a*b', ldap.encode_filter('a*b', False))
        self.assertEqual('a\\2ab', ldap.encode_filter('a*b', True))
        self.assertEqual('j*\\28', ldap.encode_filter('j*(', False))

    def test_encode_dn(self):
        """Test RFC 4514 escaping of attribute values"""
        tests = (
            ('', ''),
            ('admin', 'admin'),
            (' admin ', '\\20admin\\20'),
            ('#admin', '\\23admin'),
            ('a#b c', 'a#b c'),
            (' ', '\\20'),
            ('Smith, John', 'Smith\\2c John'),
            ('a+b=c;d', 'a\\2bb=c\\3bd'),
            ('<"\\>', '\\3c\\22\\5c\\3e'),
            ('a/b', 'a\\2fb'),
            ('\xe9', '\\c3\\a9'),
            )
        for test_input, want in tests:
            self.assertEqual(want, ldap.encode_dn(test_input), test_input)

    def test_allow_lists(self):
        """Every sampled code point outside the allow-lists is escaped."""
        for char in test_common.sampled_chars():
            cp = ord(char)
            filter_safe = cp != 0x2f and (
                0x01 <= cp <= 0x27 or 0x2b <= cp <= 0x5b or 0x5d <= cp <= 0x7f)
            dn_safe = cp != 0x2f and (
                0x01 <= cp <= 0x21 or 0x23 <= cp <= 0x2a
                or 0x2d <= cp <= 0x3a or cp == 0x3d
                or 0x3f <= cp <= 0x5b or 0x5d <= cp <= 0x7f)
            self.assertEqual(
                filter_safe,
                ldap.LDAP_FILTER_CODEC.encode_character(char) == char,
                hex(cp))
            self.assertEqual(
                dn_safe,
                ldap.LDAP_DN_CODEC.encode_character(char) == char,
                hex(cp))

    def test_decode(self):
        """Runs of escaped octets decode as UTF-8."""
        tests = (
            ('\\2a', '*'),
            ('\\c3\\a9', '\xe9'),
            ('\\C3\\A9', '\xe9'),
            ('\\c3x', '\U0000fffdx'),
            ('\\2', '\\2'),
            ('\\zz', '\\zz'),
            )
        for test_input, want in tests:
            self.assertEqual(
                want, ldap.LDAP_FILTER_CODEC.decode(test_input), test_input)


if __name__ == '__main__':
    unittest.main()
