"""
# Templex: test_placeholders.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `placeholders.py`.
"""

import unittest

from templex.placeholders import PlaceholderMaster


class TestPlaceholders(unittest.TestCase):
    def test_placeholder_master_choose_marker(self):
        self.assertEqual(PlaceholderMaster.choose_marker(''), '\uF8FF')
        self.assertEqual(PlaceholderMaster.choose_marker('class Klass<T> {}'), '\uF8FF')
        self.assertEqual(PlaceholderMaster.choose_marker('a\uF8FFb'), '\uF8FE')
        self.assertEqual(PlaceholderMaster.choose_marker('\uF8FE\uF8FF\uF8FD'), '\uF8FC')

    def test_placeholder_master_protect(self):
        placeholder_master = PlaceholderMaster('')
        self.assertEqual(placeholder_master.protect(''), '\uF8FF\uF8FF')
        self.assertEqual(placeholder_master.protect('$'), '\uF8FF\uE024\uF8FF')
        self.assertEqual(placeholder_master.protect('\u00A3'), '\uF8FF\uE0C2\uE0A3\uF8FF')
        self.assertEqual(placeholder_master.protect('\u20AC'), '\uF8FF\uE0E2\uE082\uE0AC\uF8FF')
        self.assertEqual(placeholder_master.protect('\uD55C'), '\uF8FF\uE0ED\uE095\uE09C\uF8FF')
        self.assertEqual(placeholder_master.protect('K {'), '\uF8FF\uE04B\uE020\uE07B\uF8FF')

        self.assertEqual(PlaceholderMaster('\uF8FF').protect('$'), '\uF8FE\uE024\uF8FE')

    def test_placeholder_master_unprotect(self):
        placeholder_master = PlaceholderMaster('')
        self.assertEqual(placeholder_master.unprotect('\uF8FF\uF8FF'), '')
        self.assertEqual(placeholder_master.unprotect('\uF8FF\uE024\uF8FF'), '$')
        self.assertEqual(placeholder_master.unprotect('\uF8FF\uE0C2\uE0A3\uF8FF'), '\u00A3')
        self.assertEqual(placeholder_master.unprotect('\uF8FF\uE0E2\uE082\uE0AC\uF8FF'), '\u20AC')
        self.assertEqual(
            placeholder_master.unprotect('class \uF8FF\uE04B\uE020\uE07B\uF8FF x'),
            'class K { x',
        )
        self.assertEqual(placeholder_master.unprotect('\uF8FE\uE024\uF8FE'), '\uF8FE\uE024\uF8FE')

    def test_placeholder_master_unprotect_invalid_bytes(self):
        placeholder_master = PlaceholderMaster('')
        with self.assertWarns(UserWarning):
            self.assertEqual(placeholder_master.unprotect('a\uF8FF\uE0FF\uF8FFb'), 'a\uFFFDb')


if __name__ == '__main__':
    unittest.main()
