"""
# Templex: test_replacements.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `replacements.py`.
"""

import io
import unittest

from templex.diagnostics import Messenger
from templex.exceptions import BadPatternException, PatternNotFoundException
from templex.models import ReplacementRule
from templex.replacements import ReplacementEngine, build_whole_identifier_rule


class TestReplacements(unittest.TestCase):
    def setUp(self):
        self.output_stream = io.StringIO()
        self.messenger = Messenger(output_stream=self.output_stream, error_stream=io.StringIO())
        self.replacement_engine = ReplacementEngine('x.y.Klass', self.messenger)

    def test_build_whole_identifier_rule(self):
        self.assertEqual(
            build_whole_identifier_rule('T', 'String'),
            ReplacementRule(r'(?<![\w$])T(?![\w$])', 'String', is_regex=True, enforce_presence=False),
        )
        self.assertEqual(build_whole_identifier_rule('T', 'a\\b').replacement, 'a\\\\b')

    def test_apply_literal(self):
        self.assertEqual(self.replacement_engine.apply('= null; = null', ReplacementRule('= null', '= 0')),
                         '= 0; = 0')
        self.assertEqual(self.replacement_engine.apply('a.b acb', ReplacementRule('a.b', 'x\\1')), 'x\\1 acb')
        self.assertEqual(self.replacement_engine.apply('(T[])', ReplacementRule('(T[])', '')), '')

    def test_apply_regex(self):
        self.assertEqual(
            self.replacement_engine.apply(
                'T1[] array = (T1[]) new Object[42];',
                ReplacementRule(r'\(T1\[\]\) new Object', 'new double', is_regex=True),
            ),
            'T1[] array = new double[42];',
        )
        self.assertEqual(
            self.replacement_engine.apply('x = null;', ReplacementRule(r'(\w+) = null', r'\1 = NaN', is_regex=True)),
            'x = NaN;',
        )
        self.assertEqual(
            self.replacement_engine.apply('a = 1;', ReplacementRule(r'(?P<name>\w+) =', r'final \g<name> =', True)),
            'final a = 1;',
        )
        self.assertEqual(self.replacement_engine.apply('a\nb', ReplacementRule(r'^b', 'B', is_regex=True)), 'a\nB')
        self.assertEqual(self.replacement_engine.apply('a\nb', ReplacementRule(r'a.b', 'X', is_regex=True)), 'X')

    def test_apply_all_is_sequential(self):
        rules = [ReplacementRule('A', 'B'), ReplacementRule('B', 'C')]
        self.assertEqual(self.replacement_engine.apply_all('A', rules), 'C')
        self.assertEqual(self.replacement_engine.apply_all('A', rules), 'C')
        self.assertEqual(self.replacement_engine.apply_all('A', []), 'A')

    def test_whole_identifier_substitution(self):
        self.assertEqual(
            self.replacement_engine.apply(
                'T value; Then then; TValue other; List<T> list;',
                build_whole_identifier_rule('T', 'String'),
            ),
            'String value; Then then; TValue other; List<String> list;',
        )
        self.assertEqual(self.replacement_engine.apply('int x;', build_whole_identifier_rule('T', 'String')),
                         'int x;')

    def test_enforced_pattern_missing(self):
        with self.assertRaises(PatternNotFoundException) as context_manager:
            self.replacement_engine.apply('class Klass {}', ReplacementRule('xyz', 'abc'))
        self.assertEqual(context_manager.exception.pattern, 'xyz')
        self.assertIn('x.y.Klass', str(context_manager.exception))
        self.assertIn('`xyz`', str(context_manager.exception))

        with self.assertRaises(PatternNotFoundException):
            self.replacement_engine.apply('class Klass {}', ReplacementRule(r'x+yz', 'abc', is_regex=True))

    def test_best_effort_pattern_missing(self):
        self.assertEqual(
            self.replacement_engine.apply('class Klass {}', ReplacementRule('xyz', 'abc', enforce_presence=False)),
            'class Klass {}',
        )
        self.assertEqual(
            self.replacement_engine.apply('class Klass {}', ReplacementRule('x+yz', 'abc', True, False)),
            'class Klass {}',
        )

    def test_bad_patterns(self):
        with self.assertRaises(BadPatternException):
            self.replacement_engine.apply('(', ReplacementRule('(', 'x', is_regex=True))
        with self.assertRaises(BadPatternException):
            self.replacement_engine.apply('a', ReplacementRule('a', r'\2', is_regex=True))

    def test_verbose_mode(self):
        messenger = Messenger(verbose_mode_enabled=True, output_stream=self.output_stream)
        replacement_engine = ReplacementEngine('x.y.Klass', messenger)

        replacement_engine.apply('A', ReplacementRule('A', 'B'))
        output = self.output_stream.getvalue()
        self.assertIn(' BEFORE `A` --> `B`\nA\n', output)
        self.assertIn('\nB\n', output)
        self.assertIn(' AFTER `A` --> `B`\n', output)
        self.assertNotIn('(no change)', output)

        replacement_engine.apply('A', ReplacementRule('Z', 'B', enforce_presence=False), label='best effort')
        self.assertIn('(no change)', self.output_stream.getvalue())
        self.assertIn(' AFTER best effort\n', self.output_stream.getvalue())


if __name__ == '__main__':
    unittest.main()
