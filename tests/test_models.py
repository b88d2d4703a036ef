"""
# Templex: test_models.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `models.py`.
"""

import unittest

from templex.exceptions import ParameterCountMismatchException
from templex.models import DirectiveMarker, ExpansionFailure, ExpansionReport, GenericUnit, InstantiationSpec
from templex.models import ReplacementRule


class TestModels(unittest.TestCase):
    def test_replacement_rule(self):
        self.assertEqual(ReplacementRule('a', 'b'), ReplacementRule('a', 'b', is_regex=False, enforce_presence=True))

    def test_instantiation_spec(self):
        instantiation_spec = InstantiationSpec('KlassInt', ('int',))
        self.assertEqual(instantiation_spec.custom_replacements, ())
        self.assertFalse(instantiation_spec.is_derivation)

    def test_generic_unit(self):
        generic_unit = GenericUnit('x.y.Klass', 'class Klass<T> {}', ['T'])
        self.assertEqual(generic_unit.qualified_name, 'x.y.Klass')
        self.assertEqual(generic_unit.simple_name, 'Klass')
        self.assertEqual(generic_unit.package_name, 'x.y')
        self.assertEqual(generic_unit.raw_text, 'class Klass<T> {}')
        self.assertEqual(generic_unit.type_parameter_names, ('T',))
        self.assertEqual(generic_unit.directive_markers, (DirectiveMarker('Template', enforce_presence=True),))
        self.assertEqual(generic_unit.erased_import_names, ())
        self.assertEqual(generic_unit.sigil, '@')
        self.assertEqual(generic_unit.qualify('KlassInt'), 'x.y.KlassInt')

    def test_generic_unit_default_package(self):
        generic_unit = GenericUnit('Klass', '', (), directive_markers=[], erased_import_names=['a.B'], sigil='#')
        self.assertEqual(generic_unit.package_name, '')
        self.assertEqual(generic_unit.qualify('KlassInt'), 'KlassInt')
        self.assertEqual(generic_unit.directive_markers, ())
        self.assertEqual(generic_unit.erased_import_names, ('a.B',))
        self.assertEqual(generic_unit.sigil, '#')

    def test_expansion_report(self):
        expansion_report = ExpansionReport('x.y.Klass')
        self.assertTrue(expansion_report.is_successful)

        expansion_report.record_emission('x.y.KlassInt')
        self.assertTrue(expansion_report.is_successful)

        exception = ParameterCountMismatchException('2 type binding(s) supplied for 1 type parameter(s)')
        expansion_report.record_failure('x.y.KlassIntInt', exception)
        self.assertFalse(expansion_report.is_successful)
        self.assertEqual(expansion_report.emitted_target_names, ['x.y.KlassInt'])
        self.assertEqual(expansion_report.failures, [ExpansionFailure('x.y.Klass', 'x.y.KlassIntInt', exception)])


if __name__ == '__main__':
    unittest.main()
