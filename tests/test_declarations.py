"""
# Templex: test_declarations.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `declarations.py`.
"""

import unittest

from templex.declarations import DerivationDeclaration, InstantiationDeclaration, TemplateDeclaration
from templex.exceptions import CommittedMutateException, MissingAttributeException
from templex.models import DirectiveMarker, InstantiationSpec, ReplacementRule


class TestDeclarations(unittest.TestCase):
    def test_template_declaration(self):
        template_declaration = TemplateDeclaration('x.y.Klass')
        self.assertEqual(template_declaration.qualified_name, 'x.y.Klass')
        self.assertEqual(template_declaration.simple_name, 'Klass')
        self.assertIsNone(template_declaration.type_parameter_names)
        self.assertEqual(template_declaration.type_name_position, 'APPEND')
        self.assertIsNone(template_declaration.directive_markers)
        self.assertEqual(template_declaration.erased_import_names, [])
        self.assertEqual(template_declaration.sigil, '@')

        directive_markers = [DirectiveMarker('Template'), DirectiveMarker('Derive', False)]
        template_declaration.directive_markers = directive_markers
        directive_markers.append(DirectiveMarker('Other'))
        self.assertEqual(len(template_declaration.directive_markers), 2)

        template_declaration.commit()
        self.assertTrue(template_declaration.is_committed)
        with self.assertRaises(CommittedMutateException):
            template_declaration.sigil = '#'
        with self.assertRaises(CommittedMutateException):
            template_declaration.type_parameter_names = ['T']

    def test_instantiation_declaration(self):
        template_declaration = TemplateDeclaration('x.y.Klass')
        template_declaration.type_name_position = 'PREPEND'

        instantiation_declaration = InstantiationDeclaration('double-date')
        with self.assertRaises(MissingAttributeException) as context_manager:
            instantiation_declaration.commit()
        self.assertEqual(context_manager.exception.missing_attribute, 'types')

        instantiation_declaration.concrete_type_names = ['double', 'java.util.Date']
        instantiation_declaration.add_replacement_rule(ReplacementRule('= null', '= 0'))
        instantiation_declaration.commit()

        with self.assertRaises(CommittedMutateException):
            instantiation_declaration.add_replacement_rule(ReplacementRule('a', 'b'))
        with self.assertRaises(CommittedMutateException):
            instantiation_declaration.target_simple_name = 'Other'

        self.assertEqual(
            instantiation_declaration.build_instantiation_spec(template_declaration),
            InstantiationSpec('DoubleDateKlass', ('double', 'java.util.Date'), (ReplacementRule('= null', '= 0'),)),
        )

    def test_instantiation_declaration_explicit_name(self):
        instantiation_declaration = InstantiationDeclaration('int')
        instantiation_declaration.concrete_type_names = ['int']
        instantiation_declaration.target_simple_name = 'IntKlass'
        instantiation_declaration.commit()

        self.assertEqual(
            instantiation_declaration.build_instantiation_spec(TemplateDeclaration('x.y.Klass')),
            InstantiationSpec('IntKlass', ('int',)),
        )

    def test_derivation_declaration(self):
        derivation_declaration = DerivationDeclaration('copy')
        with self.assertRaises(MissingAttributeException) as context_manager:
            derivation_declaration.commit()
        self.assertEqual(context_manager.exception.missing_attribute, 'name')

        derivation_declaration.target_simple_name = 'KlassCopy'
        derivation_declaration.add_replacement_rule(ReplacementRule('{}', '{ init(); }'))
        derivation_declaration.commit()

        self.assertEqual(
            derivation_declaration.build_instantiation_spec(TemplateDeclaration('x.y.Klass')),
            InstantiationSpec(
                'KlassCopy',
                custom_replacements=(ReplacementRule('{}', '{ init(); }'),),
                is_derivation=True,
            ),
        )


if __name__ == '__main__':
    unittest.main()
