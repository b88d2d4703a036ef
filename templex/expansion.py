"""
# Templex: expansion.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Expansion of a generic unit into concrete units.

Each instantiation specification is taken through the following phases:
- strip directives
- erase known imports
- rewrite the declaration header (protected by a placeholder)
- apply custom replacement rules
- substitute type parameters by their concrete types (whole identifiers)
- rename the source simple name to the target simple name (whole identifiers)
- restore the protected header
- prepend the provenance comment
- emit to the output sink
A failure in any phase aborts that one instantiation only.
"""

import re
from typing import Iterable, Optional, Sequence

from templex.constants import (
    DEFAULT_SIGIL,
    PROVENANCE_COMMENT_FORMAT,
    TYPE_NAME_POSITION_APPEND,
    TYPE_NAME_POSITION_PREPEND,
)
from templex.diagnostics import Messenger
from templex.directives import erase_import, strip_directives
from templex.exceptions import (
    ExpansionException,
    NoInstantiationsException,
    ParameterCountMismatchException,
    TargetNameCollisionException,
)
from templex.headers import rewrite_derived_header, rewrite_generic_header
from templex.introspection import compute_type_parameter_names
from templex.models import (
    DirectiveMarker,
    ExpansionReport,
    GenericUnit,
    InstantiationSpec,
)
from templex.placeholders import PlaceholderMaster
from templex.replacements import ReplacementEngine, build_whole_identifier_rule
from templex.sinks import OutputSink
from templex.sources import SourceReader
from templex.utilities import capitalise_first_letter, compute_package_name, compute_simple_name, qualify_name


def compute_type_name_component(concrete_type_name: str) -> str:
    """
    Compute the component a concrete type name contributes to a target simple name.

    Qualified names are reduced to simple names, `[]` is spelled `Array`,
    and everything else that is not part of an identifier is dropped,
    each identifier having its first letter capitalised.
    For example, `int` yields `Int`, `java.util.Date` yields `Date`,
    `double[]` yields `DoubleArray`, and `java.util.List<java.lang.String>` yields `ListString`.
    """
    array_spelled_type_name = re.sub(
        pattern=r'\[ [\s]* \]',
        repl=' Array ',
        string=concrete_type_name,
        flags=re.VERBOSE,
    )
    qualified_names = re.findall(
        pattern=r'[\w$]+ (?: [\s]* [.] [\s]* [\w$]+ )*',
        string=array_spelled_type_name,
        flags=re.VERBOSE,
    )

    return ''.join(
        capitalise_first_letter(compute_simple_name(re.sub(pattern=r'[\s]', repl='', string=qualified_name)))
        for qualified_name in qualified_names
    )


def compute_target_simple_name(source_simple_name: str, concrete_type_names: Sequence[str],
                               type_name_position: str = TYPE_NAME_POSITION_APPEND) -> str:
    """
    Compute the default target simple name of an instantiation.

    The components of the concrete type names are concatenated in order,
    and then appended to (`APPEND`) or prepended to (`PREPEND`) the source simple name.
    """
    type_names_component = ''.join(
        compute_type_name_component(concrete_type_name)
        for concrete_type_name in concrete_type_names
    )

    if type_name_position == TYPE_NAME_POSITION_APPEND:
        return source_simple_name + type_names_component

    if type_name_position == TYPE_NAME_POSITION_PREPEND:
        return type_names_component + source_simple_name

    raise ValueError(f'error: invalid type name position `{type_name_position}`')


def read_generic_unit(qualified_name: str, source_reader: 'SourceReader',
                      type_parameter_names: Optional[Sequence[str]] = None,
                      directive_markers: Optional[Sequence['DirectiveMarker']] = None,
                      erased_import_names: Sequence[str] = (), sigil: str = DEFAULT_SIGIL) -> 'GenericUnit':
    """
    Read a generic unit from a source reader.

    If `type_parameter_names` is not supplied,
    the type parameters are introspected from the declaration header.
    """
    raw_text = source_reader.read_source(qualified_name)

    if type_parameter_names is None:
        type_parameter_names = compute_type_parameter_names(raw_text, compute_simple_name(qualified_name))

    return GenericUnit(
        qualified_name,
        raw_text,
        type_parameter_names,
        directive_markers=directive_markers,
        erased_import_names=erased_import_names,
        sigil=sigil,
    )


def compute_placeholder_scan_string(generic_unit: 'GenericUnit', instantiation_spec: 'InstantiationSpec') -> str:
    replacement_texts = [
        rule.replacement
        for rule in instantiation_spec.custom_replacements
    ]

    return ''.join([generic_unit.raw_text, *instantiation_spec.type_bindings, *replacement_texts])


def generate_target_source(generic_unit: 'GenericUnit', instantiation_spec: 'InstantiationSpec',
                           messenger: Optional['Messenger'] = None) -> str:
    """
    Generate the text of the concrete unit for an instantiation specification.
    """
    if messenger is None:
        messenger = Messenger()

    source_simple_name = generic_unit.simple_name
    target_simple_name = instantiation_spec.target_simple_name
    replacement_engine = ReplacementEngine(generic_unit.qualified_name, messenger)
    placeholder_master = PlaceholderMaster(compute_placeholder_scan_string(generic_unit, instantiation_spec))

    text = generic_unit.raw_text

    for directive_marker in generic_unit.directive_markers:
        text_before = text
        text = strip_directives(text, directive_marker, generic_unit.sigil)
        messenger.print_transformation(f'directive `{directive_marker.name}`', text_before, text)

    for erased_import_name in generic_unit.erased_import_names:
        text_before = text
        text = erase_import(text, erased_import_name)
        messenger.print_transformation(f'import `{erased_import_name}`', text_before, text)

    text_before = text
    if instantiation_spec.is_derivation:
        text = rewrite_derived_header(text, source_simple_name, target_simple_name, placeholder_master)
    else:
        text = rewrite_generic_header(text, source_simple_name, target_simple_name, placeholder_master)
    messenger.print_transformation(f'header `{source_simple_name}`', text_before, text)

    text = replacement_engine.apply_all(text, instantiation_spec.custom_replacements)

    if not instantiation_spec.is_derivation:
        for type_parameter_name, concrete_type_name in zip(generic_unit.type_parameter_names,
                                                           instantiation_spec.type_bindings):
            text = replacement_engine.apply(
                text,
                build_whole_identifier_rule(type_parameter_name, concrete_type_name),
                label=f'type parameter `{type_parameter_name}` --> `{concrete_type_name}`',
            )

    text = replacement_engine.apply(
        text,
        build_whole_identifier_rule(source_simple_name, target_simple_name),
        label=f'rename `{source_simple_name}` --> `{target_simple_name}`',
    )

    text = placeholder_master.unprotect(text)
    provenance_comment = PROVENANCE_COMMENT_FORMAT.format(source_qualified_name=generic_unit.qualified_name)

    return f'{provenance_comment}\n{text}'


def validate_instantiation_spec(generic_unit: 'GenericUnit', instantiation_spec: 'InstantiationSpec',
                                claimed_target_simple_names: set[str]):
    target_simple_name = instantiation_spec.target_simple_name
    binding_count = len(instantiation_spec.type_bindings)

    if instantiation_spec.is_derivation:
        if binding_count != 0:
            raise ParameterCountMismatchException(
                f'derivation `{target_simple_name}` takes no type bindings (got {binding_count})'
            )
    else:
        parameter_count = len(generic_unit.type_parameter_names)
        if binding_count != parameter_count:
            raise ParameterCountMismatchException(
                f'{binding_count} type binding(s) supplied for {parameter_count} type parameter(s) '
                f'{list(generic_unit.type_parameter_names)}'
            )

    if target_simple_name == generic_unit.simple_name:
        raise TargetNameCollisionException(f'target name `{target_simple_name}` equals the source name')

    if target_simple_name in claimed_target_simple_names:
        raise TargetNameCollisionException(f'target name `{target_simple_name}` already used in this batch')


def expand_generic_unit(generic_unit: 'GenericUnit', instantiation_specs: Iterable['InstantiationSpec'],
                        output_sink: 'OutputSink', messenger: Optional['Messenger'] = None) -> 'ExpansionReport':
    """
    Expand a generic unit into one concrete unit per instantiation specification.

    The specifications are processed in order, each in isolation:
    a failure is reported as an error naming the source, the target, and the reason,
    and recorded in the returned report, whereafter processing continues.
    An empty batch is a configuration error.
    """
    if messenger is None:
        messenger = Messenger()

    instantiation_specs = list(instantiation_specs)
    if len(instantiation_specs) == 0:
        raise NoInstantiationsException(f'no instantiations supplied for `{generic_unit.qualified_name}`')

    expansion_report = ExpansionReport(generic_unit.qualified_name)
    claimed_target_simple_names = set()

    for instantiation_spec in instantiation_specs:
        target_qualified_name = generic_unit.qualify(instantiation_spec.target_simple_name)

        try:
            validate_instantiation_spec(generic_unit, instantiation_spec, claimed_target_simple_names)
            target_source = generate_target_source(generic_unit, instantiation_spec, messenger)
            output_sink.emit(target_qualified_name, target_source)
        except ExpansionException as expansion_exception:
            messenger.print_error(
                f'cannot expand `{generic_unit.qualified_name}` to `{target_qualified_name}`: {expansion_exception}'
            )
            expansion_report.record_failure(target_qualified_name, expansion_exception)
            continue
        finally:
            claimed_target_simple_names.add(instantiation_spec.target_simple_name)

        messenger.print_note(f'generated `{target_qualified_name}` from `{generic_unit.qualified_name}`')
        expansion_report.record_emission(target_qualified_name)

    return expansion_report


def fail_all_instantiations(source_qualified_name: str, instantiation_specs: Iterable['InstantiationSpec'],
                            exception: 'ExpansionException',
                            messenger: Optional['Messenger'] = None) -> 'ExpansionReport':
    """
    Report every instantiation of a generic unit as failed, for when the unit itself cannot be read.
    """
    if messenger is None:
        messenger = Messenger()

    expansion_report = ExpansionReport(source_qualified_name)
    for instantiation_spec in instantiation_specs:
        target_qualified_name = qualify_name(
            compute_package_name(source_qualified_name),
            instantiation_spec.target_simple_name,
        )
        messenger.print_error(f'cannot expand `{source_qualified_name}` to `{target_qualified_name}`: {exception}')
        expansion_report.record_failure(target_qualified_name, exception)

    return expansion_report
