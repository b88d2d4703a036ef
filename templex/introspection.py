"""
# Templex: introspection.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Textual introspection of declared type parameters.
"""

import re

from templex.headers import compute_generic_header_match
from templex.scanning import skip_balanced


def split_top_level(string: str, separator: str = ',') -> list[str]:
    """
    Split a string at separators that are not nested inside angle brackets or parentheses.
    """
    parts = []
    depth = 0
    part_start_index = 0

    for index, character in enumerate(string):
        if character in '<(':
            depth += 1
        elif character in '>)':
            depth -= 1
        elif character == separator and depth == 0:
            parts.append(string[part_start_index:index])
            part_start_index = index + 1

    parts.append(string[part_start_index:])

    return parts


def extract_type_parameter_name(type_parameter_declaration: str) -> str:
    """
    Extract the name from a type-parameter declaration.

    Leading annotations are skipped, and a bound (`extends ...`) is ignored;
    e.g. `@NonNull T extends Comparable<T>` yields `T`.
    """
    name_match = re.match(
        pattern=r'''
            [\s]*
            (?: @ [\s]* [\w$.]+ [\s]* (?: [(] [^)]* [)] )? [\s]* )*
            (?P<name> [^\W\d] [\w$]* | [$] [\w$]* )
        ''',
        string=type_parameter_declaration,
        flags=re.VERBOSE,
    )
    if name_match is None:
        return type_parameter_declaration.strip()

    return name_match.group('name')


def compute_type_parameter_names(string: str, simple_name: str) -> list[str]:
    """
    Compute the type-parameter names of the declaration `«simple_name»<...>`, in declaration order.

    The declaration is located as in `find_generic_header`, i.e. after a declaration keyword.

    If the declaration has no type-parameter list, there are no type parameters.
    """
    header_match = compute_generic_header_match(string, simple_name)
    if header_match is None:
        return []

    opening_index = header_match.start('opening_bracket')
    closing_index = skip_balanced(string, '<', '>', opening_index) - 1
    type_parameters_declaration = string[opening_index + 1:closing_index]

    return [
        extract_type_parameter_name(type_parameter_declaration)
        for type_parameter_declaration in split_top_level(type_parameters_declaration)
        if len(type_parameter_declaration.strip()) > 0
    ]
