"""
# Templex: utilities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common utility functions.
"""

import re
from typing import Optional


def compute_simple_name(qualified_name: str) -> str:
    return qualified_name[qualified_name.rfind('.') + 1:]


def compute_package_name(qualified_name: str) -> str:
    separator_index = qualified_name.rfind('.')
    if separator_index == -1:
        return ''

    return qualified_name[:separator_index]


def qualify_name(package_name: str, simple_name: str) -> str:
    if len(package_name) == 0:
        return simple_name

    return f'{package_name}.{simple_name}'


def capitalise_first_letter(string: str) -> str:
    return string[:1].upper() + string[1:]


def count_newlines(string: Optional[str]) -> int:
    return none_to_empty_string(string).count('\n')


def escape_regex_substitute(substitute: str) -> str:
    return substitute.replace('\\', r'\\')


def build_qualified_name_regex(qualified_name: str) -> str:
    """
    Build a regex for a dotted qualified name that tolerates whitespace around the dots.
    """
    return r'\s*[.]\s*'.join(
        re.escape(segment)
        for segment in qualified_name.split('.')
    )


def build_whole_identifier_regex(identifier: str) -> str:
    """
    Build a regex matching an identifier that is not part of a longer identifier.

    Identifier characters are word characters and `$`,
    so that `T` matches neither in `Then` nor in `T$Inner`.
    """
    return fr'(?<![\w$]){re.escape(identifier)}(?![\w$])'


def none_to_empty_string(string: Optional[str]) -> str:
    if string is None:
        return ''

    return string
