"""
# Templex: directives.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Removal of directives and import lines from source text.
"""

import re
from typing import Optional

from templex.constants import DEFAULT_SIGIL
from templex.exceptions import DirectiveNotFoundException
from templex.models import DirectiveMarker
from templex.scanning import skip_balanced
from templex.utilities import build_qualified_name_regex, count_newlines


def compute_directive_match(string: str, directive_name: str, sigil: str = DEFAULT_SIGIL) -> Optional[re.Match]:
    return re.search(
        pattern=fr'''
            {re.escape(sigil)} [\s]* {re.escape(directive_name)} [\s]*
            (?P<opening_bracket> [(] )
        ''',
        string=string,
        flags=re.MULTILINE | re.DOTALL | re.VERBOSE,
    )


def remove_directive_match(string: str, directive_match: re.Match) -> str:
    """
    Remove a matched directive together with its bracketed arguments.

    Whitespace is tidied around the removal point:
    - trailing whitespace before it, if two or more characters long, becomes a single blank line
    - leading whitespace after it is removed
    """
    start_index = directive_match.start()
    end_index = skip_balanced(string, '(', ')', directive_match.start('opening_bracket'))

    string_before = re.sub(pattern=r'[\s]{2,} \Z', repl='\n\n', string=string[:start_index], flags=re.VERBOSE)
    string_after = re.sub(pattern=r'\A [\s]*', repl='', string=string[end_index:], flags=re.VERBOSE)

    return string_before + string_after


def strip_directive(string: str, directive_name: str, sigil: str = DEFAULT_SIGIL) -> str:
    """
    Strip the first occurrence of a directive `«sigil»«directive_name»(...)`.
    """
    directive_match = compute_directive_match(string, directive_name, sigil)
    if directive_match is None:
        raise DirectiveNotFoundException(f'directive `{sigil}{directive_name}` not found', directive_name)

    return remove_directive_match(string, directive_match)


def strip_directives(string: str, directive_marker: 'DirectiveMarker', sigil: str = DEFAULT_SIGIL) -> str:
    """
    Strip all occurrences of a (possibly repeated) directive.

    If there are none, this is an error when the marker enforces presence, and a no-op otherwise.
    """
    directive_name = directive_marker.name

    stripped_count = 0
    while True:
        directive_match = compute_directive_match(string, directive_name, sigil)
        if directive_match is None:
            break

        string = remove_directive_match(string, directive_match)
        stripped_count += 1

    if stripped_count == 0 and directive_marker.enforce_presence:
        raise DirectiveNotFoundException(f'directive `{sigil}{directive_name}` not found', directive_name)

    return string


def build_import_regex(qualified_name: str) -> str:
    qualified_name_regex = build_qualified_name_regex(qualified_name)

    return fr'''
        (?P<preceding_blank_lines> (?: ^ [^\S\n]* \n )* )
        ^ [^\S\n]* import [^\S\n]+ {qualified_name_regex} [^\S\n]* [;]? [^\S\n]* (?: \n | \Z )
        (?P<following_blank_lines> (?: [^\S\n]* \n )* )
    '''


def erase_import(string: str, qualified_name: str) -> str:
    """
    Erase the import lines for a qualified name.

    The blank lines before and after an erased line collapse to a single run
    whose length is the greater of the two,
    i.e. there remain `1 + max(before, after)` line breaks after the preceding line.
    If nothing precedes the erased line, its surrounding blank lines are erased too.
    Erasure is best effort: the import may legitimately be absent.
    """
    def substitute_function(import_match: re.Match) -> str:
        if import_match.start() == 0:
            return ''

        preceding_blank_line_count = count_newlines(import_match.group('preceding_blank_lines'))
        following_blank_line_count = count_newlines(import_match.group('following_blank_lines'))

        return '\n' * max(preceding_blank_line_count, following_blank_line_count)

    return re.sub(
        pattern=build_import_regex(qualified_name),
        repl=substitute_function,
        string=string,
        flags=re.MULTILINE | re.VERBOSE,
    )
