"""
# Templex: headers.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Location and rewriting of declaration headers.

A header is rewritten in two phases.
First, the header is replaced by a placeholder protecting the target header,
so that the replacement phases to follow cannot alter it.
Last, after all other replacement phases, the placeholder is restored to the target header
(see `PlaceholderMaster.unprotect`).
"""

import re
from typing import NamedTuple, Optional

from templex.constants import DECLARATION_KEYWORDS
from templex.exceptions import DeclarationNotFoundException
from templex.placeholders import PlaceholderMaster
from templex.scanning import skip_balanced
from templex.utilities import build_whole_identifier_regex

OPENING_SYNTAX_PATTERN_COMPILED = re.compile(pattern=r'[\s]* (?P<opening_syntax> [({] )?', flags=re.VERBOSE)


class DeclarationHeader(NamedTuple):
    """
    The span of a declaration header, from the declared name up to
    (and including) the bracket opening the body or record components, if any.
    """
    start_index: int
    end_index: int
    opening_syntax: str


def build_declaration_keywords_regex() -> str:
    return '|'.join(re.escape(keyword) for keyword in DECLARATION_KEYWORDS)


def compute_generic_header_match(string: str, simple_name: str) -> Optional[re.Match]:
    return re.search(
        pattern=fr'''
            (?<! [\w$] ) (?: {build_declaration_keywords_regex()} ) [\s]+
            (?P<declared_name> {build_whole_identifier_regex(simple_name)} ) [\s]*
            (?P<opening_bracket> [<] )
        ''',
        string=string,
        flags=re.VERBOSE,
    )


def find_generic_header(string: str, simple_name: str) -> 'DeclarationHeader':
    """
    Find the header `«simple_name»<...>` of a generic declaration.

    The header is anchored on a declaration keyword (`class`, `interface`, `enum`, `record`),
    so that mentions of `«simple_name»<...>` elsewhere (e.g. in documentation comments) are skipped.

    The header extends over the (balanced) type-parameter list,
    any whitespace following it, and the bracket `(` of a record or `{` of a body should one follow.
    """
    header_match = compute_generic_header_match(string, simple_name)
    if header_match is None:
        raise DeclarationNotFoundException(f'generic declaration `{simple_name}<...>` not found')

    type_parameters_end_index = skip_balanced(string, '<', '>', header_match.start('opening_bracket'))
    opening_syntax_match = OPENING_SYNTAX_PATTERN_COMPILED.match(string, type_parameters_end_index)
    opening_syntax = opening_syntax_match.group('opening_syntax')
    if opening_syntax is None:
        opening_syntax = ''

    return DeclarationHeader(header_match.start('declared_name'), opening_syntax_match.end(), opening_syntax)


def build_target_header(target_simple_name: str, opening_syntax: str) -> str:
    if opening_syntax == '(':
        return f'{target_simple_name}('

    if opening_syntax == '{':
        return f'{target_simple_name} {{'

    return f'{target_simple_name} '


def rewrite_generic_header(string: str, source_simple_name: str, target_simple_name: str,
                           placeholder_master: 'PlaceholderMaster') -> str:
    """
    Replace the header of a generic declaration, type-parameter list included, by a protected target header.

    The type-parameter list is discarded, since a concrete instantiation has no type parameters.
    For example, `Klass<T extends Number>   {` becomes (the placeholder of) `KlassInt {`,
    and `Pair<A, B>(` becomes (the placeholder of) `PairIntInt(`.
    """
    header = find_generic_header(string, source_simple_name)
    target_header = build_target_header(target_simple_name, header.opening_syntax)

    return string[:header.start_index] + placeholder_master.protect(target_header) + string[header.end_index:]


def compute_declared_name_match(string: str, simple_name: str) -> Optional[re.Match]:
    return re.search(
        pattern=fr'''
            (?<! [\w$] ) (?: {build_declaration_keywords_regex()} ) [\s]+
            (?P<declared_name> {build_whole_identifier_regex(simple_name)} )
        ''',
        string=string,
        flags=re.VERBOSE,
    )


def rewrite_derived_header(string: str, source_simple_name: str, target_simple_name: str,
                           placeholder_master: 'PlaceholderMaster') -> str:
    """
    Replace the declared name of a `class`/`interface`/`enum`/`record` by a protected target name.

    Whatever follows the name (type-parameter list included) is kept.
    """
    declared_name_match = compute_declared_name_match(string, source_simple_name)
    if declared_name_match is None:
        raise DeclarationNotFoundException(f'declaration of `{source_simple_name}` not found')

    start_index = declared_name_match.start('declared_name')
    end_index = declared_name_match.end('declared_name')

    return string[:start_index] + placeholder_master.protect(target_simple_name) + string[end_index:]
