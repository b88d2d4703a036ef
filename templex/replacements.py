"""
# Templex: replacements.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Application of replacement rules.
"""

import re
from typing import Iterable, Optional

from templex.diagnostics import Messenger
from templex.exceptions import BadPatternException, PatternNotFoundException
from templex.models import ReplacementRule
from templex.utilities import build_whole_identifier_regex, escape_regex_substitute

REGEX_RULE_FLAGS = re.MULTILINE | re.DOTALL


def build_whole_identifier_rule(identifier: str, substitute: str) -> 'ReplacementRule':
    """
    Build a best-effort rule replacing whole-identifier occurrences of `identifier` by `substitute` verbatim.
    """
    return ReplacementRule(
        pattern=build_whole_identifier_regex(identifier),
        replacement=escape_regex_substitute(substitute),
        is_regex=True,
        enforce_presence=False,
    )


class ReplacementEngine:
    """
    Object applying replacement rules to the text of a generic unit.

    Rules are applied strictly in order, each seeing the result of the previous one.
    Each rule replaces all occurrences of its pattern in a single pass:
    - a literal rule by substring replacement
    - a regex rule by `re.sub` with `flags=re.MULTILINE | re.DOTALL`,
      so that the substitute may refer to groups as `\\1` or `\\g<name>`
    A rule whose pattern is absent is an error if it enforces presence, and a no-op otherwise.
    """
    _source_qualified_name: str
    _messenger: 'Messenger'

    def __init__(self, source_qualified_name: str, messenger: Optional['Messenger'] = None):
        if messenger is None:
            messenger = Messenger()

        self._source_qualified_name = source_qualified_name
        self._messenger = messenger

    def compile_regex_pattern(self, pattern: str) -> re.Pattern:
        try:
            return re.compile(pattern=pattern, flags=REGEX_RULE_FLAGS)
        except re.error as pattern_exception:
            raise BadPatternException(
                f'bad regex pattern `{pattern}` for {self._source_qualified_name}: {pattern_exception}'
            ) from pattern_exception

    def apply_literal(self, string: str, rule: 'ReplacementRule') -> str:
        if rule.pattern in string:
            return string.replace(rule.pattern, rule.replacement)

        if rule.enforce_presence:
            raise PatternNotFoundException(
                f'search term not found in {self._source_qualified_name}: `{rule.pattern}`',
                rule.pattern,
            )

        return string

    def apply_regex(self, string: str, rule: 'ReplacementRule') -> str:
        pattern_compiled = self.compile_regex_pattern(rule.pattern)

        if pattern_compiled.search(string) is not None:
            try:
                return pattern_compiled.sub(repl=rule.replacement, string=string)
            except re.error as substitute_exception:
                raise BadPatternException(
                    f'bad regex substitute `{rule.replacement}` for pattern `{rule.pattern}` '
                    f'in {self._source_qualified_name}: {substitute_exception}'
                ) from substitute_exception

        if rule.enforce_presence:
            raise PatternNotFoundException(
                f'regex search term not found in {self._source_qualified_name}: `{rule.pattern}`',
                rule.pattern,
            )

        return string

    def apply(self, string: str, rule: 'ReplacementRule', label: Optional[str] = None) -> str:
        string_before = string
        if rule.is_regex:
            string_after = self.apply_regex(string, rule)
        else:
            string_after = self.apply_literal(string, rule)

        if label is None:
            label = f'`{rule.pattern}` --> `{rule.replacement}`'
        self._messenger.print_transformation(label, string_before, string_after)

        return string_after

    def apply_all(self, string: str, rules: Iterable['ReplacementRule']) -> str:
        for rule in rules:
            string = self.apply(string, rule)

        return string
