"""
# Templex: authorities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

The higher power that governs the expansion of templates.
"""

import re
import sys
from typing import Iterable, NamedTuple, Optional

from templex.constants import (
    GENERIC_ERROR_EXIT_CODE,
    TEMPLEX_RULES_SYNTAX_HELP,
    TYPE_NAME_POSITION_APPEND,
    TYPE_NAME_POSITION_PREPEND,
)
from templex.declarations import (
    Declaration,
    DeclarationWithSubstitutions,
    DerivationDeclaration,
    InstantiationDeclaration,
    TemplateDeclaration,
)
from templex.diagnostics import Messenger
from templex.exceptions import MissingAttributeException, SourceNotFoundException
from templex.expansion import expand_generic_unit, fail_all_instantiations, read_generic_unit
from templex.models import DirectiveMarker, ExpansionReport, ReplacementRule
from templex.replacements import REGEX_RULE_FLAGS
from templex.sinks import OutputSink
from templex.sources import SourceReader
from templex.utilities import none_to_empty_string


class TemplateAuthority:
    """
    Object governing the parsing of Templex rules and the expansion of the templates they declare.

    ## `legislate`

    Parses Templex rules syntax.
    See the constant `TEMPLEX_RULES_SYNTAX_HELP` in `constants.py`.

    Terminology:
    - Class declarations are _committed_.
    - Attribute and substitution declarations are _staged_.

    ## `execute`

    Expands the legislated templates.
    """
    _rules_file_name: str
    _template_declarations: list['TemplateDeclaration']
    _subordinate_declarations_from_template_name: dict[str, list['DeclarationWithSubstitutions']]
    _line_number_from_template_name: dict[str, int]
    _subordinate_declaration_ids: set[str]
    _messenger: 'Messenger'

    def __init__(self, rules_file_name: str, verbose_mode_enabled: bool = False,
                 messenger: Optional['Messenger'] = None):
        if messenger is None:
            messenger = Messenger(verbose_mode_enabled)

        self._rules_file_name = rules_file_name
        self._template_declarations = []
        self._subordinate_declarations_from_template_name = {}
        self._line_number_from_template_name = {}
        self._subordinate_declaration_ids = set()
        self._messenger = messenger

    @property
    def template_declarations(self) -> list['TemplateDeclaration']:
        return self._template_declarations

    def get_subordinate_declarations(self, qualified_name: str) -> list['DeclarationWithSubstitutions']:
        return self._subordinate_declarations_from_template_name[qualified_name]

    def print_error(self, message: str, rules_file_name: str, start_line_number: int,
                    end_line_number: Optional[int] = None):
        source_file = f'`{rules_file_name}`'

        if end_line_number is None or start_line_number == end_line_number - 1:
            line_number_range = f'line {start_line_number}'
        else:
            line_number_range = f'lines {start_line_number} to {end_line_number - 1}'

        self._messenger.print_error(f'{source_file}, {line_number_range}: {message}')

    def print_traceback(self, exception: Exception):
        self._messenger.print_traceback(exception)

    @staticmethod
    def is_whitespace_only(line: str) -> bool:
        return bool(re.fullmatch(pattern=r'[\s]*', string=line))

    @staticmethod
    def is_comment(line: str) -> bool:
        return line.startswith('#')

    @staticmethod
    def compute_class_declaration_match(line: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                (?P<class_name> [A-Za-z]+ ) [:]
                [\s]+
                (?:
                    [#] (?P<id_> [A-Za-z0-9_.-]+ )
                        |
                    (?P<qualified_name> [^\W\d][\w$]* (?: [.] [^\W\d][\w$]* )* )
                )
                [\s]*
            ''',
            string=line,
            flags=re.VERBOSE,
        )

    def process_class_declaration_line(self, class_declaration_match: re.Match,
                                       template_declaration: Optional['TemplateDeclaration'],
                                       rules_file_name: str, line_number: int) -> 'PostClassDeclarationState':
        class_name = class_declaration_match.group('class_name')
        id_ = class_declaration_match.group('id_')
        qualified_name = class_declaration_match.group('qualified_name')

        if class_name == 'Template':
            if qualified_name is None:
                self.print_error(f'`Template` requires a qualified name, not an id `#{id_}`',
                                 rules_file_name, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            if qualified_name in self._subordinate_declarations_from_template_name:
                self.print_error(f'template already declared for `{qualified_name}`', rules_file_name, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            declaration = TemplateDeclaration(qualified_name)
            self._line_number_from_template_name[qualified_name] = line_number
            return PostClassDeclarationState(class_name, declaration, declaration, line_number)

        if class_name not in ('Instantiation', 'Derivation'):
            self.print_error(f'unrecognised declaration class `{class_name}`', rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if id_ is None:
            self.print_error(f'`{class_name}` requires an id `#«id»`, not a name `{qualified_name}`',
                             rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if template_declaration is None:
            self.print_error(f'`{class_name}` without a preceding `Template` declaration',
                             rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if id_ in self._subordinate_declaration_ids:
            self.print_error(f'declaration already made with id `{id_}`', rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if class_name == 'Instantiation':
            declaration = InstantiationDeclaration(id_)
        else:
            declaration = DerivationDeclaration(id_)

        return PostClassDeclarationState(class_name, declaration, template_declaration, line_number)

    @staticmethod
    def compute_attribute_declaration_match(line: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                [-][ ] (?P<attribute_name> [a-z_]+ ) [:]
                (?P<partial_attribute_value> [\s\S]* )
            ''',
            string=line,
            flags=re.VERBOSE,
        )

    def process_attribute_declaration_line(self, attribute_declaration_match: re.Match, class_name: str,
                                           declaration: Optional['Declaration'], attribute_value: Optional[str],
                                           rules_file_name: str, line_number: int,
                                           ) -> 'PostAttributeDeclarationState':
        if declaration is None:
            self.print_error('attribute declaration without an active class declaration',
                             rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        attribute_name = attribute_declaration_match.group('attribute_name')
        if attribute_name not in declaration.attribute_names:
            self.print_error(f'unrecognised attribute `{attribute_name}` for `{class_name}`',
                             rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        partial_attribute_value = attribute_declaration_match.group('partial_attribute_value')
        attribute_value = none_to_empty_string(attribute_value) + partial_attribute_value

        line_number_range_start = line_number

        return PostAttributeDeclarationState(attribute_name, attribute_value, line_number_range_start)

    @staticmethod
    def compute_substitution_declaration_match(line: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'(?P<partial_substitution> [*?][ ] [\s\S]* )',
            string=line,
            flags=re.VERBOSE,
        )

    def process_substitution_declaration_line(self, declaration: Optional['Declaration'],
                                              substitution_declaration_match: re.Match, substitution: Optional[str],
                                              rules_file_name: str, line_number: int,
                                              ) -> 'PostSubstitutionDeclarationState':
        if declaration is None:
            self.print_error('substitution declaration without an active class declaration',
                             rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        partial_substitution = substitution_declaration_match.group('partial_substitution')
        substitution = none_to_empty_string(substitution) + partial_substitution

        line_number_range_start = line_number

        return PostSubstitutionDeclarationState(substitution, line_number_range_start)

    @staticmethod
    def compute_continuation_match(line: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'(?P<continuation> [\s]+ [\S][\s\S]* )',
            string=line,
            flags=re.VERBOSE,
        )

    def process_continuation_line(self, continuation_match: re.Match, attribute_name: Optional[str],
                                  attribute_value: Optional[str], substitution: Optional[str],
                                  rules_file_name: str, line_number: int,
                                  ) -> 'PostContinuationState':
        continuation = continuation_match.group('continuation')

        if attribute_name is not None:
            attribute_value = none_to_empty_string(attribute_value) + '\n' + continuation
        elif substitution is not None:
            substitution = substitution + '\n' + continuation
        else:
            self.print_error('continuation only allowed for attribute or substitution declarations',
                             rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        return PostContinuationState(attribute_value, substitution)

    @staticmethod
    def compute_name_list_matches(attribute_value: str) -> Iterable[re.Match]:
        return re.finditer(
            pattern=r'''
                (?P<whitespace_only> \A [\s]* \Z )
                    |
                (?P<none_keyword> \A [\s]* NONE [\s]* \Z )
                    |
                [\s]*
                (?:
                    (?P<name> [^\W\d][\w$]* (?: [.] [^\W\d][\w$]* )* ) (?P<best_effort_mark> [?] )? (?= [\s] | \Z )
                        |
                    (?P<invalid_syntax> [\S]+ )
                )
                [\s]*
            ''',
            string=attribute_value,
            flags=re.VERBOSE,
        )

    def collect_names(self, attribute_name: str, attribute_value: str, best_effort_allowed: bool,
                      rules_file_name: str, line_number_range_start: int, line_number: int) -> list[re.Match]:
        """
        Collect the name matches of a whitespace-separated list of names, or `NONE` for an empty list.
        """
        name_matches = []

        for name_list_match in TemplateAuthority.compute_name_list_matches(attribute_value):
            if name_list_match.group('whitespace_only') is not None:
                self.print_error(f'invalid specification `` for attribute `{attribute_name}`',
                                 rules_file_name, line_number_range_start, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            invalid_syntax = name_list_match.group('invalid_syntax')
            if invalid_syntax is not None:
                self.print_error(f'invalid specification `{invalid_syntax}` for attribute `{attribute_name}`',
                                 rules_file_name, line_number_range_start, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            if name_list_match.group('none_keyword') is not None:
                return []

            if name_list_match.group('best_effort_mark') is not None and not best_effort_allowed:
                name = name_list_match.group('name')
                self.print_error(f'invalid specification `{name}?` for attribute `{attribute_name}`',
                                 rules_file_name, line_number_range_start, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            name_matches.append(name_list_match)

        return name_matches

    def stage_type_parameters(self, declaration: 'TemplateDeclaration', attribute_value: str,
                              rules_file_name: str, line_number_range_start: int, line_number: int):
        name_matches = self.collect_names('type_parameters', attribute_value, False,
                                          rules_file_name, line_number_range_start, line_number)
        declaration.type_parameter_names = [
            name_match.group('name')
            for name_match in name_matches
        ]

    @staticmethod
    def compute_type_name_position_match(attribute_value: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=fr'''
                [\s]*
                (?:
                    (?P<type_name_position> {TYPE_NAME_POSITION_APPEND} | {TYPE_NAME_POSITION_PREPEND} )
                        |
                    (?P<invalid_value> [\s\S]*? )
                )
                [\s]*
            ''',
            string=attribute_value,
            flags=re.VERBOSE,
        )

    def stage_type_name_position(self, declaration: 'TemplateDeclaration', attribute_value: str,
                                 rules_file_name: str, line_number_range_start: int, line_number: int):
        type_name_position_match = TemplateAuthority.compute_type_name_position_match(attribute_value)

        invalid_value = type_name_position_match.group('invalid_value')
        if invalid_value is not None:
            self.print_error(f'invalid value `{invalid_value}` for attribute `type_name_position`',
                             rules_file_name, line_number_range_start, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        declaration.type_name_position = type_name_position_match.group('type_name_position')

    def stage_directives(self, declaration: 'TemplateDeclaration', attribute_value: str,
                         rules_file_name: str, line_number_range_start: int, line_number: int):
        name_matches = self.collect_names('directives', attribute_value, True,
                                          rules_file_name, line_number_range_start, line_number)
        declaration.directive_markers = [
            DirectiveMarker(
                name=name_match.group('name'),
                enforce_presence=name_match.group('best_effort_mark') is None,
            )
            for name_match in name_matches
        ]

    def stage_imports(self, declaration: 'TemplateDeclaration', attribute_value: str,
                      rules_file_name: str, line_number_range_start: int, line_number: int):
        name_matches = self.collect_names('imports', attribute_value, False,
                                          rules_file_name, line_number_range_start, line_number)
        declaration.erased_import_names = [
            name_match.group('name')
            for name_match in name_matches
        ]

    @staticmethod
    def compute_sigil_match(attribute_value: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                [\s]*
                (?:
                    (?P<sigil> [^\s\w] )
                        |
                    (?P<invalid_value> [\s\S]*? )
                )
                [\s]*
            ''',
            string=attribute_value,
            flags=re.VERBOSE,
        )

    def stage_sigil(self, declaration: 'TemplateDeclaration', attribute_value: str,
                    rules_file_name: str, line_number_range_start: int, line_number: int):
        sigil_match = TemplateAuthority.compute_sigil_match(attribute_value)

        invalid_value = sigil_match.group('invalid_value')
        if invalid_value is not None:
            self.print_error(f'invalid value `{invalid_value}` for attribute `sigil`',
                             rules_file_name, line_number_range_start, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        declaration.sigil = sigil_match.group('sigil')

    @staticmethod
    def compute_type_list_matches(attribute_value: str) -> Iterable[re.Match]:
        return re.finditer(
            pattern=r'''
                (?P<whitespace_only> \A [\s]* \Z )
                    |
                [\s]*
                (?:
                    "(?P<double_quoted_type> [^"]+ )"
                        |
                    '(?P<single_quoted_type> [^']+ )'
                        |
                    (?P<bare_type> [^\s"']+ )
                        |
                    (?P<invalid_syntax> [\S]+ )
                )
                [\s]*
            ''',
            string=attribute_value,
            flags=re.VERBOSE,
        )

    def stage_types(self, declaration: 'InstantiationDeclaration', attribute_value: str,
                    rules_file_name: str, line_number_range_start: int, line_number: int):
        concrete_type_names = []

        for type_list_match in TemplateAuthority.compute_type_list_matches(attribute_value):
            if type_list_match.group('whitespace_only') is not None:
                self.print_error('invalid specification `` for attribute `types`',
                                 rules_file_name, line_number_range_start, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            invalid_syntax = type_list_match.group('invalid_syntax')
            if invalid_syntax is not None:
                self.print_error(f'invalid specification `{invalid_syntax}` for attribute `types`',
                                 rules_file_name, line_number_range_start, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            double_quoted_type = type_list_match.group('double_quoted_type')
            if double_quoted_type is not None:
                concrete_type_names.append(double_quoted_type)
                continue

            single_quoted_type = type_list_match.group('single_quoted_type')
            if single_quoted_type is not None:
                concrete_type_names.append(single_quoted_type)
                continue

            concrete_type_names.append(type_list_match.group('bare_type'))

        declaration.concrete_type_names = concrete_type_names

    @staticmethod
    def compute_name_match(attribute_value: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                [\s]*
                (?:
                    (?P<none_keyword> NONE )
                        |
                    (?P<target_simple_name> [^\W\d][\w$]* )
                        |
                    (?P<invalid_value> [\s\S]*? )
                )
                [\s]*
            ''',
            string=attribute_value,
            flags=re.VERBOSE,
        )

    def stage_name(self, class_name: str, declaration: 'DeclarationWithSubstitutions', attribute_value: str,
                   rules_file_name: str, line_number_range_start: int, line_number: int):
        name_match = TemplateAuthority.compute_name_match(attribute_value)

        invalid_value = name_match.group('invalid_value')
        if invalid_value is not None:
            self.print_error(f'invalid value `{invalid_value}` for attribute `name`',
                             rules_file_name, line_number_range_start, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if name_match.group('none_keyword') is not None:
            if class_name == 'Derivation':
                self.print_error('invalid value `NONE` for attribute `name` of `Derivation`',
                                 rules_file_name, line_number_range_start, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)
            return

        declaration.target_simple_name = name_match.group('target_simple_name')

    @staticmethod
    def compute_substitution_match(substitution: str) -> Optional[re.Match]:
        substitution_delimiters: list[str] = re.findall(pattern='[-]{2,}[>]|[~]{2,}[>]', string=substitution)
        if len(substitution_delimiters) == 0:
            return None

        longest_substitution_delimiter = max(substitution_delimiters, key=len)
        return re.fullmatch(
            pattern=fr'''
                (?P<bullet> [*?] ) [ ]
                [\s]*
                    (?:
                        "(?P<double_quoted_pattern> [\s\S]*? )"
                            |
                        '(?P<single_quoted_pattern> [\s\S]*? )'
                            |
                        (?P<bare_pattern> [\s\S]*? )
                    )
                [\s]*
                    (?P<delimiter> {re.escape(longest_substitution_delimiter)} )
                    [\s]*
                    (?:
                        "(?P<double_quoted_substitute> [\s\S]*? )"
                            |
                        '(?P<single_quoted_substitute> [\s\S]*? )'
                            |
                        (?P<bare_substitute> [\s\S]*? )
                    )
                [\s]*
            ''',
            string=substitution,
            flags=re.VERBOSE,
        )

    def stage_substitution(self, declaration: 'DeclarationWithSubstitutions', substitution: str,
                           rules_file_name: str, line_number_range_start: int, line_number: int):
        substitution_match = TemplateAuthority.compute_substitution_match(substitution)
        if substitution_match is None:
            self.print_error(f'missing delimiter `-->` or `~~>` in substitution `{substitution}`',
                             rules_file_name, line_number_range_start, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        double_quoted_pattern = substitution_match.group('double_quoted_pattern')
        if double_quoted_pattern is not None:
            pattern = double_quoted_pattern
        else:
            single_quoted_pattern = substitution_match.group('single_quoted_pattern')
            if single_quoted_pattern is not None:
                pattern = single_quoted_pattern
            else:
                pattern = substitution_match.group('bare_pattern')

        double_quoted_substitute = substitution_match.group('double_quoted_substitute')
        if double_quoted_substitute is not None:
            substitute = double_quoted_substitute
        else:
            single_quoted_substitute = substitution_match.group('single_quoted_substitute')
            if single_quoted_substitute is not None:
                substitute = single_quoted_substitute
            else:
                substitute = substitution_match.group('bare_substitute')

        is_regex = substitution_match.group('delimiter').startswith('~')
        enforce_presence = substitution_match.group('bullet') == '*'

        if len(pattern) == 0:
            self.print_error(f'empty pattern in substitution `{substitution}`',
                             rules_file_name, line_number_range_start, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if is_regex:
            try:
                pattern_compiled = re.compile(pattern=pattern, flags=REGEX_RULE_FLAGS)
            except re.error as pattern_exception:
                self.print_error(f'bad regex pattern `{pattern}`',
                                 rules_file_name, line_number_range_start, line_number)
                self.print_traceback(pattern_exception)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            try:
                pattern_compiled.sub(repl=substitute, string='')
            except re.error as substitute_exception:
                self.print_error(f'bad regex substitute `{substitute}` for pattern `{pattern}`',
                                 rules_file_name, line_number_range_start, line_number)
                self.print_traceback(substitute_exception)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

        declaration.add_replacement_rule(ReplacementRule(pattern, substitute, is_regex, enforce_presence))

    def stage(self, class_name: str, declaration: 'Declaration',
              attribute_name: str, attribute_value: str, substitution: str,
              rules_file_name: str, line_number_range_start: int, line_number: int) -> 'PostStageState':
        if substitution is not None:  # staging a substitution
            if not isinstance(declaration, DeclarationWithSubstitutions):
                self.print_error(f'class `{class_name}` does not allow substitutions',
                                 rules_file_name, line_number_range_start, line_number)
                sys.exit(GENERIC_ERROR_EXIT_CODE)

            self.stage_substitution(declaration, substitution,
                                    rules_file_name, line_number_range_start, line_number)

        else:  # staging an attribute declaration
            if attribute_name == 'type_parameters':
                self.stage_type_parameters(declaration, attribute_value,
                                           rules_file_name, line_number_range_start, line_number)
            elif attribute_name == 'type_name_position':
                self.stage_type_name_position(declaration, attribute_value,
                                              rules_file_name, line_number_range_start, line_number)
            elif attribute_name == 'directives':
                self.stage_directives(declaration, attribute_value,
                                      rules_file_name, line_number_range_start, line_number)
            elif attribute_name == 'imports':
                self.stage_imports(declaration, attribute_value,
                                   rules_file_name, line_number_range_start, line_number)
            elif attribute_name == 'sigil':
                self.stage_sigil(declaration, attribute_value,
                                 rules_file_name, line_number_range_start, line_number)
            elif attribute_name == 'types':
                self.stage_types(declaration, attribute_value,
                                 rules_file_name, line_number_range_start, line_number)
            elif attribute_name == 'name':
                self.stage_name(class_name, declaration, attribute_value,
                                rules_file_name, line_number_range_start, line_number)

        return PostStageState(attribute_name=None, attribute_value=None, substitution=None,
                              line_number_range_start=None)

    def commit(self, class_name: str, declaration: 'Declaration', template_declaration: 'TemplateDeclaration',
               rules_file_name: str, line_number: int) -> 'PostCommitState':
        try:
            declaration.commit()
        except MissingAttributeException as exception:
            missing_attribute = exception.missing_attribute
            self.print_error(f'missing attribute `{missing_attribute}` for {class_name}',
                             rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if isinstance(declaration, TemplateDeclaration):
            self._template_declarations.append(declaration)
            self._subordinate_declarations_from_template_name[declaration.qualified_name] = []
        else:
            self._subordinate_declaration_ids.add(declaration.id_)
            self._subordinate_declarations_from_template_name[template_declaration.qualified_name].append(declaration)

        return PostCommitState(class_name=None, declaration=None, attribute_name=None, attribute_value=None,
                               substitution=None, line_number_range_start=None)

    def stage_pending(self, class_name: Optional[str], declaration: Optional['Declaration'],
                      attribute_name: Optional[str], attribute_value: Optional[str], substitution: Optional[str],
                      rules_file_name: str, line_number_range_start: Optional[int], line_number: int,
                      ) -> 'PostStageState':
        """
        Stage the attribute or substitution declaration in progress, if there is one.
        """
        if attribute_name is None and substitution is None:
            return PostStageState(attribute_name, attribute_value, substitution, line_number_range_start)

        return self.stage(class_name, declaration, attribute_name, attribute_value, substitution,
                          rules_file_name, line_number_range_start, line_number)

    def conclude_declaration(self, class_name: Optional[str], declaration: Optional['Declaration'],
                             template_declaration: Optional['TemplateDeclaration'],
                             attribute_name: Optional[str], attribute_value: Optional[str],
                             substitution: Optional[str], rules_file_name: str,
                             line_number_range_start: Optional[int], line_number: int) -> 'PostCommitState':
        """
        Stage whatever is in progress, then commit the active class declaration, if there is one.
        """
        attribute_name, attribute_value, substitution, line_number_range_start = (
            self.stage_pending(class_name, declaration, attribute_name, attribute_value, substitution,
                               rules_file_name, line_number_range_start, line_number)
        )
        if declaration is None:
            return PostCommitState(class_name, declaration, attribute_name, attribute_value, substitution,
                                   line_number_range_start)

        return self.commit(class_name, declaration, template_declaration, rules_file_name, line_number)

    def ensure_instantiations(self, rules_file_name: str):
        for template_declaration in self._template_declarations:
            qualified_name = template_declaration.qualified_name
            if len(self._subordinate_declarations_from_template_name[qualified_name]) == 0:
                self.print_error(f'no instantiations supplied for template `{qualified_name}`',
                                 rules_file_name, self._line_number_from_template_name[qualified_name])
                sys.exit(GENERIC_ERROR_EXIT_CODE)

    def legislate(self, templex_rules: str, rules_file_name: Optional[str] = None):
        """
        Parse Templex rules, line by line.

        A whitespace-only line, a new class declaration, and the end of the rules
        each conclude the class declaration in progress.
        An attribute or substitution declaration may extend over continuation lines,
        and is staged once the next declaration line begins.
        """
        if templex_rules is None:
            return

        if rules_file_name is None:
            rules_file_name = self._rules_file_name

        class_name: Optional[str] = None
        declaration: Optional['Declaration'] = None
        template_declaration: Optional['TemplateDeclaration'] = None
        attribute_name: Optional[str] = None
        attribute_value: Optional[str] = None
        substitution: Optional[str] = None
        line_number_range_start: Optional[int] = None
        line_number: int = 0

        for line_number, line in enumerate(templex_rules.splitlines(), start=1):
            if TemplateAuthority.is_comment(line):
                continue

            is_whitespace_only = TemplateAuthority.is_whitespace_only(line)
            class_declaration_match = TemplateAuthority.compute_class_declaration_match(line)

            if is_whitespace_only or class_declaration_match is not None:
                class_name, declaration, attribute_name, attribute_value, substitution, line_number_range_start = (
                    self.conclude_declaration(class_name, declaration, template_declaration,
                                              attribute_name, attribute_value, substitution,
                                              rules_file_name, line_number_range_start, line_number)
                )
                if class_declaration_match is not None:
                    class_name, declaration, template_declaration, line_number_range_start = (
                        self.process_class_declaration_line(class_declaration_match, template_declaration,
                                                            rules_file_name, line_number)
                    )
                continue

            attribute_declaration_match = TemplateAuthority.compute_attribute_declaration_match(line)
            substitution_declaration_match = TemplateAuthority.compute_substitution_declaration_match(line)

            if attribute_declaration_match is not None or substitution_declaration_match is not None:
                attribute_name, attribute_value, substitution, line_number_range_start = (
                    self.stage_pending(class_name, declaration, attribute_name, attribute_value, substitution,
                                       rules_file_name, line_number_range_start, line_number)
                )

            if attribute_declaration_match is not None:
                attribute_name, attribute_value, line_number_range_start = (
                    self.process_attribute_declaration_line(
                        attribute_declaration_match, class_name, declaration, attribute_value,
                        rules_file_name, line_number,
                    )
                )
                continue

            if substitution_declaration_match is not None:
                substitution, line_number_range_start = (
                    self.process_substitution_declaration_line(
                        declaration, substitution_declaration_match, substitution,
                        rules_file_name, line_number,
                    )
                )
                continue

            continuation_match = TemplateAuthority.compute_continuation_match(line)
            if continuation_match is not None:
                attribute_value, substitution = (
                    self.process_continuation_line(
                        continuation_match, attribute_name, attribute_value, substitution,
                        rules_file_name, line_number,
                    )
                )
                continue

            self.print_error('invalid syntax\n\n' + TEMPLEX_RULES_SYNTAX_HELP, rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        self.conclude_declaration(class_name, declaration, template_declaration,
                                  attribute_name, attribute_value, substitution,
                                  rules_file_name, line_number_range_start, line_number + 1)
        self.ensure_instantiations(rules_file_name)

    def execute(self, source_reader: 'SourceReader', output_sink: 'OutputSink') -> list['ExpansionReport']:
        expansion_reports = []

        for template_declaration in self._template_declarations:
            qualified_name = template_declaration.qualified_name
            instantiation_specs = [
                subordinate_declaration.build_instantiation_spec(template_declaration)
                for subordinate_declaration in self._subordinate_declarations_from_template_name[qualified_name]
            ]
            target_simple_names = [
                instantiation_spec.target_simple_name
                for instantiation_spec in instantiation_specs
            ]
            self._messenger.print_note(f'expanding `{qualified_name}` into {target_simple_names}')

            try:
                generic_unit = read_generic_unit(
                    qualified_name,
                    source_reader,
                    type_parameter_names=template_declaration.type_parameter_names,
                    directive_markers=template_declaration.directive_markers,
                    erased_import_names=template_declaration.erased_import_names,
                    sigil=template_declaration.sigil,
                )
            except SourceNotFoundException as source_not_found_exception:
                expansion_reports.append(
                    fail_all_instantiations(qualified_name, instantiation_specs, source_not_found_exception,
                                            self._messenger)
                )
                continue

            expansion_reports.append(
                expand_generic_unit(generic_unit, instantiation_specs, output_sink, self._messenger)
            )

        return expansion_reports


class PostClassDeclarationState(NamedTuple):
    class_name: str
    declaration: 'Declaration'
    template_declaration: 'TemplateDeclaration'
    line_number_range_start: int


class PostAttributeDeclarationState(NamedTuple):
    attribute_name: str
    attribute_value: str
    line_number_range_start: int


class PostSubstitutionDeclarationState(NamedTuple):
    substitution: str
    line_number_range_start: int


class PostContinuationState(NamedTuple):
    attribute_value: str
    substitution: str


class PostStageState(NamedTuple):
    attribute_name: Optional[str]
    attribute_value: Optional[str]
    substitution: Optional[str]
    line_number_range_start: Optional[int]


class PostCommitState(NamedTuple):
    class_name: Optional[str]
    declaration: Optional['Declaration']
    attribute_name: Optional[str]
    attribute_value: Optional[str]
    substitution: Optional[str]
    line_number_range_start: Optional[int]
