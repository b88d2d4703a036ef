"""
# Templex: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
VERBOSE_MODE_DIVIDER_SYMBOL_COUNT = 48

DEFAULT_SIGIL = '@'
DEFAULT_DIRECTIVE_NAMES = ('Template',)
DEFAULT_SOURCE_FILE_EXTENSION = '.java'

TYPE_NAME_POSITION_APPEND = 'APPEND'
TYPE_NAME_POSITION_PREPEND = 'PREPEND'

DECLARATION_KEYWORDS = ('class', 'interface', 'enum', 'record')

PROVENANCE_COMMENT_FORMAT = '// generated from {source_qualified_name}'

TEMPLEX_RULES_SYNTAX_HELP = '''\
In Templex rules syntax, a line must be one of the following:
(1) whitespace-only;
(2) a comment (beginning with `#`);
(3) a template declaration (`Template: «qualified.SourceName»`);
(4) an instantiation or derivation declaration (`Instantiation: #«id»`, `Derivation: #«id»`);
(5) the start of an attribute declaration (`- «name»: «value»`);
(6) the start of a substitution declaration (`* «pattern» --> «substitute»`);
(7) a continuation (beginning with whitespace).
- Note for (4): an instantiation or derivation belongs to the closest preceding template.
- Note for (6): the delimiter `-->` declares a literal substitution,
  and the delimiter `~~>` declares a regex substitution.
  The number of hyphens (or tildes) may be arbitrarily increased
  should «pattern» contain the shorter delimiter.
  The bullet `*` requires «pattern» to be present;
  the bullet `?` makes the substitution best effort.
- Note for (7): continuations are only allowed for attribute declarations
  and for substitution declarations.
'''
