"""
# Templex: models.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Generic units, instantiation specifications, and the value objects they are built from.
"""

from typing import NamedTuple, Optional, Sequence

from templex.constants import DEFAULT_DIRECTIVE_NAMES, DEFAULT_SIGIL
from templex.utilities import compute_package_name, compute_simple_name, qualify_name


class ReplacementRule(NamedTuple):
    """
    A single substitution, literal or regex.

    If `enforce_presence` is true, absence of `pattern` is fatal to the expansion;
    otherwise absence is a silent no-op.
    """
    pattern: str
    replacement: str
    is_regex: bool = False
    enforce_presence: bool = True


class DirectiveMarker(NamedTuple):
    """
    A directive (`«sigil»«name»(...)`) to be stripped from generated text.
    """
    name: str
    enforce_presence: bool = True


class GenericUnit:
    """
    A template source unit, read once and never mutated.

    Besides the source text and its type parameters,
    a generic unit carries the settings for cleaning it up during expansion:
    - «directive_markers», the directives to be stripped
    - «erased_import_names», the qualified names whose import lines are to be erased
    - «sigil», the character introducing a directive
    """
    _qualified_name: str
    _raw_text: str
    _type_parameter_names: tuple[str, ...]
    _directive_markers: tuple['DirectiveMarker', ...]
    _erased_import_names: tuple[str, ...]
    _sigil: str

    def __init__(self, qualified_name: str, raw_text: str, type_parameter_names: Sequence[str],
                 directive_markers: Optional[Sequence['DirectiveMarker']] = None,
                 erased_import_names: Sequence[str] = (), sigil: str = DEFAULT_SIGIL):
        if directive_markers is None:
            directive_markers = [DirectiveMarker(name) for name in DEFAULT_DIRECTIVE_NAMES]

        self._qualified_name = qualified_name
        self._raw_text = raw_text
        self._type_parameter_names = tuple(type_parameter_names)
        self._directive_markers = tuple(directive_markers)
        self._erased_import_names = tuple(erased_import_names)
        self._sigil = sigil

    @property
    def qualified_name(self) -> str:
        return self._qualified_name

    @property
    def simple_name(self) -> str:
        return compute_simple_name(self._qualified_name)

    @property
    def package_name(self) -> str:
        return compute_package_name(self._qualified_name)

    @property
    def raw_text(self) -> str:
        return self._raw_text

    @property
    def type_parameter_names(self) -> tuple[str, ...]:
        return self._type_parameter_names

    @property
    def directive_markers(self) -> tuple['DirectiveMarker', ...]:
        return self._directive_markers

    @property
    def erased_import_names(self) -> tuple[str, ...]:
        return self._erased_import_names

    @property
    def sigil(self) -> str:
        return self._sigil

    def qualify(self, simple_name: str) -> str:
        """
        Qualify a simple name with the package of this unit.
        """
        return qualify_name(self.package_name, simple_name)


class InstantiationSpec(NamedTuple):
    """
    A request to produce one concrete unit from a generic unit.

    For a derivation (`is_derivation`), the type-parameter list is kept
    and `type_bindings` must be empty.
    """
    target_simple_name: str
    type_bindings: tuple[str, ...] = ()
    custom_replacements: tuple['ReplacementRule', ...] = ()
    is_derivation: bool = False


class ExpansionFailure(NamedTuple):
    source_qualified_name: str
    target_qualified_name: str
    exception: Exception


class ExpansionReport:
    """
    Outcome of expanding all instantiations of one generic unit.
    """
    _source_qualified_name: str
    _emitted_target_names: list[str]
    _failures: list['ExpansionFailure']

    def __init__(self, source_qualified_name: str):
        self._source_qualified_name = source_qualified_name
        self._emitted_target_names = []
        self._failures = []

    @property
    def source_qualified_name(self) -> str:
        return self._source_qualified_name

    @property
    def emitted_target_names(self) -> list[str]:
        return self._emitted_target_names

    @property
    def failures(self) -> list['ExpansionFailure']:
        return self._failures

    @property
    def is_successful(self) -> bool:
        return len(self._failures) == 0

    def record_emission(self, target_qualified_name: str):
        self._emitted_target_names.append(target_qualified_name)

    def record_failure(self, target_qualified_name: str, exception: Exception):
        self._failures.append(ExpansionFailure(self._source_qualified_name, target_qualified_name, exception))
