"""
# Templex: declarations.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Declarations made in Templex rules files.
"""

import abc
import copy
from typing import Optional

from templex.constants import DEFAULT_SIGIL, TYPE_NAME_POSITION_APPEND
from templex.exceptions import CommittedMutateException, MissingAttributeException
from templex.expansion import compute_target_simple_name
from templex.models import DirectiveMarker, InstantiationSpec, ReplacementRule
from templex.utilities import compute_simple_name


class Declaration(abc.ABC):
    """
    Base class for a declaration.

    Attributes are staged by setting them, and frozen by `commit()`.
    """
    _is_committed: bool
    _id: str

    def __init__(self, id_: str):
        self._is_committed = False
        self._id = id_

    @property
    @abc.abstractmethod
    def attribute_names(self) -> tuple[str, ...]:
        raise NotImplementedError

    @property
    def id_(self) -> str:
        return self._id

    @property
    def is_committed(self) -> bool:
        return self._is_committed

    def commit(self):
        self._validate_mandatory_attributes()
        self._is_committed = True

    @abc.abstractmethod
    def _validate_mandatory_attributes(self):
        """
        Ensure all mandatory attributes have been set.
        """
        raise NotImplementedError


class DeclarationWithSubstitutions(Declaration, abc.ABC):
    """
    Base class for a declaration with substitutions.

    Templex rules syntax:
    ````
    DeclarationWithSubstitutions: #«id»
    * | ?  "«pattern»" | '«pattern»' | «pattern»
        --> | ~~>
      "«substitute»" | '«substitute»' | «substitute»
    [...]
    ````
    """
    _replacement_rules: list['ReplacementRule']

    def __init__(self, id_: str):
        super().__init__(id_)
        self._replacement_rules = []

    @property
    def replacement_rules(self) -> tuple['ReplacementRule', ...]:
        return tuple(self._replacement_rules)

    def add_replacement_rule(self, replacement_rule: 'ReplacementRule'):
        if self._is_committed:
            raise CommittedMutateException('error: cannot call `add_replacement_rule(...)` after `commit()`')

        self._replacement_rules.append(replacement_rule)

    @abc.abstractmethod
    def build_instantiation_spec(self, template_declaration: 'TemplateDeclaration') -> 'InstantiationSpec':
        raise NotImplementedError


class TemplateDeclaration(Declaration):
    """
    A generic unit to be expanded.

    Templex rules syntax:
    ````
    Template: «qualified.SourceName»
    - type_parameters: (def) introspected | «Name» [...]
    - type_name_position: (def) APPEND | PREPEND
    - directives: (def) Template | NONE | «Name»[?] [...]
    - imports: (def) NONE | «qualified.name» [...]
    - sigil: (def) @ | «character»
    ````
    """
    _type_parameter_names: Optional[list[str]]
    _type_name_position: str
    _directive_markers: Optional[list['DirectiveMarker']]
    _erased_import_names: list[str]
    _sigil: str

    def __init__(self, qualified_name: str):
        super().__init__(qualified_name)
        self._type_parameter_names = None
        self._type_name_position = TYPE_NAME_POSITION_APPEND
        self._directive_markers = None
        self._erased_import_names = []
        self._sigil = DEFAULT_SIGIL

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return (
            'type_parameters',
            'type_name_position',
            'directives',
            'imports',
            'sigil',
        )

    @property
    def qualified_name(self) -> str:
        return self._id

    @property
    def simple_name(self) -> str:
        return compute_simple_name(self._id)

    @property
    def type_parameter_names(self) -> Optional[list[str]]:
        return self._type_parameter_names

    @type_parameter_names.setter
    def type_parameter_names(self, value: list[str]):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `type_parameter_names` after `commit()`')

        self._type_parameter_names = copy.copy(value)

    @property
    def type_name_position(self) -> str:
        return self._type_name_position

    @type_name_position.setter
    def type_name_position(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `type_name_position` after `commit()`')

        self._type_name_position = value

    @property
    def directive_markers(self) -> Optional[list['DirectiveMarker']]:
        return self._directive_markers

    @directive_markers.setter
    def directive_markers(self, value: list['DirectiveMarker']):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `directive_markers` after `commit()`')

        self._directive_markers = copy.copy(value)

    @property
    def erased_import_names(self) -> list[str]:
        return self._erased_import_names

    @erased_import_names.setter
    def erased_import_names(self, value: list[str]):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `erased_import_names` after `commit()`')

        self._erased_import_names = copy.copy(value)

    @property
    def sigil(self) -> str:
        return self._sigil

    @sigil.setter
    def sigil(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `sigil` after `commit()`')

        self._sigil = value

    def _validate_mandatory_attributes(self):
        pass


class InstantiationDeclaration(DeclarationWithSubstitutions):
    """
    A concrete binding of the type parameters of the closest preceding template.

    Templex rules syntax:
    ````
    Instantiation: #«id»
    - types: «type» [...] (mandatory)
    - name: (def) NONE | «TargetName»
    * | ?  «pattern» --> | ~~> «substitute»
    [...]
    ````
    If `name` is `NONE`, the target name is computed from the types
    according to the template's `type_name_position`.
    """
    _concrete_type_names: Optional[list[str]]
    _target_simple_name: Optional[str]

    def __init__(self, id_: str):
        super().__init__(id_)
        self._concrete_type_names = None
        self._target_simple_name = None

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return (
            'types',
            'name',
        )

    @property
    def concrete_type_names(self) -> Optional[list[str]]:
        return self._concrete_type_names

    @concrete_type_names.setter
    def concrete_type_names(self, value: list[str]):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `concrete_type_names` after `commit()`')

        self._concrete_type_names = copy.copy(value)

    @property
    def target_simple_name(self) -> Optional[str]:
        return self._target_simple_name

    @target_simple_name.setter
    def target_simple_name(self, value: Optional[str]):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `target_simple_name` after `commit()`')

        self._target_simple_name = value

    def _validate_mandatory_attributes(self):
        if self._concrete_type_names is None:
            raise MissingAttributeException('types')

    def build_instantiation_spec(self, template_declaration: 'TemplateDeclaration') -> 'InstantiationSpec':
        target_simple_name = self._target_simple_name
        if target_simple_name is None:
            target_simple_name = compute_target_simple_name(
                template_declaration.simple_name,
                self._concrete_type_names,
                template_declaration.type_name_position,
            )

        return InstantiationSpec(
            target_simple_name=target_simple_name,
            type_bindings=tuple(self._concrete_type_names),
            custom_replacements=self.replacement_rules,
        )


class DerivationDeclaration(DeclarationWithSubstitutions):
    """
    A renamed copy of the closest preceding template, keeping its type parameters.

    Templex rules syntax:
    ````
    Derivation: #«id»
    - name: «TargetName» (mandatory)
    * | ?  «pattern» --> | ~~> «substitute»
    [...]
    ````
    """
    _target_simple_name: Optional[str]

    def __init__(self, id_: str):
        super().__init__(id_)
        self._target_simple_name = None

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return (
            'name',
        )

    @property
    def target_simple_name(self) -> Optional[str]:
        return self._target_simple_name

    @target_simple_name.setter
    def target_simple_name(self, value: Optional[str]):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `target_simple_name` after `commit()`')

        self._target_simple_name = value

    def _validate_mandatory_attributes(self):
        if self._target_simple_name is None:
            raise MissingAttributeException('name')

    def build_instantiation_spec(self, template_declaration: 'TemplateDeclaration') -> 'InstantiationSpec':
        return InstantiationSpec(
            target_simple_name=self._target_simple_name,
            custom_replacements=self.replacement_rules,
            is_derivation=True,
        )
