"""
# Templex: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception classes.
"""


class CommittedMutateException(Exception):
    pass


class MissingAttributeException(Exception):
    _missing_attribute: str

    def __init__(self, missing_attribute: str):
        self._missing_attribute = missing_attribute

    @property
    def missing_attribute(self) -> str:
        return self._missing_attribute


class NoInstantiationsException(Exception):
    pass


class ExpansionException(Exception):
    """
    Base class for errors that abort the expansion of a single instantiation.
    """
    pass


class SourceNotFoundException(ExpansionException):
    pass


class DeclarationNotFoundException(ExpansionException):
    pass


class DirectiveNotFoundException(ExpansionException):
    _directive_name: str

    def __init__(self, message: str, directive_name: str):
        super().__init__(message)
        self._directive_name = directive_name

    @property
    def directive_name(self) -> str:
        return self._directive_name


class PatternNotFoundException(ExpansionException):
    _pattern: str

    def __init__(self, message: str, pattern: str):
        super().__init__(message)
        self._pattern = pattern

    @property
    def pattern(self) -> str:
        return self._pattern


class BadPatternException(ExpansionException):
    pass


class ParameterCountMismatchException(ExpansionException):
    pass


class TargetNameCollisionException(ExpansionException):
    pass


class EmitFailedException(ExpansionException):
    pass


class UnbalancedBracketsException(ExpansionException):
    pass
