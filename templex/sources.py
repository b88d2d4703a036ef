"""
# Templex: sources.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Resolution and reading of generic unit source text.
"""

import abc
import copy
import os

from templex.constants import DEFAULT_SOURCE_FILE_EXTENSION
from templex.exceptions import SourceNotFoundException


class SourceReader(abc.ABC):
    """
    Base class for resolving a qualified name to source text.
    """
    @abc.abstractmethod
    def read_source(self, qualified_name: str) -> str:
        """
        Read the source text of a unit, raising `SourceNotFoundException` should there be none.
        """
        raise NotImplementedError


class DirectorySourceReader(SourceReader):
    """
    A source reader for a directory tree laid out by package,
    where unit `a.b.C` lives in `«root»/a/b/C«file_extension»`.

    Carriage returns are dropped.
    """
    _root_directory: str
    _file_extension: str

    def __init__(self, root_directory: str, file_extension: str = DEFAULT_SOURCE_FILE_EXTENSION):
        self._root_directory = root_directory
        self._file_extension = file_extension

    @property
    def root_directory(self) -> str:
        return self._root_directory

    def compute_source_file_name(self, qualified_name: str) -> str:
        relative_path = qualified_name.replace('.', os.sep) + self._file_extension
        return os.path.join(self._root_directory, relative_path)

    def read_source(self, qualified_name: str) -> str:
        source_file_name = self.compute_source_file_name(qualified_name)
        try:
            with open(source_file_name, 'r', encoding='utf-8') as source_file:
                source = source_file.read()
        except FileNotFoundError as file_not_found_error:
            error_message = f'source file `{source_file_name}` not found for `{qualified_name}`'
            raise SourceNotFoundException(error_message) from file_not_found_error

        return source.replace('\r', '')


class MemorySourceReader(SourceReader):
    """
    A source reader over source texts held in memory, keyed by qualified name.
    """
    _source_from_qualified_name: dict[str, str]

    def __init__(self, source_from_qualified_name: dict[str, str]):
        self._source_from_qualified_name = copy.copy(source_from_qualified_name)

    def read_source(self, qualified_name: str) -> str:
        try:
            return self._source_from_qualified_name[qualified_name]
        except KeyError:
            raise SourceNotFoundException(f'no source for `{qualified_name}`')
