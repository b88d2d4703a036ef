"""
# Templex: sinks.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Output sinks for generated source text.
"""

import abc
import os
import threading

from templex.constants import DEFAULT_SOURCE_FILE_EXTENSION
from templex.exceptions import EmitFailedException


class OutputSink(abc.ABC):
    """
    Base class for accepting generated source text.
    """
    @abc.abstractmethod
    def emit(self, qualified_target_name: str, text: str):
        """
        Accept the generated text of a unit, raising `EmitFailedException` on failure.
        """
        raise NotImplementedError


class DirectoryOutputSink(OutputSink):
    """
    An output sink writing unit `a.b.C` to `«root»/a/b/C«file_extension»`.
    """
    _root_directory: str
    _file_extension: str

    def __init__(self, root_directory: str, file_extension: str = DEFAULT_SOURCE_FILE_EXTENSION):
        self._root_directory = root_directory
        self._file_extension = file_extension

    @property
    def root_directory(self) -> str:
        return self._root_directory

    def compute_output_file_name(self, qualified_target_name: str) -> str:
        relative_path = qualified_target_name.replace('.', os.sep) + self._file_extension
        return os.path.join(self._root_directory, relative_path)

    def emit(self, qualified_target_name: str, text: str):
        output_file_name = self.compute_output_file_name(qualified_target_name)
        try:
            os.makedirs(os.path.dirname(output_file_name) or os.curdir, exist_ok=True)
            with open(output_file_name, 'w', encoding='utf-8') as output_file:
                output_file.write(text)
        except OSError as os_error:
            error_message = f'cannot write to `{output_file_name}` for `{qualified_target_name}`: {os_error}'
            raise EmitFailedException(error_message) from os_error


class MemoryOutputSink(OutputSink):
    """
    An output sink keeping generated texts in memory, keyed by qualified target name.
    """
    _text_from_qualified_name: dict[str, str]
    _lock: threading.Lock

    def __init__(self):
        self._text_from_qualified_name = {}
        self._lock = threading.Lock()

    @property
    def text_from_qualified_name(self) -> dict[str, str]:
        with self._lock:
            return dict(self._text_from_qualified_name)

    def emit(self, qualified_target_name: str, text: str):
        with self._lock:
            self._text_from_qualified_name[qualified_target_name] = text
