"""
# Templex: diagnostics.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Diagnostic messages.
"""

import sys
import traceback
from typing import Optional, TextIO

from templex.constants import VERBOSE_MODE_DIVIDER_SYMBOL_COUNT


class Messenger:
    """
    Object printing diagnostic messages.

    Errors are always printed (to the error stream, `sys.stderr` by default).
    Notes and the before/after of every text transformation
    are printed (to the output stream, `sys.stdout` by default) only in verbose mode.
    """
    _verbose_mode_enabled: bool
    _output_stream: Optional[TextIO]
    _error_stream: Optional[TextIO]

    def __init__(self, verbose_mode_enabled: bool = False,
                 output_stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None):
        self._verbose_mode_enabled = verbose_mode_enabled
        self._output_stream = output_stream
        self._error_stream = error_stream

    @property
    def verbose_mode_enabled(self) -> bool:
        return self._verbose_mode_enabled

    @property
    def output_stream(self) -> TextIO:
        if self._output_stream is None:
            return sys.stdout

        return self._output_stream

    @property
    def error_stream(self) -> TextIO:
        if self._error_stream is None:
            return sys.stderr

        return self._error_stream

    def print_error(self, message: str):
        print(f'error: {message}', file=self.error_stream)

    def print_traceback(self, exception: Exception):
        traceback.print_exception(type(exception), exception, exception.__traceback__, file=self.error_stream)

    def print_note(self, message: str):
        if self._verbose_mode_enabled:
            print(f'note: {message}', file=self.output_stream)

    def print_transformation(self, label: str, string_before: str, string_after: str):
        if not self._verbose_mode_enabled:
            return

        if string_before == string_after:
            no_change_indicator = ' (no change)'
        else:
            no_change_indicator = ''

        output_stream = self.output_stream
        try:
            print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' BEFORE {label}', file=output_stream)
            print(string_before, file=output_stream)
            print('=' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + no_change_indicator, file=output_stream)
            print(string_after, file=output_stream)
            print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' AFTER {label}', file=output_stream)
            print('\n\n\n', file=output_stream)
        except UnicodeEncodeError as unicode_encode_error:
            # caused by Private Use Area code points used for placeholders
            error_message = (
                'bad print due to non-Unicode terminal encoding. '
                'Try setting the `PYTHONIOENCODING` environment variable to `utf-8`.'
            )
            raise RuntimeError(error_message) from unicode_encode_error
