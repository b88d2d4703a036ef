"""
# Templex: placeholders.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Placeholder protection.
"""

import re
import warnings


class PlaceholderMaster:
    """
    Object providing placeholder protection for a single expansion.

    A declaration header rewritten early must survive the replacement phases that follow unaltered.
    To that end it is temporarily replaced by a placeholder consisting of code points
    in the main Unicode Private Use Area, of the form `«marker»«run_characters»«marker»`,
    where «run_characters» are between `U+E000` and `U+E0FF`, each representing a byte of the protected string.

    The «marker» is chosen per instance: starting at `U+F8FF`, the code point is bumped down
    until it is absent from the string being expanded.
    Hence no occurrence of «marker» in the original text can ever be confounding,
    and none of the run characters or markers is a word character,
    so that whole-identifier replacements cannot match inside a placeholder.

    It is assumed that custom replacement rules will not tamper with placeholders.
    """
    _MARKER_CODE_POINT_MAX = 0xF8FF
    _MARKER_CODE_POINT_MIN = 0xF000
    _RUN_CHARACTER_MIN = '\uE000'
    _RUN_CHARACTER_MAX = '\uE0FF'
    _REPLACEMENT_CHARACTER = '\uFFFD'

    _RUN_CODE_POINT_MIN = ord(_RUN_CHARACTER_MIN)
    _REPLACEMENT_CODE_POINT = ord(_REPLACEMENT_CHARACTER)

    _marker: str
    _placeholder_pattern_compiled: re.Pattern

    def __init__(self, string: str):
        marker = PlaceholderMaster.choose_marker(string)
        run_character_min = PlaceholderMaster._RUN_CHARACTER_MIN
        run_character_max = PlaceholderMaster._RUN_CHARACTER_MAX

        self._marker = marker
        self._placeholder_pattern_compiled = re.compile(
            pattern=f'{marker} (?P<run_characters> [{run_character_min}-{run_character_max}]* ) {marker}',
            flags=re.VERBOSE,
        )

    @property
    def marker(self) -> str:
        return self._marker

    @staticmethod
    def choose_marker(string: str) -> str:
        """
        Choose the highest marker code point that does not occur in the string.
        """
        present_characters = set(string)

        code_point = PlaceholderMaster._MARKER_CODE_POINT_MAX
        while chr(code_point) in present_characters:
            code_point -= 1
            if code_point < PlaceholderMaster._MARKER_CODE_POINT_MIN:
                raise ValueError('error: no Private Use Area marker is absent from the string')

        return chr(code_point)

    @staticmethod
    def _unprotect_substitute_function(placeholder_match: re.Match) -> str:
        run_characters = placeholder_match.group('run_characters')
        string_bytes = bytes(
            ord(character) - PlaceholderMaster._RUN_CODE_POINT_MIN
            for character in run_characters
        )

        try:
            string = string_bytes.decode()
        except UnicodeDecodeError:
            warnings.warn(
                f'warning: placeholder encountered with run characters '
                f'representing invalid byte sequence {string_bytes}; '
                f'substituted with U+{PlaceholderMaster._REPLACEMENT_CODE_POINT:X} '
                f'REPLACEMENT CHARACTER as a fallback\n\n'
                f'Likely cause: a custom replacement rule tampers with '
                f'strings of the form `«marker»«run_characters»«marker»`'
            )
            string = PlaceholderMaster._REPLACEMENT_CHARACTER

        return string

    def protect(self, string: str) -> str:
        """
        Protect a string by converting it to a placeholder.
        """
        run_characters = ''.join(
            chr(byte + PlaceholderMaster._RUN_CODE_POINT_MIN)
            for byte in string.encode()
        )

        return f'{self._marker}{run_characters}{self._marker}'

    def unprotect(self, string: str) -> str:
        """
        Unprotect a string by restoring placeholders to their strings.
        """
        return self._placeholder_pattern_compiled.sub(
            repl=PlaceholderMaster._unprotect_substitute_function,
            string=string,
        )
