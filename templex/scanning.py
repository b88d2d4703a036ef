"""
# Templex: scanning.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Bracket scanning.
"""

from templex.exceptions import UnbalancedBracketsException


def skip_balanced(string: str, opening_character: str, closing_character: str, start_index: int) -> int:
    """
    Return the index one past the closing bracket matching the opening bracket at `start_index`.

    Brackets inside double-quoted string literals do not count,
    and within such a literal a backslash escapes the character following it
    (so that `\\"` does not end the literal).
    Used for parenthesis pairs (directive arguments) and angle-bracket pairs (type parameters).
    """
    if start_index >= len(string) or string[start_index] != opening_character:
        raise UnbalancedBracketsException(
            f'internal error: opening bracket `{opening_character}` not at index {start_index}'
        )

    depth = 0
    inside_string_literal = False
    index = start_index

    while index < len(string):
        character = string[index]

        if inside_string_literal:
            if character == '\\':
                index += 1
            elif character == '"':
                inside_string_literal = False
        elif character == '"':
            inside_string_literal = True
        elif character == opening_character:
            depth += 1
        elif character == closing_character:
            depth -= 1
            if depth == 0:
                return index + 1

        index += 1

    raise UnbalancedBracketsException(
        f'internal error: reached end of text without finding `{closing_character}` '
        f'to balance `{opening_character}` at index {start_index}'
    )
