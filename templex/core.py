"""
# Templex: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core expansion logic.

A Templex rules file declares templates (generic units) and, beneath each, its instantiations and derivations:
````
Template: «qualified.SourceName»
[...]

Instantiation: #«id»
[...]

Derivation: #«id»
[...]
````
For details of the syntax, see `TEMPLEX_RULES_SYNTAX_HELP` in `constants.py`
and the docstrings in `declarations.py`.
"""

import os
from typing import Optional

from templex.authorities import TemplateAuthority
from templex.constants import DEFAULT_SOURCE_FILE_EXTENSION
from templex.diagnostics import Messenger
from templex.models import ExpansionReport
from templex.sinks import DirectoryOutputSink, OutputSink
from templex.sources import DirectorySourceReader, SourceReader


def expand_templates(templex_rules: str, rules_file_name: str,
                     source_reader: 'SourceReader', output_sink: 'OutputSink',
                     verbose_mode_enabled: bool = False,
                     messenger: Optional['Messenger'] = None) -> list['ExpansionReport']:
    """
    Expand the templates declared in Templex rules.
    """
    if messenger is None:
        messenger = Messenger(verbose_mode_enabled)

    template_authority = TemplateAuthority(rules_file_name, verbose_mode_enabled, messenger)
    template_authority.legislate(templex_rules, rules_file_name=rules_file_name)
    expansion_reports = template_authority.execute(source_reader, output_sink)

    return expansion_reports


def expand_rules_file(rules_file_name: str, source_directory: Optional[str] = None,
                      output_directory: Optional[str] = None, verbose_mode_enabled: bool = False,
                      file_extension: str = DEFAULT_SOURCE_FILE_EXTENSION,
                      messenger: Optional['Messenger'] = None) -> bool:
    """
    Expand the templates declared in a Templex rules file, returning whether every expansion succeeded.

    The source directory defaults to the directory of the rules file,
    and the output directory defaults to the source directory.
    """
    if messenger is None:
        messenger = Messenger(verbose_mode_enabled)

    try:
        with open(rules_file_name, 'r', encoding='utf-8') as rules_file:
            templex_rules = rules_file.read()
    except FileNotFoundError as file_not_found_error:
        error_message = f'rules file `{rules_file_name}` not found'
        raise FileNotFoundError(error_message) from file_not_found_error

    if source_directory is None:
        source_directory = os.path.dirname(rules_file_name)

    if output_directory is None:
        output_directory = source_directory

    source_reader = DirectorySourceReader(source_directory, file_extension)
    output_sink = DirectoryOutputSink(output_directory, file_extension)
    expansion_reports = expand_templates(templex_rules, rules_file_name, source_reader, output_sink,
                                         verbose_mode_enabled, messenger)

    for expansion_report in expansion_reports:
        for target_qualified_name in expansion_report.emitted_target_names:
            messenger.print_note(f'wrote `{output_sink.compute_output_file_name(target_qualified_name)}`')

    return all(
        expansion_report.is_successful
        for expansion_report in expansion_reports
    )
