# -*- coding: utf-8 -*-
"""
GitHub Actions parameter I/O.

This module reads step inputs, writes step outputs and emits workflow
commands the same way the official Actions toolkit does:

- Inputs arrive as INPUT_<NAME> environment variables
- Outputs are appended to the file named by $GITHUB_OUTPUT
- Log lines go to stdout; errors use the ::error:: workflow command
"""

import os
import sys
import uuid

from .exceptions import ConfigurationError

# Boolean spellings accepted by the Actions toolkit (YAML 1.2 core schema)
TRUE_VALUES = ('true', 'True', 'TRUE')
FALSE_VALUES = ('false', 'False', 'FALSE')

# Process exit code, flipped to 1 by set_failed()
exit_code = 0


def _input_env_name(name):
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name, required=False):
    """
    Read a step input.

    Args:
        name (str): Input name as declared in action.yml (e.g. 'parent-folder-id')
        required (bool): Raise if the input is empty or missing

    Returns:
        str: Input value with surrounding whitespace removed ('' when absent)

    Raises:
        ConfigurationError: If required and not supplied
    """
    value = os.environ.get(_input_env_name(name), '').strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(name, default=False):
    """
    Read a boolean step input.

    An absent or empty input yields `default`. Any spelling outside
    TRUE_VALUES / FALSE_VALUES is rejected rather than guessed.

    Raises:
        ConfigurationError: If the value is not a recognised boolean
    """
    value = get_input(name)
    if not value:
        return default
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        f"Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def get_list_input(name):
    """Read a comma-separated input into a list of trimmed, non-empty items."""
    return [item.strip() for item in get_input(name).split(',') if item.strip()]


def _escape_data(message):
    return str(message).replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


def set_output(name, value):
    """
    Publish a step output.

    Writes a heredoc-style entry to $GITHUB_OUTPUT so multi-line values
    survive. Without the file (local runs) the output is printed as a
    plain name=value line.
    """
    output_file = os.environ.get('GITHUB_OUTPUT', '')
    if output_file:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(output_file, 'a', encoding='utf-8') as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    else:
        print(f"{name}={value}")


def info(message):
    """Write a plain log line."""
    print(message)


def set_failed(message):
    """
    Mark the step as failed.

    Emits an ::error:: annotation and sets the process exit code to 1.
    The caller decides when to exit (see main.py).
    """
    global exit_code
    exit_code = 1
    print(f"::error::{_escape_data(message)}")
    sys.stdout.flush()
