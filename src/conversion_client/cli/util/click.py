# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import logging
import os
from enum import Enum
from typing import Dict
from typing import Optional
from typing import Tuple

import click

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """
    Enum for specifying logging levels.

    Attributes
    ----------
    DEBUG : str
        Debug logging level.
    INFO : str
        Informational logging level.
    WARNING : str
        Warning logging level.
    ERROR : str
        Error logging level.
    CRITICAL : str
        Critical logging level.
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def click_validate_file_exists(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    """
    Validates that the given file exists.

    Parameters
    ----------
    ctx : click.Context
        The Click context.
    param : click.Parameter
        The parameter associated with the file option.
    value : Optional[str]
        A file path.

    Returns
    -------
    Optional[str]
        The validated file path, or None when the option was not given.

    Raises
    ------
    click.BadParameter
        If the file does not exist.
    """
    if not value:
        return None
    if not os.path.isfile(value):
        raise click.BadParameter(f"File does not exist: {value}")
    return value


def click_validate_params(ctx: click.Context, param: click.Parameter, value: Tuple[str, ...]) -> Dict[str, str]:
    """
    Parses repeated `key=value` options into a dictionary of service options.

    Parameters
    ----------
    ctx : click.Context
        The Click context.
    param : click.Parameter
        The parameter associated with the option.
    value : Tuple[str, ...]
        The raw `key=value` strings.

    Returns
    -------
    Dict[str, str]
        Option name to value. Later repetitions of a key win.

    Raises
    ------
    click.BadParameter
        If an entry has no `=` or an empty key.
    """
    options: Dict[str, str] = {}
    for entry in value or ():
        key, sep, option_value = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{entry}'")
        options[key] = option_value
    return options


def click_validate_timeout(ctx: click.Context, param: click.Parameter, value: Optional[int]) -> Optional[int]:
    """Validates that a request timeout is a positive number of milliseconds."""
    if value is not None and value <= 0:
        raise click.BadParameter("Timeout must be a positive number of milliseconds.")
    return value
