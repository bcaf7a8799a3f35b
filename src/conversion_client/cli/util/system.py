# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import os

from conversion_client.cli.util.click import LogLevel

PACKAGE_LOGGER = "conversion_client"
# urllib3 logs every request line, job uuid query included, at DEBUG.
HTTP_LOGGER = "urllib3"


def configure_logging(logger: logging.Logger, log_level: str) -> None:
    """
    Configures console logging for the CLI and the conversion_client package.

    HTTP connection logging from urllib3 is only shown at DEBUG; at any other level it is
    held at WARNING or above.

    Parameters
    ----------
    logger: logging.Logger
        The CLI logger to configure.
    log_level : str
        One of 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', in any case.

    Raises
    ------
    ValueError
        If `log_level` is not one of the above.
    """
    try:
        level = LogLevel(log_level.upper())
    except ValueError as err:
        raise ValueError(f"Invalid log level: {log_level}") from err

    numeric_level = getattr(logging, level.value)
    http_level = numeric_level if level == LogLevel.DEBUG else max(numeric_level, logging.WARNING)

    logging.basicConfig(level=numeric_level)
    logger.setLevel(numeric_level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)
    logging.getLogger(HTTP_LOGGER).setLevel(http_level)
    logger.debug(f"Logging configured to {level.value} level.")


def ensure_output_directory(path: str) -> str:
    """
    Creates the output directory if needed and checks it is writable.

    Raises
    ------
    OSError
        If the directory cannot be created or is not writable.
    """
    os.makedirs(path, exist_ok=True)
    if not os.access(path, os.W_OK):
        raise OSError(f"Output directory is not writable: {path}")
    return path
