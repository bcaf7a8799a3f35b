# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Error definitions for the conversion client.

Every failure surfaced by the client derives from ClientError. None of these
errors are retried by the client; retry policy belongs to the caller.
"""

from typing import Any
from typing import Optional


class ClientError(Exception):
    """
    Base exception for conversion client errors.

    Attributes:
        message -- explanation of the error
        response -- raw server response body or decoded payload, if any
        status_code -- HTTP status code of the failing response, if any
    """

    def __init__(self, message: str, response: Optional[Any] = None, status_code: Optional[int] = None):
        self.message = message
        self.response = response
        self.status_code = status_code
        super().__init__(message)

    def __str__(self):
        if self.response is None:
            return self.message
        return f"{self.message}\n{self.response}"


class ConfigurationError(ClientError):
    """Missing endpoint, missing required parameter, or invalid client settings."""

    pass


class SubmissionError(ClientError):
    """The service rejected the submission or did not return a job uuid."""

    pass


class ConversionFailedError(ClientError):
    """The service reported the conversion as failed."""

    pass


class StatusPollError(ConversionFailedError):
    """A status poll returned a non-200 response or an undecodable body."""

    pass


class ConversionTimeoutError(ClientError):
    """The conversion did not finish within the configured conversion timeout."""

    pass


class ConversionCancelledError(ClientError):
    """Polling was cancelled by the caller before the conversion finished."""

    pass


class ConnectivityError(ClientError):
    """Network or IO failure while talking to the service."""

    pass


class DownloadError(ClientError):
    """No download URL was available, or transferring the result failed."""

    pass
