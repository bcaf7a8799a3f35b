# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Client library for asynchronous document conversion microservices.

Submits a file or URL for conversion, polls until the conversion finishes and
downloads the resulting archive.
"""

from conversion_client.client import ConversionClient
from conversion_client.client import download_results
from conversion_client.config import ClientConfiguration
from conversion_client.config import ServiceProduct
from conversion_client.errors import ClientError
from conversion_client.errors import ConfigurationError
from conversion_client.errors import ConnectivityError
from conversion_client.errors import ConversionCancelledError
from conversion_client.errors import ConversionFailedError
from conversion_client.errors import ConversionTimeoutError
from conversion_client.errors import DownloadError
from conversion_client.errors import StatusPollError
from conversion_client.errors import SubmissionError
from conversion_client.primitives.jobs import ConversionState
from conversion_client.primitives.jobs import ConversionStatus
from conversion_client.primitives.jobs import InputType
from conversion_client.primitives.jobs import JobHandle

__all__ = [
    "ClientConfiguration",
    "ClientError",
    "ConfigurationError",
    "ConnectivityError",
    "ConversionCancelledError",
    "ConversionClient",
    "ConversionFailedError",
    "ConversionState",
    "ConversionStatus",
    "ConversionTimeoutError",
    "DownloadError",
    "InputType",
    "JobHandle",
    "ServiceProduct",
    "StatusPollError",
    "SubmissionError",
    "download_results",
]
