# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import logging
import os
import posixpath
from typing import Any
from typing import Mapping
from typing import Optional
from typing import Union
from urllib.parse import unquote
from urllib.parse import urlparse

from conversion_client.config import DEFAULT_REQUEST_TIMEOUT_MS
from conversion_client.config import ClientConfiguration
from conversion_client.errors import ConnectivityError
from conversion_client.errors import DownloadError
from conversion_client.message_clients.rest.rest_client import RestClient
from conversion_client.primitives.jobs.job_state import ConversionStatus
from conversion_client.util.auth import basic_auth

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".zip"


def _download_url(results: Union[ConversionStatus, Mapping[str, Any]]) -> Optional[str]:
    if isinstance(results, ConversionStatus):
        return results.download_url
    value = results.get("downloadUrl")
    return str(value) if value else None


def resolve_output_path(download_url: str, output_dir: str, file_name: Optional[str] = None) -> str:
    """
    Works out where a conversion archive is written.

    Parameters
    ----------
    download_url : str
        URL the archive is downloaded from.
    output_dir : str
        Directory receiving the archive.
    file_name : str, optional
        Base name for the archive. `.zip` is appended.

    Returns
    -------
    str
        `<output_dir>/<file_name>.zip`, or when no name is given, the last path segment of
        the download URL with `.zip` appended unless it already ends in `.zip`.

    Raises
    ------
    DownloadError
        If no name is given and the URL has no usable path segment.
    """
    if file_name:
        return os.path.join(output_dir, f"{file_name}{ARCHIVE_SUFFIX}")

    segment = unquote(posixpath.basename(urlparse(download_url).path.rstrip("/")))
    if not segment:
        raise DownloadError(f"Failed: Unable to derive a file name from {download_url}")
    if not segment.lower().endswith(ARCHIVE_SUFFIX):
        segment += ARCHIVE_SUFFIX

    return os.path.join(output_dir, segment)


def download_results(
    results: Union[ConversionStatus, Mapping[str, Any]],
    output_dir: str,
    file_name: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    transport: Optional[RestClient] = None,
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT_MS,
) -> str:
    """
    Downloads the archive of a finished conversion.

    Parameters
    ----------
    results : ConversionStatus or Mapping[str, Any]
        Final status of the conversion. Must carry `downloadUrl`.
    output_dir : str
        Existing directory to write the archive into.
    file_name : str, optional
        Base name of the archive; derived from the download URL when omitted.
    username : str, optional
        Basic auth user, only sent when `password` is also given.
    password : str, optional
        Basic auth password, only sent when `username` is also given.
    transport : RestClient, optional
        Transport to download with. A short-lived one is created when omitted.
    request_timeout : int, optional
        Timeout in milliseconds for a transport created here. Default is 60000.

    Returns
    -------
    str
        Path of the written archive.

    Raises
    ------
    DownloadError
        If `downloadUrl` is missing or the transfer fails. A partially written archive
        is left in place.
    """
    download_url = _download_url(results)
    if not download_url:
        raise DownloadError("Failed: No URL to download from provided")

    output_path = resolve_output_path(download_url, output_dir, file_name)
    auth = basic_auth(username, password)

    logger.info(f"Downloading conversion output from {download_url} to {output_path}")
    try:
        if transport is not None:
            transport.download_to_file(download_url, output_path, auth=auth)
        else:
            timeout = ClientConfiguration.create(request_timeout=request_timeout).request_timeout_seconds
            with RestClient(timeout=timeout) as rest_client:
                rest_client.download_to_file(download_url, output_path, auth=auth)
    except ConnectivityError as err:
        raise DownloadError(
            f"Error downloading conversion output:\n{err.message}",
            response=err.response,
            status_code=err.status_code,
        ) from err

    return output_path
