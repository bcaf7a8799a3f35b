# SPDX-FileCopyrightText: Copyright (c) 2024-25, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests
from requests.auth import AuthBase

from conversion_client.config import DEFAULT_REQUEST_TIMEOUT_MS
from conversion_client.errors import ConnectivityError

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 8192


class TransportResponse:
    """
    Status code and raw body of one HTTP exchange.

    Bodies of non-2xx responses are captured as well, so callers can report what the
    server said.
    """

    def __init__(self, status_code: int, body: bytes = b"") -> None:
        self.status_code: int = status_code
        self.body: bytes = body or b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """
        Decodes the body as JSON.

        Raises
        ------
        ValueError
            If the body is not valid JSON.
        """
        return json.loads(self.text)

    def __repr__(self) -> str:
        return f"TransportResponse(status_code={self.status_code}, body={self.text[:200]!r})"


class RestClient:
    """
    Blocking HTTP transport for the conversion client, built on `requests`.

    Every call applies the same connect and read timeout and makes exactly one attempt;
    any network failure is raised as ConnectivityError.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_MS / 1000.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initializes the RestClient.

        Parameters
        ----------
        timeout : float, optional
            Connect and read timeout for each request, in seconds. Default is 60.
        session : requests.Session, optional
            Session used for all requests. A new `requests.Session` is created when omitted.
        """
        self._timeout: Tuple[float, float] = (timeout, timeout)
        self._client: requests.Session = session if session is not None else requests.Session()

        logger.debug(f"RestClient initialized with timeout {self._timeout}")

    @property
    def timeout(self) -> Tuple[float, float]:
        return self._timeout

    def get_client(self) -> requests.Session:
        """
        Returns the underlying HTTP client instance.
        """
        return self._client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def get(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[AuthBase] = None,
    ) -> TransportResponse:
        """
        Performs a GET request and captures the full response body.

        Raises
        ------
        ConnectivityError
            If the request could not be completed.
        """
        try:
            with self._client.get(
                url, params=params, headers=headers or {}, auth=auth, timeout=self._timeout
            ) as result:
                return TransportResponse(result.status_code, result.content)
        except requests.exceptions.RequestException as err:
            logger.error(f"GET {url} failed: {err}")
            raise ConnectivityError(f"Connection issues whilst requesting {url}") from err

    def post(
        self,
        url: str,
        body: bytes,
        content_type: str,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[AuthBase] = None,
    ) -> TransportResponse:
        """
        Performs a POST request with a pre-encoded body.

        Parameters
        ----------
        url : str
            Target URL.
        body : bytes
            Encoded request body.
        content_type : str
            Value of the `Content-Type` header.
        headers : Dict[str, str], optional
            Extra headers.
        auth : requests.auth.AuthBase, optional
            Authentication applied by `requests`, such as `HTTPBasicAuth`.

        Raises
        ------
        ConnectivityError
            If the request could not be completed.
        """
        request_headers: Dict[str, str] = {
            "Content-Type": content_type,
            "Content-Length": str(len(body)),
        }
        request_headers.update(headers or {})

        try:
            with self._client.post(
                url, data=body, headers=request_headers, auth=auth, timeout=self._timeout
            ) as result:
                return TransportResponse(result.status_code, result.content)
        except requests.exceptions.RequestException as err:
            logger.error(f"POST {url} failed: {err}")
            raise ConnectivityError(f"Connection issues whilst posting to {url}") from err

    def download_to_file(
        self,
        url: str,
        output_path: str,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[AuthBase] = None,
        chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    ) -> int:
        """
        Streams a GET response body into a local file.

        A file that was partially written before a failure is left in place.

        Parameters
        ----------
        url : str
            Resource to download.
        output_path : str
            Destination file path. Overwritten if it exists.
        headers : Dict[str, str], optional
            Extra headers.
        auth : requests.auth.AuthBase, optional
            Authentication applied by `requests`, such as `HTTPBasicAuth`.
        chunk_size : int, optional
            Size of each buffered read, in bytes. Default is 8192.

        Returns
        -------
        int
            Number of bytes written.

        Raises
        ------
        ConnectivityError
            If the server answered with a non-2xx status, or the transfer failed.
        """
        written = 0
        try:
            with self._client.get(
                url, headers=headers or {}, auth=auth, timeout=self._timeout, stream=True
            ) as result:
                if not 200 <= result.status_code < 300:
                    raise ConnectivityError(
                        f"Server returned response {result.status_code} for {url}",
                        response=result.text,
                        status_code=result.status_code,
                    )
                with open(output_path, "wb") as output:
                    for chunk in result.iter_content(chunk_size=chunk_size):
                        if chunk:
                            output.write(chunk)
                            written += len(chunk)
        except requests.exceptions.RequestException as err:
            logger.error(f"Download from {url} failed after {written} bytes: {err}")
            raise ConnectivityError(f"Connection issues whilst downloading {url}") from err
        except OSError as err:
            logger.error(f"Writing {output_path} failed after {written} bytes: {err}")
            raise ConnectivityError(f"Unable to write download to {output_path}") from err

        logger.debug(f"Downloaded {written} bytes from {url} to {output_path}")
        return written
