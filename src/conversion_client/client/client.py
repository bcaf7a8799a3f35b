# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import logging
import threading
import time
from typing import Any
from typing import Mapping
from typing import Optional
from typing import Tuple

from requests.auth import AuthBase

from conversion_client.client.download import download_results
from conversion_client.config import DEFAULT_REQUEST_TIMEOUT_MS
from conversion_client.config import NO_CONVERSION_TIMEOUT
from conversion_client.config import ClientConfiguration
from conversion_client.errors import ConfigurationError
from conversion_client.errors import ConversionCancelledError
from conversion_client.errors import ConversionFailedError
from conversion_client.errors import ConversionTimeoutError
from conversion_client.errors import StatusPollError
from conversion_client.errors import SubmissionError
from conversion_client.message_clients.rest.payloads import FORM_URLENCODED
from conversion_client.message_clients.rest.payloads import build_multipart_body
from conversion_client.message_clients.rest.payloads import build_urlencoded_body
from conversion_client.message_clients.rest.rest_client import RestClient
from conversion_client.message_clients.rest.rest_client import TransportResponse
from conversion_client.primitives.jobs.job_spec import ConversionRequest
from conversion_client.primitives.jobs.job_spec import FileSubmission
from conversion_client.primitives.jobs.job_state import ConversionState
from conversion_client.primitives.jobs.job_state import ConversionStatus
from conversion_client.primitives.jobs.job_state import JobHandle

logger = logging.getLogger(__name__)


class ConversionClient:
    """
    A client for driving a conversion microservice: submit a document, poll until the
    conversion finishes, then download the result.

    The client holds immutable configuration and one transport. The default transport wraps
    a single `requests.Session`, which is not guaranteed to be thread-safe, so threads that
    run conversions in parallel should each use their own client or pass their own transport.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        request_timeout: int = DEFAULT_REQUEST_TIMEOUT_MS,
        conversion_timeout: int = NO_CONVERSION_TIMEOUT,
        config: Optional[ClientConfiguration] = None,
        transport: Optional[RestClient] = None,
    ) -> None:
        """
        Initialize the ConversionClient.

        Parameters
        ----------
        endpoint : str, optional
            URL of the conversion microservice, e.g. "https://example.com/buildvu".
        request_timeout : int, optional
            Timeout in milliseconds for each HTTP request. Defaults to 60000.
        conversion_timeout : int, optional
            Seconds to wait for a conversion before giving up. Values <= 0 never time out.
            Defaults to -1.
        config : ClientConfiguration, optional
            Complete configuration. Takes precedence over the other settings when given.
        transport : RestClient, optional
            Transport for all HTTP calls. Built from the configuration when omitted.

        Raises
        ------
        ConfigurationError
            If a setting is invalid.
        """
        if config is None:
            config = ClientConfiguration.create(
                endpoint=endpoint,
                request_timeout=request_timeout,
                conversion_timeout=conversion_timeout,
            )
        self._config: ClientConfiguration = config
        self._transport: RestClient = (
            transport if transport is not None else RestClient(timeout=config.request_timeout_seconds)
        )

        logger.debug("Instantiate ConversionClient:\n%s", str(self))

    def __str__(self) -> str:
        info = "ConversionClient:\n"
        info += f" endpoint: {self._config.endpoint}\n"
        info += f" request_timeout: {self._config.request_timeout}ms\n"
        info += f" conversion_timeout: {self._config.conversion_timeout}s\n"
        return info

    @property
    def config(self) -> ClientConfiguration:
        return self._config

    @property
    def endpoint(self) -> Optional[str]:
        return self._config.endpoint

    def _require_endpoint(self) -> str:
        if not self._config.endpoint:
            raise ConfigurationError("Error: Missing endpoint")
        return self._config.endpoint

    def convert(
        self,
        parameters: Mapping[str, Any],
        cancel_event: Optional[threading.Event] = None,
    ) -> ConversionStatus:
        """
        Submits a conversion and waits for it to finish.

        Parameters
        ----------
        parameters : Mapping[str, Any]
            Request parameters: `input` ("upload" or "download"), `file` or `url`, and
            optionally `token`, `callbackUrl`, `username`, `password` and service options.
        cancel_event : threading.Event, optional
            Setting this event stops polling with ConversionCancelledError.

        Returns
        -------
        ConversionStatus
            The last status seen: `processed`, or any non-error state when `callbackUrl`
            was given.

        Raises
        ------
        ConfigurationError
            If the endpoint or a required parameter is missing.
        SubmissionError
            If the service did not accept the submission.
        ConversionFailedError
            If the service reports the conversion as failed or a poll is rejected.
        ConversionTimeoutError
            If the conversion timeout elapses.
        ConversionCancelledError
            If `cancel_event` is set while waiting.
        ConnectivityError
            If the service cannot be reached.
        """
        handle, request = self.submit(parameters)
        return self.wait_for_completion(handle, request, cancel_event=cancel_event)

    def submit(self, parameters: Mapping[str, Any]) -> Tuple[JobHandle, ConversionRequest]:
        """
        Validates the parameters and posts the conversion request.

        Returns
        -------
        Tuple[JobHandle, ConversionRequest]
            The handle issued by the service and the validated request.
        """
        endpoint = self._require_endpoint()
        request = ConversionRequest.from_parameters(parameters)

        payload = request.payload
        if isinstance(payload, FileSubmission):
            body, content_type = build_multipart_body(payload.fields, payload.path)
        else:
            body, content_type = build_urlencoded_body(payload.fields), FORM_URLENCODED

        logger.info(f"Submitting {request.input_type.value} conversion to {endpoint}")
        response = self._transport.post(endpoint, body, content_type, auth=request.auth)
        job_uuid = self._parse_submission(response)
        logger.info(f"Conversion submitted with uuid {job_uuid}")

        return JobHandle(uuid=job_uuid, endpoint=endpoint), request

    @staticmethod
    def _parse_submission(response: TransportResponse) -> str:
        if response.status_code != 200:
            raise SubmissionError(
                f"Error uploading file:\n Server returned response\n{response.status_code}",
                response=response.text,
                status_code=response.status_code,
            )
        try:
            content = response.json()
        except ValueError as err:
            raise SubmissionError(
                "Error uploading file:\n Server returned a response that is not JSON",
                response=response.text,
                status_code=response.status_code,
            ) from err

        job_uuid = content.get("uuid") if isinstance(content, dict) else None
        if not job_uuid:
            raise SubmissionError(
                "Error uploading file:\n Server response did not contain a uuid",
                response=response.text,
                status_code=response.status_code,
            )
        return str(job_uuid)

    def poll_status(self, handle: JobHandle, auth: Optional[AuthBase] = None) -> ConversionStatus:
        """
        Fetches the current status of a conversion once.

        Parameters
        ----------
        handle : JobHandle
            Handle returned by `submit`. Must come from this client's endpoint.
        auth : requests.auth.AuthBase, optional
            Authentication to send with the poll.

        Raises
        ------
        ConfigurationError
            If the handle was issued by another endpoint.
        StatusPollError
            If the service answers with a non-200 status or a body that is not a JSON object.
        ConnectivityError
            If the service cannot be reached.
        """
        endpoint = self._require_endpoint()
        if handle.endpoint != endpoint:
            raise ConfigurationError(
                f"Error: Job {handle.uuid} belongs to {handle.endpoint}, not {endpoint}"
            )

        response = self._transport.get(endpoint, params={"uuid": handle.uuid}, auth=auth)
        if response.status_code != 200:
            raise StatusPollError(
                f"Error checking conversion status:\n Server returned response\n{response.status_code}",
                response=response.text,
                status_code=response.status_code,
            )
        try:
            content = response.json()
        except ValueError as err:
            raise StatusPollError(
                "Error checking conversion status:\n Server returned a response that is not JSON",
                response=response.text,
                status_code=response.status_code,
            ) from err
        if not isinstance(content, dict):
            raise StatusPollError(
                "Error checking conversion status:\n Server returned an unexpected response",
                response=response.text,
                status_code=response.status_code,
            )

        return ConversionStatus.from_response(content)

    def _wait(self, cancel_event: Optional[threading.Event]) -> None:
        interval = self._config.poll_interval
        if cancel_event is None:
            time.sleep(interval)
        elif cancel_event.wait(interval):
            raise ConversionCancelledError("Conversion polling was cancelled")

    def wait_for_completion(
        self,
        handle: JobHandle,
        request: ConversionRequest,
        cancel_event: Optional[threading.Event] = None,
    ) -> ConversionStatus:
        """
        Polls the conversion status once per poll interval until a terminal state.

        An `error` state always fails the conversion. A `processed` state, or any other
        state when the request registered a `callbackUrl`, ends polling successfully.
        With a conversion timeout of N seconds the N+1th poll is the last one.

        Parameters
        ----------
        handle : JobHandle
            Handle returned by `submit`.
        request : ConversionRequest
            The submitted request; supplies credentials and the callback flag.
        cancel_event : threading.Event, optional
            Setting this event stops polling with ConversionCancelledError.

        Returns
        -------
        ConversionStatus
            The last status seen.
        """
        conversion_timeout = self._config.conversion_timeout
        polls = 0
        while True:
            self._wait(cancel_event)

            status = self.poll_status(handle, auth=request.auth)
            logger.debug(f"Conversion {handle.uuid} poll {polls}: state='{status.state.value}'")

            if status.state == ConversionState.ERROR:
                logger.error(f"Conversion {handle.uuid} failed")
                raise ConversionFailedError("Failed: Error with conversion", response=status.to_dict())

            if status.state == ConversionState.PROCESSED or request.has_callback:
                logger.info(f"Conversion {handle.uuid} finished with state '{status.state.value}'")
                return status

            if self._config.has_conversion_timeout and polls >= conversion_timeout:
                raise ConversionTimeoutError(
                    f"Failed: File took longer than {conversion_timeout} seconds to convert.",
                    response=status.to_dict(),
                )

            polls += 1

    def download_results(
        self,
        results: ConversionStatus,
        output_dir: str,
        file_name: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> str:
        """
        Downloads the archive of a finished conversion using this client's transport.

        See `conversion_client.client.download.download_results`.
        """
        return download_results(
            results,
            output_dir,
            file_name=file_name,
            username=username,
            password=password,
            transport=self._transport,
        )

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "ConversionClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
