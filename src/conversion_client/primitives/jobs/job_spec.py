# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import logging
import os
from enum import Enum
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from requests.auth import HTTPBasicAuth

from conversion_client.errors import ConfigurationError
from conversion_client.util.auth import basic_auth

logger = logging.getLogger(__name__)

INPUT_PARAM = "input"
FILE_PARAM = "file"
URL_PARAM = "url"
CALLBACK_URL_PARAM = "callbackUrl"
USERNAME_PARAM = "username"
PASSWORD_PARAM = "password"


class InputType(str, Enum):
    """
    Enum for the ways a document can reach the conversion service.

    Attributes
    ----------
    UPLOAD : str
        The client uploads a local file.
    DOWNLOAD : str
        The service downloads the document from a URL.
    """

    UPLOAD = "upload"
    DOWNLOAD = "download"


class FileSubmission(BaseModel):
    """
    A local file to be uploaded as multipart/form-data.

    `fields` holds every form parameter except the file itself and the credentials.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    fields: Dict[str, str] = Field(default_factory=dict)


class UrlSubmission(BaseModel):
    """
    A remote document the service downloads itself, posted as a url-encoded form.

    `fields` holds every form parameter, including `url`, except the credentials.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    fields: Dict[str, str] = Field(default_factory=dict)


SubmissionPayload = Union[FileSubmission, UrlSubmission]


class ConversionRequest(BaseModel):
    """
    A validated conversion request.

    Parameters
    ----------
    input_type : InputType
        How the document reaches the service.
    payload : SubmissionPayload
        The file or url variant selected during validation.
    auth : Optional[HTTPBasicAuth]
        Basic authentication built from the `username` / `password` parameters.
    has_callback : bool
        True when the caller registered a `callbackUrl`, in which case polling stops after
        the first non-error status.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    input_type: InputType
    payload: SubmissionPayload
    auth: Optional[HTTPBasicAuth] = Field(default=None, repr=False)
    has_callback: bool = False

    @property
    def fields(self) -> Dict[str, str]:
        return dict(self.payload.fields)

    @classmethod
    def from_parameters(cls, parameters: Optional[Mapping[str, Any]]) -> "ConversionRequest":
        """
        Validates raw request parameters and selects the submission variant.

        The caller's mapping is not modified.

        Parameters
        ----------
        parameters : Mapping[str, Any]
            Parameter name to value. Values are converted to strings.

        Returns
        -------
        ConversionRequest
            The validated request.

        Raises
        ------
        ConfigurationError
            If parameters are empty, `input` is missing or unknown, or the `file` / `url`
            required by the input type is missing. Upload files must exist.
        """
        if not parameters:
            raise ConfigurationError("Error: Missing parameters")

        params = {str(key): "" if value is None else str(value) for key, value in parameters.items()}

        username = params.pop(USERNAME_PARAM, None)
        password = params.pop(PASSWORD_PARAM, None)
        auth = basic_auth(username, password)
        if auth is None and (username or password):
            logger.warning("Both username and password are required for authentication; ignoring credentials.")

        raw_input = params.get(INPUT_PARAM)
        if not raw_input:
            raise ConfigurationError("Error: Missing input")
        try:
            input_type = InputType(raw_input)
        except ValueError as err:
            valid = ", ".join(item.value for item in InputType)
            raise ConfigurationError(f"Error: Invalid input '{raw_input}', expected one of: {valid}") from err

        has_callback = CALLBACK_URL_PARAM in params

        if input_type == InputType.UPLOAD:
            file_path = params.pop(FILE_PARAM, "")
            if not file_path:
                raise ConfigurationError("Error: Missing file")
            if not os.path.isfile(file_path):
                raise ConfigurationError(f"Error: File not found: {file_path}")
            payload = FileSubmission(path=file_path, fields=params)
        else:
            if not params.get(URL_PARAM):
                raise ConfigurationError("Error: Missing url")
            payload = UrlSubmission(url=params[URL_PARAM], fields=params)

        return cls(
            input_type=input_type,
            payload=payload,
            auth=auth,
            has_callback=has_callback,
        )
