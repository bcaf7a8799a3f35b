# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import logging
import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError
from pydantic import field_validator

from conversion_client.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT_MS = 60000
NO_CONVERSION_TIMEOUT = -1
DEFAULT_POLL_INTERVAL_S = 1.0

ENV_ENDPOINT = "CONVERSION_CLIENT_ENDPOINT"
ENV_REQUEST_TIMEOUT = "CONVERSION_CLIENT_REQUEST_TIMEOUT"
ENV_CONVERSION_TIMEOUT = "CONVERSION_CLIENT_CONVERSION_TIMEOUT"


class ServiceProduct(str, Enum):
    """
    Enum for the conversion microservices the client can drive.

    Attributes
    ----------
    BUILDVU : str
        PDF to HTML5 / SVG conversion.
    JPEDAL : str
        PDF to image conversion.
    FORMVU : str
        PDF forms to HTML5 conversion.
    """

    BUILDVU = "buildvu"
    JPEDAL = "jpedal"
    FORMVU = "formvu"

    def endpoint(self, base_url: str) -> str:
        """
        Appends the product path to a service base URL.

        Parameters
        ----------
        base_url : str
            Base URL of the host running the microservice, e.g. "https://example.com".

        Returns
        -------
        str
            The conversion endpoint, e.g. "https://example.com/buildvu".
        """
        return f"{base_url.rstrip('/')}/{self.value}"


class ClientConfiguration(BaseModel):
    """
    Immutable settings for a ConversionClient.

    Parameters
    ----------
    endpoint : Optional[str]
        URL of the conversion microservice. Checked before every submission.
    request_timeout : int, default=60000
        Connect and read timeout, in milliseconds, applied to every HTTP call.
    conversion_timeout : int, default=-1
        Maximum number of seconds to poll for a result. Values <= 0 disable the timeout.
    poll_interval : float, default=1.0
        Seconds to wait before each status poll.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: Optional[str] = None
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT_MS
    conversion_timeout: int = NO_CONVERSION_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL_S

    @field_validator("endpoint")
    @classmethod
    def normalize_endpoint(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, value):
        if value <= 0:
            raise ValueError("request_timeout must be a positive number of milliseconds")
        return value

    @field_validator("poll_interval")
    @classmethod
    def validate_poll_interval(cls, value):
        if value < 0:
            raise ValueError("poll_interval must not be negative")
        return value

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout / 1000.0

    @property
    def has_conversion_timeout(self) -> bool:
        return self.conversion_timeout > 0

    @classmethod
    def create(cls, **kwargs) -> "ClientConfiguration":
        """
        Builds a configuration, reporting invalid values as ConfigurationError.
        """
        try:
            return cls(**kwargs)
        except ValidationError as err:
            raise ConfigurationError(f"Error: Invalid client configuration: {err}") from err

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfiguration":
        """
        Reads the configuration from CONVERSION_CLIENT_* environment variables.

        Keyword arguments that are not None take precedence over the environment.

        Raises
        ------
        ConfigurationError
            If a timeout variable is not an integer, or a value fails validation.
        """
        settings = {
            "endpoint": os.getenv(ENV_ENDPOINT),
            "request_timeout": _int_from_env(ENV_REQUEST_TIMEOUT, DEFAULT_REQUEST_TIMEOUT_MS),
            "conversion_timeout": _int_from_env(ENV_CONVERSION_TIMEOUT, NO_CONVERSION_TIMEOUT),
        }
        settings.update({key: value for key, value in overrides.items() if value is not None})
        logger.debug(f"Client configuration from environment: endpoint={settings['endpoint']}")

        return cls.create(**settings)


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ConfigurationError(f"Error: {name} must be an integer, got '{raw}'") from err
