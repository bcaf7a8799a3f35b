# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import logging
from enum import Enum
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import PrivateAttr
from pydantic import field_validator

logger = logging.getLogger(__name__)


class ConversionState(str, Enum):
    """
    Enumeration of the conversion states reported by the service.
    """

    PROCESSING = "processing"  # Conversion is still running.
    PROCESSED = "processed"  # Conversion finished; results can be downloaded.
    ERROR = "error"  # Conversion failed. Terminal.
    UNKNOWN = ""  # State missing from the response or not recognised.


class JobHandle(BaseModel):
    """
    Server-issued identifier of a submitted conversion.

    Attributes
    ----------
    uuid : str
        The job identifier returned by the submission.
    endpoint : str
        The endpoint that issued the identifier; the handle is only valid there.
    """

    model_config = ConfigDict(frozen=True)

    uuid: str
    endpoint: str


class ConversionStatus(BaseModel):
    """
    One decoded status poll response.

    Only `state`, `downloadUrl` and `previewUrl` are interpreted. Every other field the
    service returns is kept and available through `to_dict()` or item access.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    state: ConversionState = ConversionState.UNKNOWN
    download_url: Optional[str] = Field(default=None, alias="downloadUrl")
    preview_url: Optional[str] = Field(default=None, alias="previewUrl")

    _payload: Dict[str, Any] = PrivateAttr(default_factory=dict)

    @field_validator("state", mode="before")
    @classmethod
    def coerce_state(cls, value):
        if isinstance(value, ConversionState):
            return value
        try:
            return ConversionState(str(value) if value is not None else "")
        except ValueError:
            logger.debug(f"Unrecognised conversion state '{value}'")
            return ConversionState.UNKNOWN

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ConversionStatus":
        """
        Builds a status from a decoded JSON response body.

        Parameters
        ----------
        payload : Mapping[str, Any]
            The decoded poll response.

        Returns
        -------
        ConversionStatus
            A status that also retains the full payload.
        """
        known = {
            key: payload[key]
            for key in ("state", "downloadUrl", "previewUrl")
            if key in payload and payload[key] is not None
        }
        for key in ("downloadUrl", "previewUrl"):
            if key in known:
                known[key] = str(known[key])
        status = cls.model_validate(known)
        status._payload = dict(payload)
        return status

    def get(self, key: str, default: Any = None) -> Any:
        return self._payload.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._payload[key]

    def __contains__(self, key: object) -> bool:
        return key in self._payload

    def to_dict(self) -> Dict[str, Any]:
        """Returns a copy of the full response payload."""
        return dict(self._payload)
