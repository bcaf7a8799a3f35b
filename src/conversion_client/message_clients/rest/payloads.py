# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Wire payload builders for conversion submissions.

File uploads are sent as multipart/form-data with one binary part; url submissions are
sent as application/x-www-form-urlencoded.
"""

import logging
import os
import uuid
from typing import Mapping
from typing import Optional
from typing import Tuple
from urllib.parse import urlencode

from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from conversion_client.errors import ConfigurationError

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"
TEXT_PART_CONTENT_TYPE = "text/plain; charset=UTF-8"
FALLBACK_FILE_CONTENT_TYPE = "application/octet-stream"


def generate_boundary() -> str:
    """Returns a random multipart boundary token."""
    return uuid.uuid4().hex


def content_type_for_file(file_path: str) -> str:
    """
    Derives the declared content type of an uploaded file from its extension.

    "report.pdf" maps to "application/pdf". Files without an extension map to
    "application/octet-stream".
    """
    _, ext = os.path.splitext(os.path.basename(file_path))
    ext = ext.lstrip(".")
    if not ext:
        return FALLBACK_FILE_CONTENT_TYPE
    return f"application/{ext}"


def build_multipart_body(
    fields: Mapping[str, str],
    file_path: str,
    file_field: str = "file",
    boundary: Optional[str] = None,
) -> Tuple[bytes, str]:
    """
    Encodes form fields and one file as a multipart/form-data body.

    Parameters
    ----------
    fields : Mapping[str, str]
        Text parameters, each sent as a `text/plain; charset=UTF-8` part.
    file_path : str
        Path of the file to upload. Sent under `file_field` with its base name as the filename.
    file_field : str, optional
        Form name of the file part. Default is "file".
    boundary : str, optional
        Boundary token. A random token is generated when omitted.

    Returns
    -------
    Tuple[bytes, str]
        The encoded body and the matching `Content-Type` header value.

    Raises
    ------
    ConfigurationError
        If the file cannot be read.
    """
    boundary = boundary or generate_boundary()

    parts = []
    for name, value in fields.items():
        part = RequestField(name=name, data=str(value).encode("utf-8"))
        part.make_multipart(content_type=TEXT_PART_CONTENT_TYPE)
        parts.append(part)

    try:
        with open(file_path, "rb") as f:
            file_data = f.read()
    except OSError as err:
        raise ConfigurationError(f"Error creating request for file upload: {file_path}") from err

    file_part = RequestField(name=file_field, data=file_data, filename=os.path.basename(file_path))
    file_part.make_multipart(content_type=content_type_for_file(file_path))
    parts.append(file_part)

    body, content_type = encode_multipart_formdata(parts, boundary=boundary)
    logger.debug(f"Built multipart body of {len(body)} bytes with {len(parts)} parts")

    return body, content_type


def build_urlencoded_body(fields: Mapping[str, str]) -> bytes:
    """
    Encodes form fields as an application/x-www-form-urlencoded body.

    Keys and values are percent-encoded as UTF-8 and joined as `key=value` pairs with `&`.
    """
    return urlencode([(str(key), str(value)) for key, value in fields.items()], encoding="utf-8").encode("utf-8")
