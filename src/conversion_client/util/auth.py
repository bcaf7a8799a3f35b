# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Optional

from requests.auth import HTTPBasicAuth


def basic_auth(username: Optional[str], password: Optional[str]) -> Optional[HTTPBasicAuth]:
    """
    Builds Basic authentication for requests, or None unless both values are non-empty.

    Credentials are encoded as UTF-8 before they reach `requests`, which would otherwise
    encode `str` credentials as latin-1.

    Parameters
    ----------
    username : Optional[str]
        The account name.
    password : Optional[str]
        The account password.

    Returns
    -------
    Optional[HTTPBasicAuth]
        Authentication to pass as `auth=` on a request.
    """
    if not username or not password:
        return None

    return HTTPBasicAuth(username.encode("utf-8"), password.encode("utf-8"))
