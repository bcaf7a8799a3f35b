# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import datetime
import os
import re


def get_version():
    release_type = os.getenv("CONVERSION_CLIENT_RELEASE_TYPE", "dev")
    version = os.getenv("CONVERSION_CLIENT_VERSION")
    rev = os.getenv("CONVERSION_CLIENT_REV", "0")

    if not version:
        version = f"{datetime.datetime.now().strftime('%Y.%m.%d')}"

    # We only check this for dev, we assume for release the user knows what they are doing
    if release_type != "release":
        pep440_regex = r"^\d{4}\.\d{1,2}\.\d{1,2}$"
        if not re.match(pep440_regex, version):
            raise ValueError(f"Version '{version}' is not PEP 440 compatible")

    if release_type == "dev":
        # A zero rev becomes a date stamp so dev builds stay ordered
        if int(rev) == 0:
            rev = datetime.datetime.now().strftime("%Y%m%d")
        final_version = f"{version}.dev{rev}"
    elif release_type == "release":
        final_version = f"{version}.post{rev}" if int(rev) > 0 else version
    else:
        raise ValueError(f"Invalid release type: {release_type}")

    return final_version
