# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from setuptools import find_packages
from setuptools import setup


def get_version():
    version_file = os.path.join(os.path.dirname(__file__), "src", "version.py")
    namespace = {}
    with open(version_file) as f:
        # Execute the content of version.py
        exec(f.read(), namespace)
    return namespace["get_version"]()


setup(
    description="Python client for asynchronous document conversion microservices",
    license="Apache-2.0",
    name="conversion-client",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    version=get_version(),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.0",
        "requests>=2.28",
        "urllib3>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "conversion-cli=conversion_client.conversion_cli:main",
        ],
    },
)
