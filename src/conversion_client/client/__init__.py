# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from conversion_client.client.client import ConversionClient
from conversion_client.client.download import download_results
from conversion_client.client.download import resolve_output_path

__all__ = ["ConversionClient", "download_results", "resolve_output_path"]
