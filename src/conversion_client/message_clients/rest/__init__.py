# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from .rest_client import RestClient
from .rest_client import TransportResponse

__all__ = ["RestClient", "TransportResponse"]
