# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from .job_spec import ConversionRequest
from .job_spec import FileSubmission
from .job_spec import InputType
from .job_spec import SubmissionPayload
from .job_spec import UrlSubmission
from .job_state import ConversionState
from .job_state import ConversionStatus
from .job_state import JobHandle

__all__ = [
    "ConversionRequest",
    "ConversionState",
    "ConversionStatus",
    "FileSubmission",
    "InputType",
    "JobHandle",
    "SubmissionPayload",
    "UrlSubmission",
]
