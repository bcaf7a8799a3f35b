# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from pydantic import ValidationError

from conversion_client.primitives.jobs import ConversionState
from conversion_client.primitives.jobs import ConversionStatus
from conversion_client.primitives.jobs import JobHandle


def test_status_from_processed_response():
    payload = {
        "state": "processed",
        "downloadUrl": "https://example.com/output/job.zip",
        "previewUrl": "https://example.com/output/job/index.html",
        "settings": {"mode": "content"},
    }

    status = ConversionStatus.from_response(payload)

    assert status.state == ConversionState.PROCESSED
    assert status.download_url == "https://example.com/output/job.zip"
    assert status.preview_url == "https://example.com/output/job/index.html"
    assert status.to_dict() == payload
    assert status["settings"] == {"mode": "content"}
    assert "previewUrl" in status


@pytest.mark.parametrize("payload", [{}, {"state": None}, {"state": "queued"}])
def test_status_with_missing_or_unknown_state(payload):
    status = ConversionStatus.from_response(payload)

    assert status.state == ConversionState.UNKNOWN
    assert status.download_url is None


def test_error_state_keeps_payload():
    status = ConversionStatus.from_response({"state": "error", "error": "bad"})

    assert status.state == ConversionState.ERROR
    assert status.get("error") == "bad"
    assert status.get("missing", "default") == "default"


def test_to_dict_returns_copy():
    status = ConversionStatus.from_response({"state": "processing"})
    status.to_dict()["state"] = "processed"
    assert status["state"] == "processing"


def test_job_handle_is_immutable():
    handle = JobHandle(uuid="abc", endpoint="https://example.com/buildvu")
    with pytest.raises(ValidationError):
        handle.uuid = "other"
