# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import click
import pytest

from conversion_client.cli.util.click import click_validate_file_exists
from conversion_client.cli.util.click import click_validate_params
from conversion_client.cli.util.click import click_validate_timeout


def test_click_validate_file_exists(tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(b"%PDF")

    assert click_validate_file_exists(None, None, str(path)) == str(path)
    assert click_validate_file_exists(None, None, None) is None

    with pytest.raises(click.BadParameter):
        click_validate_file_exists(None, None, str(tmp_path / "missing.pdf"))


def test_click_validate_params():
    options = click_validate_params(None, None, ("format=png", "scale=1.5", "empty=", "format=jpg", "url=a=b"))
    assert options == {"format": "jpg", "scale": "1.5", "empty": "", "url": "a=b"}
    assert click_validate_params(None, None, ()) == {}


@pytest.mark.parametrize("entry", ["novalue", "=value", " =x"])
def test_click_validate_params_rejects_malformed(entry):
    with pytest.raises(click.BadParameter):
        click_validate_params(None, None, (entry,))


def test_click_validate_timeout():
    assert click_validate_timeout(None, None, None) is None
    assert click_validate_timeout(None, None, 1000) == 1000
    with pytest.raises(click.BadParameter):
        click_validate_timeout(None, None, 0)
