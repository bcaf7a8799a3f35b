# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0


import json
import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from typing import Dict
from typing import Optional

import click

from conversion_client.cli.util.click import LogLevel
from conversion_client.cli.util.click import click_validate_file_exists
from conversion_client.cli.util.click import click_validate_params
from conversion_client.cli.util.click import click_validate_timeout
from conversion_client.cli.util.system import configure_logging
from conversion_client.cli.util.system import ensure_output_directory
from conversion_client.client import ConversionClient
from conversion_client.config import ClientConfiguration
from conversion_client.config import ServiceProduct
from conversion_client.errors import ClientError
from conversion_client.primitives.jobs import InputType

try:
    CONVERSION_CLIENT_VERSION = distribution_version("conversion-client")
except PackageNotFoundError:
    CONVERSION_CLIENT_VERSION = "Unknown -- No Distribution found."

logger = logging.getLogger(__name__)


def _resolve_endpoint(endpoint: str, base_url: str, product: str) -> Optional[str]:
    if endpoint:
        return endpoint
    if base_url and product:
        return ServiceProduct(product).endpoint(base_url)
    if base_url or product:
        raise click.UsageError("--base_url and --product must be given together.")
    return None


@click.command()
@click.option("--endpoint", default=None, help="URL of the conversion microservice. Overrides --base_url/--product.")
@click.option("--base_url", default=None, help="Base URL of the host running the microservice.")
@click.option(
    "--product",
    type=click.Choice([product.value for product in ServiceProduct], case_sensitive=False),
    default=None,
    help="Microservice to use together with --base_url.",
)
@click.option(
    "--input",
    "input_type",
    type=click.Choice([item.value for item in InputType], case_sensitive=False),
    default=InputType.UPLOAD.value,
    show_default=True,
    help="Upload a local file, or have the service download a URL.",
)
@click.option(
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default=None,
    help="Local file to upload (with --input upload).",
    callback=click_validate_file_exists,
)
@click.option("--url", default=None, help="Document URL for the service to download (with --input download).")
@click.option("--token", default=None, help="Service token.")
@click.option("--callback_url", default=None, help="URL the service notifies on completion; returns after one poll.")
@click.option("--username", default=None, help="Basic auth user for the service.")
@click.option("--password", default=None, help="Basic auth password for the service.")
@click.option(
    "--param",
    multiple=True,
    callback=click_validate_params,
    help="Service specific conversion option as key=value (supports multiple).",
)
@click.option(
    "--request_timeout",
    default=None,
    type=int,
    callback=click_validate_timeout,
    help="Timeout for each HTTP request in milliseconds. [default: 60000]",
)
@click.option(
    "--conversion_timeout",
    default=None,
    type=int,
    help="Seconds to wait for the conversion; <= 0 waits indefinitely. [default: -1]",
)
@click.option("--output_directory", type=click.Path(), default=None, help="Directory to download the result into.")
@click.option("--file_name", default=None, help="Base name of the downloaded archive ('.zip' is appended).")
@click.option(
    "--log_level",
    type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Log level.",
)
@click.option("--version", is_flag=True, help="Show version.")
@click.pass_context
def main(
    ctx,
    endpoint: str,
    base_url: str,
    product: str,
    input_type: str,
    file_path: str,
    url: str,
    token: str,
    callback_url: str,
    username: str,
    password: str,
    param: Dict[str, str],
    request_timeout: int,
    conversion_timeout: int,
    output_directory: str,
    file_name: str,
    log_level: str,
    version: bool,
):
    if version:
        click.echo(f"conversion-cli : {CONVERSION_CLIENT_VERSION}")
        return

    configure_logging(logger, log_level)
    logger.debug(
        "conversion-cli:params:\n%s",
        json.dumps({k: v for k, v in ctx.params.items() if k != "password"}, indent=2, default=repr),
    )

    parameters = dict(param)
    parameters["input"] = input_type.lower()
    if file_path:
        parameters["file"] = file_path
    if url:
        parameters["url"] = url
    if token:
        parameters["token"] = token
    if callback_url:
        parameters["callbackUrl"] = callback_url
    if username:
        parameters["username"] = username
    if password:
        parameters["password"] = password

    try:
        config = ClientConfiguration.from_env(
            endpoint=_resolve_endpoint(endpoint, base_url, product),
            request_timeout=request_timeout,
            conversion_timeout=conversion_timeout,
        )
        if output_directory:
            ensure_output_directory(output_directory)

        with ConversionClient(config=config) as client:
            results = client.convert(parameters)
            click.echo(f"State: {results.state.value or 'unknown'}")
            if results.preview_url:
                click.echo(f"Preview URL: {results.preview_url}")

            if output_directory:
                output_path = client.download_results(
                    results, output_directory, file_name=file_name, username=username, password=password
                )
                click.echo(f"Downloaded: {output_path}")
    except (ClientError, OSError) as err:
        logger.error(f"Error: {err}")
        raise click.ClickException(str(err)) from err


if __name__ == "__main__":
    main()
