import logging
import sys

import click
from dotenv import load_dotenv

from promdisk.logging_config import setup_logging
from promdisk.main import run
from promdisk.modules.config import get_config


@click.command()
@click.option("--dir", "kubeconfig_dir", default=None, help="Directory holding kubeconfig files.")
@click.option("--namespace", "namespace", default=None, help="Namespace of the Prometheus pods.")
@click.option("--webhook-url", "webhook_url", default=None, help="Chat webhook receiving the report.")
@click.option("--timeout", "command_timeout", type=int, default=None, help="kubectl timeout in seconds.")
@click.option("--max-workers", "max_workers", type=int, default=None, help="Probes in flight at once.")
@click.option("--log-level", "log_level", default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL.")
@click.option("--no-send", "no_send", is_flag=True, help="Print the table without posting it.")
def main(kubeconfig_dir, namespace, webhook_url, command_timeout, max_workers, log_level, no_send):
    """Report Prometheus disk usage across clusters."""
    load_dotenv()

    try:
        config = get_config(
            {
                "kubeconfig_dir": kubeconfig_dir,
                "namespace": namespace,
                "webhook_url": webhook_url,
                "command_timeout": command_timeout,
                "max_workers": max_workers,
                "log_level": log_level,
            }
        )
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(config.get("log_level"))
    summary = run(config, send=not no_send)
    logging.getLogger("promdisk").debug(
        f"Run finished: {summary.clusters} cluster(s), {summary.pods} pod(s), {summary.rows} row(s)"
    )


if __name__ == "__main__":
    main()
