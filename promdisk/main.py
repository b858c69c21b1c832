"""
promdisk - Main Entry Point

This is the thin orchestration layer that:
1. Discovers kubeconfig files and Prometheus pods
2. Probes every pod concurrently
3. Ranks, prints and delivers the report

All business logic is in the modules, following black box principles.
"""

import logging
from dataclasses import dataclass
from typing import List

from promdisk.modules.config import ConfigModule
from promdisk.modules.discovery import PodDiscoveryError, PodRef, discover_configs, list_pods
from promdisk.modules.notify import WebhookError, WebhookMessage, send_to_webhook
from promdisk.modules.probe import DiskProber
from promdisk.modules.report import build_rows, render_table, sort_rows

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """What a single run produced."""

    table: str
    clusters: int
    pods: int
    rows: int
    delivered: bool


def collect_pod_refs(config: ConfigModule, kubeconfigs: List[str]) -> List[PodRef]:
    """List matching pods for every kubeconfig. A failing cluster contributes none."""
    refs = []
    for kubeconfig in kubeconfigs:
        try:
            pods = list_pods(
                kubeconfig,
                config.get("namespace"),
                pattern=config.get("pod_pattern"),
                timeout=config.get("command_timeout"),
            )
        except PodDiscoveryError as e:
            logger.error(str(e))
            continue
        refs.extend(PodRef(kubeconfig, pod) for pod in pods)
    return refs


def deliver(config: ConfigModule, table: str) -> bool:
    """Post the table to the webhook. Failures are logged, never raised."""
    webhook_url = config.get("webhook_url")
    if not webhook_url:
        logger.info("No webhook URL configured, skipping delivery")
        return False

    try:
        send_to_webhook(
            webhook_url,
            WebhookMessage.from_text(table),
            timeout=config.get("webhook_timeout"),
        )
    except WebhookError as e:
        logger.error(f"Failed to send report to webhook: {e}")
        return False

    logger.info("Report sent to webhook")
    return True


def run(config: ConfigModule, send: bool = True) -> RunSummary:
    """Run one full inventory pass and print the table to stdout."""
    kubeconfigs = discover_configs(config.get("kubeconfig_dir"), config.get("config_suffix"))
    refs = collect_pod_refs(config, kubeconfigs)

    prober = DiskProber(
        namespace=config.get("namespace"),
        container=config.get("container"),
        timeout=config.get("command_timeout"),
        special_configs=config.get("special_kubeconfigs", []),
    )
    results = prober.probe_all(refs, max_workers=config.get("max_workers"))

    rows = sort_rows(build_rows(results))
    logger.info(f"{len(rows)} of {len(results)} probe(s) produced a report row")

    table = render_table(rows)
    print(table)

    delivered = deliver(config, table) if send else False
    return RunSummary(
        table=table,
        clusters=len(kubeconfigs),
        pods=len(refs),
        rows=len(rows),
        delivered=delivered,
    )
