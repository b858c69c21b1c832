"""
Disk probes run inside Prometheus containers.

Each probe runs a ``df`` command for the capacity line of the
``/prometheus`` mount, then a ``du`` command for the size of the TSDB
directory. Probes never raise: a failure is logged and turned into a
ProbeResult with empty fields, which the report stage drops.
"""

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from promdisk.modules.discovery import PodRef
from promdisk.modules.executor import DEFAULT_TIMEOUT, KubectlError, exec_in_pod

logger = logging.getLogger(__name__)

# Listed clusters select the /prometheus line first and drop the filesystem column.
MOUNT_FIRST_DF_COMMAND = "df -h | grep -w /prometheus | awk '{print $2, $3, $4, $5, $6}'"
DEFAULT_DF_COMMAND = "df -h | awk '{print $1, $2, $3, $4, $5, $6}' | grep -w /prometheus"
DU_COMMAND = "du -sh /prometheus/ | awk '{print $1, $2}'"

MOUNT_FIRST_KUBECONFIGS = frozenset({
    "/root/.kube/sys/putuo-pt-rke.yaml",
    "/root/.kube/sys/stage-rke.yaml",
    "/root/.kube/sys/z-prod-ack.yaml",
    "/root/.kube/sys/z-prod-tke.yaml",
})

COMMAND_VARIANTS: Dict[str, Tuple[str, str]] = {
    "mount-first": (MOUNT_FIRST_DF_COMMAND, DU_COMMAND),
    "default": (DEFAULT_DF_COMMAND, DU_COMMAND),
}


@dataclass(frozen=True)
class ProbeResult:
    """Raw output of one probe. Empty strings mean the command failed."""

    config: str
    pod: str
    df_output: str = ""
    du_output: str = ""

    @property
    def ok(self) -> bool:
        return bool(self.df_output) and bool(self.du_output)


def command_variant(config: str, extra_special: Iterable[str] = ()) -> str:
    """Name the command variant a kubeconfig path uses."""
    if config in MOUNT_FIRST_KUBECONFIGS or config in set(extra_special):
        return "mount-first"
    return "default"


def get_commands(config: str, extra_special: Iterable[str] = ()) -> Tuple[str, str]:
    """Return the (df command, du command) pair for a kubeconfig path."""
    return COMMAND_VARIANTS[command_variant(config, extra_special)]


class DiskProber:
    """Runs df/du probes against Prometheus pods, many at a time."""

    def __init__(
        self,
        namespace: str = "monitoring",
        container: str = "prometheus",
        timeout: Optional[int] = DEFAULT_TIMEOUT,
        special_configs: Iterable[str] = (),
    ):
        self.namespace = namespace
        self.container = container
        self.timeout = timeout
        self.special_configs = frozenset(special_configs)

    def probe(self, ref: PodRef) -> ProbeResult:
        """
        Probe one pod.

        Returns:
            ProbeResult with both outputs on success, with an empty du output
            if only du failed, and with both outputs empty if df failed
        """
        df_command, du_command = get_commands(ref.config, self.special_configs)

        try:
            df_output = self._exec(ref, df_command)
        except KubectlError as e:
            logger.error(f"kubeconfig: {ref.config}, pod: {ref.pod}, df failed: {e}")
            return ProbeResult(ref.config, ref.pod)

        try:
            du_output = self._exec(ref, du_command)
        except KubectlError as e:
            logger.error(f"kubeconfig: {ref.config}, pod: {ref.pod}, du failed: {e}")
            return ProbeResult(ref.config, ref.pod, df_output, "")

        return ProbeResult(ref.config, ref.pod, df_output, du_output.strip())

    def probe_all(self, refs: List[PodRef], max_workers: int = 32) -> List[ProbeResult]:
        """
        Probe every pod concurrently and collect all outcomes.

        Results land on an unbounded queue, so workers never wait on the
        collector. Pool shutdown is the barrier: the queue is drained only
        after every probe has finished. Arrival order is preserved.
        """
        if not refs:
            return []

        results: "queue.Queue[ProbeResult]" = queue.Queue()

        def _run(ref: PodRef) -> None:
            try:
                results.put(self.probe(ref))
            except Exception as e:
                logger.exception(f"Unexpected probe failure for {ref.config}/{ref.pod}: {e}")
                results.put(ProbeResult(ref.config, ref.pod))

        workers = max(1, min(max_workers, len(refs)))
        logger.info(f"Probing {len(refs)} pod(s) with {workers} worker(s)")
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="probe") as pool:
            for ref in refs:
                pool.submit(_run, ref)

        collected = []
        while not results.empty():
            collected.append(results.get_nowait())
        return collected

    def _exec(self, ref: PodRef, command: str) -> str:
        return exec_in_pod(
            ref.config,
            self.namespace,
            ref.pod,
            self.container,
            command,
            timeout=self.timeout,
        )
