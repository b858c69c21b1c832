"""
kubectl invocation scoped to a single kubeconfig.

Every call gets its own ``KUBECONFIG`` environment so calls against
different clusters can safely run in parallel threads.
"""

import logging
import os
import subprocess
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


class KubectlError(Exception):
    """kubectl exited non-zero, timed out, or could not be started."""

    def __init__(self, message: str, stderr: str = "", return_code: int = -1):
        super().__init__(message)
        self.stderr = stderr
        self.return_code = return_code

    def __str__(self) -> str:
        text = super().__str__()
        if self.stderr:
            text += f"\nstderr: {self.stderr.strip()}"
        return text


def _kubeconfig_env(kubeconfig: str) -> Dict[str, str]:
    env = os.environ.copy()
    env["KUBECONFIG"] = kubeconfig
    return env


def run_kubectl(
    kubeconfig: str,
    args: List[str],
    timeout: Optional[int] = DEFAULT_TIMEOUT,
) -> str:
    """
    Execute a kubectl command against one cluster.

    Args:
        kubeconfig: Path to the kubeconfig file for the target cluster
        args: kubectl command arguments
        timeout: Seconds before the command is abandoned

    Returns:
        Command stdout

    Raises:
        KubectlError: If the command fails, times out or kubectl is missing
    """
    # Prepend kubectl to args
    cmd = ["kubectl"] + args
    logger.debug(f"Running: {' '.join(cmd)} (KUBECONFIG={kubeconfig})")

    try:
        process = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=_kubeconfig_env(kubeconfig),
        )
    except subprocess.TimeoutExpired:
        raise KubectlError(f"kubectl {args[0] if args else ''} timed out after {timeout}s")
    except FileNotFoundError:
        raise KubectlError("kubectl not found in PATH", return_code=127)

    if process.returncode != 0:
        raise KubectlError(
            f"kubectl {args[0] if args else ''} exited with status {process.returncode}",
            stderr=process.stderr or "",
            return_code=process.returncode,
        )

    return process.stdout


def exec_in_pod(
    kubeconfig: str,
    namespace: str,
    pod: str,
    container: str,
    command: str,
    timeout: Optional[int] = DEFAULT_TIMEOUT,
) -> str:
    """Run a shell command inside a pod container and return its stdout."""
    return run_kubectl(
        kubeconfig,
        ["exec", pod, "-n", namespace, "-c", container, "--", "/bin/sh", "-c", command],
        timeout=timeout,
    )


def get_pod_names(
    kubeconfig: str,
    namespace: str,
    timeout: Optional[int] = DEFAULT_TIMEOUT,
) -> List[str]:
    """List pod names in a namespace, header line included as kubectl prints it."""
    output = run_kubectl(
        kubeconfig,
        ["get", "pods", "-n", namespace, "-o", "custom-columns=NAME:.metadata.name"],
        timeout=timeout,
    )
    return [line.strip() for line in output.split("\n") if line.strip()]
