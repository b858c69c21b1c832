"""Kubeconfig and pod discovery."""

import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Union

from promdisk.modules.config import DEFAULT_POD_PATTERN
from promdisk.modules.executor import DEFAULT_TIMEOUT, KubectlError, get_pod_names

logger = logging.getLogger(__name__)


class PodDiscoveryError(Exception):
    """Listing pods for one kubeconfig failed."""

    def __init__(self, kubeconfig: str, cause: Exception):
        super().__init__(f"Failed to list pods for kubeconfig {kubeconfig}: {cause}")
        self.kubeconfig = kubeconfig
        self.cause = cause


@dataclass(frozen=True)
class PodRef:
    """A pod to probe, identified by the kubeconfig that reaches it."""

    config: str
    pod: str


def discover_configs(directory: str, suffix: str = ".yaml") -> List[str]:
    """
    Walk a directory tree and collect kubeconfig file paths.

    Walk errors are logged and skipped; everything readable is still returned.
    Paths come back in lexical walk order.
    """

    def _on_error(error: OSError) -> None:
        logger.error(f"Failed to walk {error.filename}: {error.strerror or error}")

    configs = []
    for root, dirnames, filenames in os.walk(directory, onerror=_on_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(root, name)
            if name.endswith(suffix) and os.path.isfile(path):
                configs.append(path)

    logger.info(f"Found {len(configs)} kubeconfig file(s) under {directory}")
    return configs


def filter_pods(pods: List[str], pattern: Union[str, Pattern, None] = None) -> List[str]:
    """Keep the pod names matching the pattern, preserving order."""
    if pattern is None:
        pattern = DEFAULT_POD_PATTERN
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return [pod for pod in pods if regex.search(pod)]


def list_pods(
    kubeconfig: str,
    namespace: str,
    pattern: Union[str, Pattern, None] = None,
    timeout: Optional[int] = DEFAULT_TIMEOUT,
) -> List[str]:
    """
    List the pods of one cluster that should be probed.

    Raises:
        PodDiscoveryError: If kubectl could not list the namespace
    """
    try:
        names = get_pod_names(kubeconfig, namespace, timeout=timeout)
    except KubectlError as e:
        raise PodDiscoveryError(kubeconfig, e) from e

    pods = filter_pods(names, pattern)
    logger.debug(f"{kubeconfig}: {len(pods)} matching pod(s) of {len(names)} listed")
    return pods
