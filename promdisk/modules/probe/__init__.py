"""
Probe Module - Black Box Interface

Purpose: Measure Prometheus disk usage inside each pod
Interface: DiskProber.probe(), DiskProber.probe_all(), get_commands(), ProbeResult
Hidden: Per-cluster command variants, thread pool, result queue
"""

from .probe import (
    COMMAND_VARIANTS,
    DEFAULT_DF_COMMAND,
    DU_COMMAND,
    MOUNT_FIRST_DF_COMMAND,
    MOUNT_FIRST_KUBECONFIGS,
    DiskProber,
    ProbeResult,
    command_variant,
    get_commands,
)

__all__ = [
    "COMMAND_VARIANTS",
    "DEFAULT_DF_COMMAND",
    "DU_COMMAND",
    "MOUNT_FIRST_DF_COMMAND",
    "MOUNT_FIRST_KUBECONFIGS",
    "DiskProber",
    "ProbeResult",
    "command_variant",
    "get_commands",
]
