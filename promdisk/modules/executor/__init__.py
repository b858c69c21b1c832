"""
Executor Module - Black Box Interface

Purpose: Run kubectl against one cluster at a time
Interface: run_kubectl(), exec_in_pod(), get_pod_names(), KubectlError
Hidden: subprocess handling, KUBECONFIG scoping, timeout handling

Can be replaced with different execution mechanisms (direct K8s API client).
"""

from .kubectl import DEFAULT_TIMEOUT, KubectlError, exec_in_pod, get_pod_names, run_kubectl

__all__ = ["DEFAULT_TIMEOUT", "KubectlError", "exec_in_pod", "get_pod_names", "run_kubectl"]
