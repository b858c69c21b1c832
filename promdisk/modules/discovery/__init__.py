"""
Discovery Module - Black Box Interface

Purpose: Find the clusters and pods a run should probe
Interface: discover_configs(), list_pods(), filter_pods(), PodRef, PodDiscoveryError
Hidden: Directory walking, pod name filtering
"""

from .discovery import PodDiscoveryError, PodRef, discover_configs, filter_pods, list_pods

__all__ = ["PodDiscoveryError", "PodRef", "discover_configs", "filter_pods", "list_pods"]
