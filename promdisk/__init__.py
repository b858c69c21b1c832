"""
promdisk - Prometheus disk usage report across Kubernetes clusters

Walks a directory of kubeconfig files, probes every Prometheus pod with
df and du, ranks the pods by disk usage and posts the table to a chat
webhook.

Modules:
- config: Run configuration from environment and CLI
- executor: kubectl invocation scoped to one kubeconfig
- discovery: Kubeconfig and pod discovery
- probe: Concurrent df/du probes
- report: Ranking and table rendering
- notify: Webhook delivery
"""

__version__ = "1.0.0"
