"""
Shared pytest fixtures for promdisk tests.

This module provides common fixtures including:
- KubectlMocker: Mock kubectl subprocess calls with canned responses
- Kubeconfig directory builders
- Config singleton and environment isolation
"""

import os
import re
import sys
import threading
from dataclasses import dataclass
from typing import List, Optional, Pattern, Union
from unittest.mock import MagicMock, patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from promdisk.modules.config import reset_config


# =============================================================================
# Kubectl Mocking Infrastructure
# =============================================================================

@dataclass
class KubectlResponse:
    """Represents a mocked kubectl command response."""
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    raises: Optional[BaseException] = None

    def to_completed_process(self) -> MagicMock:
        """Convert to a subprocess.CompletedProcess-like mock."""
        if self.raises is not None:
            raise self.raises
        result = MagicMock()
        result.stdout = self.stdout
        result.stderr = self.stderr
        result.returncode = self.returncode
        return result


@dataclass
class KubectlCall:
    """Record of a kubectl call made during testing."""
    command: List[str]
    full_command_str: str
    kubeconfig: Optional[str] = None
    timeout: Optional[int] = None
    matched_pattern: Optional[str] = None


class KubectlMocker:
    """
    Mock kubectl subprocess calls with pattern-matched responses.

    Responses can be scoped to one kubeconfig, so a single test can
    simulate several clusters. Calls may arrive from probe worker
    threads, so history is guarded by a lock.

    Usage:
        def test_probe(kubectl_mocker):
            kubectl_mocker.register("df -h", KubectlResponse(
                stdout="/dev/sda1 10G 8G 2G 80% /prometheus\\n"
            ), kubeconfig="/kube/a.yaml")

            result = prober.probe(PodRef("/kube/a.yaml", "prometheus-k8s-0"))

            assert kubectl_mocker.was_called_with("du -sh")
    """

    def __init__(self):
        self._responses = []
        self._call_history: List[KubectlCall] = []
        self._lock = threading.Lock()
        self._default_response = KubectlResponse(
            stderr="Error: mock not configured for this command",
            returncode=1
        )

    def register(
        self,
        pattern: Union[str, Pattern],
        response: KubectlResponse,
        kubeconfig: Optional[str] = None,
        priority: int = 0
    ) -> "KubectlMocker":
        """
        Register a response for commands matching the pattern.

        Args:
            pattern: String (substring match) or regex pattern
            response: KubectlResponse to return when matched
            kubeconfig: Only match calls made with this KUBECONFIG
            priority: Higher priority patterns are checked first

        Returns:
            self for chaining
        """
        self._responses.append((pattern, kubeconfig, response, priority))
        # Sort by priority (highest first)
        self._responses.sort(key=lambda x: x[3], reverse=True)
        return self

    def register_scenario(self, scenario_name: str, root: str) -> "KubectlMocker":
        """
        Register all responses for a named scenario.

        Args:
            scenario_name: One of the predefined scenario names
            root: Kubeconfig directory the scenario's clusters live in
        """
        from fixtures.kubectl_scenarios import get_scenario, get_scenario_names

        if scenario_name not in get_scenario_names():
            raise ValueError(
                f"Unknown scenario: {scenario_name}. "
                f"Available: {get_scenario_names()}"
            )

        for kubeconfig, pattern, response in get_scenario(scenario_name, root):
            self.register(pattern, response, kubeconfig=kubeconfig)

        return self

    def set_default_response(self, response: KubectlResponse) -> "KubectlMocker":
        """Set the default response for unmatched commands."""
        self._default_response = response
        return self

    def mock_run(
        self,
        cmd: List[str],
        capture_output: bool = True,
        text: bool = True,
        timeout: Optional[int] = None,
        env: Optional[dict] = None,
        **kwargs
    ) -> MagicMock:
        """
        Mock implementation of subprocess.run for kubectl commands.

        This method is used as a side_effect for patching subprocess.run.
        """
        cmd_str = " ".join(cmd)
        if cmd[0] != "kubectl":
            raise RuntimeError(f"Non-kubectl command blocked: {cmd_str}")

        kubeconfig = (env or {}).get("KUBECONFIG")
        kubectl_args = " ".join(cmd[1:])
        matched_pattern = None
        response = self._default_response

        for pattern, scope, resp, _ in self._responses:
            if scope is not None and scope != kubeconfig:
                continue
            if isinstance(pattern, str):
                if pattern in kubectl_args:
                    matched_pattern = pattern
                    response = resp
                    break
            else:  # Compiled regex
                if pattern.search(kubectl_args):
                    matched_pattern = pattern.pattern
                    response = resp
                    break

        with self._lock:
            self._call_history.append(KubectlCall(
                command=cmd,
                full_command_str=cmd_str,
                kubeconfig=kubeconfig,
                timeout=timeout,
                matched_pattern=matched_pattern,
            ))

        return response.to_completed_process()

    @property
    def calls(self) -> List[KubectlCall]:
        """Get all kubectl calls made during the test."""
        with self._lock:
            return list(self._call_history)

    @property
    def call_count(self) -> int:
        """Get the number of kubectl calls made."""
        return len(self.calls)

    def was_called_with(self, pattern: str) -> bool:
        """Check if any call contained the given pattern."""
        return any(pattern in call.full_command_str for call in self.calls)

    def get_calls_matching(self, pattern: str) -> List[KubectlCall]:
        """Get all calls containing the given pattern."""
        return [c for c in self.calls if pattern in c.full_command_str]


def exec_pattern(pod: str, command: str) -> Pattern:
    """Regex matching `kubectl exec <pod> ... <command>`."""
    return re.compile(rf"^exec {re.escape(pod)} .*{re.escape(command)}")


@pytest.fixture
def kubectl_mocker():
    """
    Fixture that provides a KubectlMocker with subprocess.run patched.
    """
    mocker = KubectlMocker()
    with patch("subprocess.run", side_effect=mocker.mock_run):
        yield mocker


# =============================================================================
# Filesystem and Config Fixtures
# =============================================================================

@pytest.fixture
def kubeconfig_dir(tmp_path):
    """
    Build a kubeconfig directory tree.

    Returns a callable taking relative file names and returning the
    directory path; the files are created empty.
    """
    root = tmp_path / "kube"
    root.mkdir()

    def _build(*names: str) -> str:
        for name in names:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("apiVersion: v1\nkind: Config\n")
        return str(root)

    return _build


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Isolate tests from promdisk environment variables and the config singleton."""
    for name in (
        "KUBECONFIG_DIR",
        "KUBECONFIG_SUFFIX",
        "TARGET_NAMESPACE",
        "TARGET_CONTAINER",
        "POD_PATTERN",
        "COMMAND_TIMEOUT",
        "MAX_WORKERS",
        "LOG_LEVEL",
        "WEBHOOK_URL",
        "WEBHOOK_TIMEOUT",
        "SPECIAL_KUBECONFIGS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
