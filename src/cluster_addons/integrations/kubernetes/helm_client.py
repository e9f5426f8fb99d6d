"""Helm CLI wrapper.

Runs the ``helm`` binary via subprocess for the operations add-on
installation needs: version probing, repository registration and
update, ``upgrade --install`` and ``uninstall``.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

import structlog

from cluster_addons.integrations.kubernetes.exceptions import KubernetesError
from cluster_addons.integrations.kubernetes.models.helm import HelmCommandResult, HelmRepo

logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

HELM_TIMEOUT_SECONDS = 300
VERSION_TIMEOUT_SECONDS = 10
SHORT_TIMEOUT_SECONDS = 30

# Printed by ``helm repo list`` when nothing is configured; exit code is 1
NO_REPOS_MARKER = "no repositories to show"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class HelmError(KubernetesError):
    """Base exception for Helm operations."""

    def __init__(
        self,
        message: str,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message=message)
        self.stderr = stderr


class HelmBinaryNotFoundError(HelmError):
    """Raised when the helm binary is not found."""

    def __init__(self, binary_path: str | None = None) -> None:
        location = f"at {binary_path}" if binary_path else "in PATH"
        super().__init__(
            message=(
                f"helm binary not found {location}. "
                "Install from: https://helm.sh/docs/intro/install/"
            ),
        )


class HelmCommandError(HelmError):
    """Raised when a helm command exits non-zero."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class HelmClient:
    """Client for the Helm CLI."""

    def __init__(self, binary_path: str | None = None) -> None:
        """Locate the helm binary.

        Args:
            binary_path: Explicit path to helm. If None, searches PATH.

        Raises:
            HelmBinaryNotFoundError: If the binary cannot be found.
        """
        self._binary = self._find_binary(binary_path)
        self._log = logger.bind(binary=self._binary)
        self._log.debug("helm_client_initialized")

    @staticmethod
    def _find_binary(binary_path: str | None) -> str:
        if binary_path:
            path = Path(binary_path).expanduser()
            if not path.exists():
                raise HelmBinaryNotFoundError(binary_path)
            return str(path.resolve())

        found = shutil.which("helm")
        if not found:
            raise HelmBinaryNotFoundError()
        return found

    def _run(
        self,
        args: list[str],
        *,
        timeout: int = HELM_TIMEOUT_SECONDS,
    ) -> subprocess.CompletedProcess[str]:
        """Run a helm command.

        Args:
            args: Command arguments without the ``helm`` prefix.
            timeout: Timeout in seconds.

        Raises:
            HelmCommandError: On non-zero exit.
            HelmError: On timeout.
        """
        cmd = [self._binary, *args]
        self._log.debug("running_helm_command", args=_redact(args))

        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=timeout,
            )
        except subprocess.CalledProcessError as e:
            detail = e.stderr.strip() if e.stderr else f"exit code {e.returncode}"
            raise HelmCommandError(
                message=f"Helm command failed: {detail}",
                stderr=e.stderr,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise HelmError(
                message=f"Helm command timed out after {timeout}s",
            ) from e

    # -----------------------------------------------------------------------
    # Version
    # -----------------------------------------------------------------------

    def get_version(self) -> str:
        """Get the helm client version (e.g. ``v3.17.0``)."""
        result = self._run(["version", "--short"], timeout=VERSION_TIMEOUT_SECONDS)
        version = result.stdout.strip()
        # "v3.17.0+g301108e" -> "v3.17.0"
        if "+" in version:
            version = version.split("+")[0]
        return version

    # -----------------------------------------------------------------------
    # Releases
    # -----------------------------------------------------------------------

    def upgrade(
        self,
        release_name: str,
        chart: str,
        *,
        namespace: str | None = None,
        values_files: list[str] | None = None,
        set_values: list[str] | None = None,
        version: str | None = None,
        install: bool = False,
    ) -> HelmCommandResult:
        """Upgrade a release, optionally installing it when absent.

        Args:
            release_name: Name of the release.
            chart: Chart reference (repo/chart, path, or URL).
            namespace: Target namespace.
            values_files: Values files, passed as ``--values``.
            set_values: ``key=value`` overrides, passed as ``--set``.
            version: Chart version constraint.
            install: Install if the release doesn't exist (``--install``).
        """
        args = ["upgrade", release_name, chart]
        if install:
            args.append("--install")
        if namespace:
            args.extend(["--namespace", namespace])
        if version:
            args.extend(["--version", version])
        for f in values_files or []:
            args.extend(["--values", f])
        for v in set_values or []:
            args.extend(["--set", v])

        result = self._run(args)
        self._log.info("helm_upgrade_success", release=release_name, chart=chart)
        return HelmCommandResult(success=True, stdout=result.stdout, stderr=result.stderr)

    def uninstall(
        self,
        release_name: str,
        *,
        namespace: str | None = None,
        keep_history: bool = False,
    ) -> HelmCommandResult:
        """Uninstall a release."""
        args = ["uninstall", release_name]
        if namespace:
            args.extend(["--namespace", namespace])
        if keep_history:
            args.append("--keep-history")

        result = self._run(args)
        self._log.info("helm_uninstall_success", release=release_name)
        return HelmCommandResult(success=True, stdout=result.stdout, stderr=result.stderr)

    # -----------------------------------------------------------------------
    # Repositories
    # -----------------------------------------------------------------------

    def repo_add(
        self,
        name: str,
        url: str,
        *,
        username: str | None = None,
        password: str | None = None,
    ) -> HelmCommandResult:
        """Add a chart repository.

        Credentials are only passed when given.
        """
        args = ["repo", "add", name, url]
        if username:
            args.extend(["--username", username])
        if password:
            args.extend(["--password", password])

        result = self._run(args, timeout=SHORT_TIMEOUT_SECONDS)
        self._log.info("helm_repo_added", name=name, url=url)
        return HelmCommandResult(success=True, stdout=result.stdout, stderr=result.stderr)

    def repo_list(self) -> list[HelmRepo]:
        """List configured chart repositories.

        An empty repository list makes helm exit 1; that case returns ``[]``.
        """
        try:
            result = self._run(["repo", "list", "--output", "json"], timeout=SHORT_TIMEOUT_SECONDS)
        except HelmCommandError as e:
            if e.stderr and NO_REPOS_MARKER in e.stderr.lower():
                return []
            raise

        try:
            data = json.loads(result.stdout) if result.stdout.strip() else []
        except json.JSONDecodeError as e:
            raise HelmCommandError(
                message=f"Unparseable helm repo list output: {e}",
                stderr=result.stderr,
            ) from e
        return [HelmRepo.from_json(entry) for entry in data]

    def repo_update(self, names: list[str] | None = None) -> HelmCommandResult:
        """Update chart repository indexes (all when ``names`` is empty)."""
        args = ["repo", "update"]
        if names:
            args.extend(names)

        result = self._run(args, timeout=SHORT_TIMEOUT_SECONDS)
        self._log.info("helm_repo_updated", repos=names or "all")
        return HelmCommandResult(success=True, stdout=result.stdout, stderr=result.stderr)


def _redact(args: list[str]) -> list[str]:
    """Hide the value following ``--password`` in logged arguments."""
    redacted: list[str] = []
    hide_next = False
    for arg in args:
        redacted.append("***" if hide_next else arg)
        hide_next = arg == "--password"
    return redacted
