"""GitHub secret registry client wrapper around the gh CLI."""
import json
import logging
import subprocess
from typing import List, Optional, Protocol

from .errors import RegistrationError, SecretListError

logger = logging.getLogger(__name__)


class SecretRegistryClient(Protocol):
    """Pre-authenticated capability that stores and lists secrets."""

    def register_secret(self, key: str, value: str) -> None:
        ...

    def list_secret_names(self) -> List[str]:
        ...


class GitHubSecretClient:
    """Wrapper around `gh secret` commands."""

    def __init__(
        self,
        repo: Optional[str] = None,
        env: Optional[str] = None,
        app: Optional[str] = None,
        gh_path: str = "gh",
    ):
        self.repo = repo
        self.env = env
        self.app = app
        self.gh_path = gh_path

    @classmethod
    def from_settings(cls, settings: dict) -> "GitHubSecretClient":
        """Build a client from the 'github' config section."""
        return cls(
            repo=settings.get("repo"),
            env=settings.get("env"),
            app=settings.get("app"),
            gh_path=settings.get("gh_path") or "gh",
        )

    def _scope_args(self) -> List[str]:
        args = []
        if self.repo:
            args.extend(["--repo", self.repo])
        if self.env:
            args.extend(["--env", self.env])
        if self.app:
            args.extend(["--app", self.app])
        return args

    def _run(self, args: List[str], input_data: Optional[str] = None) -> subprocess.CompletedProcess:
        cmd = [self.gh_path, "secret", *args, *self._scope_args()]
        logger.debug(f"Running: {' '.join(cmd)}")
        return subprocess.run(
            cmd,
            input=input_data,
            capture_output=True,
            text=True,
            check=False
        )

    def register_secret(self, key: str, value: str) -> None:
        """
        Create or overwrite a secret.

        The value is fed on stdin so it never shows up in the process list.

        Raises:
            RegistrationError: If gh is missing or exits non-zero
        """
        try:
            result = self._run(["set", key], input_data=value)
        except OSError as e:
            raise RegistrationError(key, f"could not run {self.gh_path}: {e}")

        if result.returncode != 0:
            reason = result.stderr.strip() or f"{self.gh_path} exited with code {result.returncode}"
            raise RegistrationError(key, reason)

    def list_secret_names(self) -> List[str]:
        """
        List registered secret names. Values are never readable.

        Raises:
            SecretListError: If gh is missing, exits non-zero or returns bad JSON
        """
        try:
            result = self._run(["list", "--json", "name"])
        except OSError as e:
            raise SecretListError(f"could not run {self.gh_path}: {e}")

        if result.returncode != 0:
            reason = result.stderr.strip() or f"{self.gh_path} exited with code {result.returncode}"
            raise SecretListError(reason)

        try:
            secrets = json.loads(result.stdout or "[]")
            return [s["name"] for s in secrets]
        except (json.JSONDecodeError, TypeError, KeyError) as e:
            raise SecretListError(f"unexpected output from {self.gh_path} secret list: {e}")


class DryRunSecretClient:
    """Reports what would be registered without touching the registry."""

    def __init__(self, client: SecretRegistryClient):
        self._client = client

    def register_secret(self, key: str, value: str) -> None:
        logger.info(f"[dry-run] Would set secret {key}")

    def list_secret_names(self) -> List[str]:
        return self._client.list_secret_names()
