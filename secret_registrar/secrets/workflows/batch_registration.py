"""Workflow that registers every entry of a secrets file."""
import logging
import os
from typing import Iterable, List, Optional, TextIO

from ..domains.errors import RegistrationError, SecretListError, UsageError
from ..domains.gh_client import SecretRegistryClient
from ..domains.models import BatchReport, RegistrationResult, SecretEntry
from ..domains.parser import parse_definitions

logger = logging.getLogger(__name__)

RULE = "==========================================="
USAGE = "Usage: register-secrets <secrets_file>"


class SecretBatchRegistrar:
    """
    Register secrets from a key=value file, one external call per entry.

    Entries are processed strictly in file order, so a key declared twice ends
    up with its last value. Per-entry failures are reported and the batch
    continues; only a missing argument or an unreadable file stops the run.
    """

    def __init__(self, client: SecretRegistryClient, out: Optional[TextIO] = None):
        self.client = client
        self._out = out

    def _print(self, message: str = "") -> None:
        print(message, file=self._out)

    def run(self, file_path: Optional[str]) -> int:
        """
        Process a secrets file and print the report.

        Args:
            file_path: Path to the definitions file

        Returns:
            0 once the file is fully processed (even if some entries failed),
            1 if no path was given or the file cannot be opened or decoded
        """
        try:
            lines = self._read_lines(file_path)
        except UsageError:
            self._print(USAGE)
            return 1
        except FileNotFoundError:
            self._print(f"File not found: {file_path}")
            return 1
        except UnicodeDecodeError as e:
            self._print(f"Cannot read {file_path}: not valid UTF-8 (byte {e.start})")
            return 1

        self._print(f"Registering secrets from: {file_path}")
        self._print(RULE)

        report = self.process(lines)

        self._print(RULE)
        self._print(f"Finished processing secrets: {report.succeeded} succeeded, {report.failed} failed")
        self._print()
        self._print("Registered secrets:")
        for name in report.registered_names:
            self._print(name)

        return 0

    def _read_lines(self, file_path: Optional[str]) -> List[str]:
        """Read the whole file up front so a decode error stops the run before any registration."""
        if not file_path:
            raise UsageError("No secrets file supplied")

        if not os.path.isfile(file_path):
            raise FileNotFoundError(file_path)

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.readlines()
        except OSError as e:
            logger.warning(f"Cannot read {file_path}: {e}")
            raise FileNotFoundError(file_path) from e

    def process(self, lines: Iterable[str]) -> BatchReport:
        """
        Register every entry parsed from lines, then fetch the registered names.

        Blank, comment and malformed lines produce no call and no output.
        """
        report = BatchReport()

        for entry in parse_definitions(lines):
            report.results.append(self._register(entry))

        report.registered_names = self._list_names()
        return report

    def _register(self, entry: SecretEntry) -> RegistrationResult:
        self._print(f"Registering: {entry.key}")
        try:
            self.client.register_secret(entry.key, entry.value)
        except RegistrationError as e:
            logger.warning(str(e))
            self._print(f"✗ {entry.key} registration failed")
            self._print("---")
            return RegistrationResult(key=entry.key, succeeded=False, error=e.reason)

        self._print(f"✓ {entry.key} registered")
        self._print("---")
        return RegistrationResult(key=entry.key, succeeded=True)

    def _list_names(self) -> List[str]:
        try:
            return list(self.client.list_secret_names())
        except SecretListError as e:
            logger.warning(f"Failed to list secrets: {e}")
            return []
