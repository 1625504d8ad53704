"""Input validation for CLI arguments."""
import sys

from secret_registrar.secrets.domains.config_loader import REPO_PATTERN


def validate_repo(repo: str) -> None:
    """
    Validate a --repo value is in OWNER/REPO form.

    Args:
        repo: Repository selector to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not REPO_PATTERN.match(repo or ""):
        print(f"Error: Invalid repository '{repo}'", file=sys.stderr)
        print("\nExpected format: OWNER/REPO", file=sys.stderr)
        print("\nExamples:", file=sys.stderr)
        print("  ✓ octo-org/octo-repo", file=sys.stderr)
        print("  ✗ octo-repo (missing owner)", file=sys.stderr)
        print("  ✗ https://github.com/octo-org/octo-repo (use OWNER/REPO, not a URL)", file=sys.stderr)
        sys.exit(2)
