"""CLI entrypoints for secret-registrar."""
import sys
import argparse
import logging

from secret_registrar import __version__
from .validators import validate_repo

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)

EPILOG = """
Exit codes:
  0 - Secrets file processed (individual registrations may still have failed)
  1 - Runtime error (missing secrets file, config error, gh failure on list)
  2 - Usage error (invalid arguments, invalid repository format)

Secrets file format:
  KEY=VALUE         one secret per line, split on the first '='
  # comment         ignored, as are blank lines

Configuration:
  Default location: ~/.config/secret-registrar/config.yml
  Custom path: --config <path>

Authentication is handled by gh; run 'gh auth login' first.
"""


def _build_client(args):
    """Create the registry client from config plus command-line overrides."""
    from secret_registrar.secrets.domains.config_loader import load_config
    from secret_registrar.secrets.domains.gh_client import DryRunSecretClient, GitHubSecretClient

    settings = load_config(args.config)["github"]

    for name in ("repo", "env", "app"):
        override = getattr(args, name, None)
        if override:
            settings[name] = override

    client = GitHubSecretClient.from_settings(settings)
    if getattr(args, "dry_run", False):
        return DryRunSecretClient(client)
    return client


def _apply_verbosity(args):
    if getattr(args, "verbose", False):
        logging.getLogger().setLevel(logging.DEBUG)


def cmd_register(args):
    """Register every secret in a key=value file."""
    from secret_registrar.secrets.workflows.batch_registration import USAGE, SecretBatchRegistrar

    # Checked before any config is loaded
    if not args.secrets_file:
        print(USAGE)
        sys.exit(1)

    if args.repo:
        validate_repo(args.repo)

    client = _build_client(args)
    if args.dry_run:
        print("Dry run: no secrets will be changed")

    sys.exit(SecretBatchRegistrar(client).run(args.secrets_file))


def cmd_list(args):
    """Print the names of registered secrets."""
    from secret_registrar.secrets.domains.errors import SecretListError

    if args.repo:
        validate_repo(args.repo)

    client = _build_client(args)
    try:
        names = client.list_secret_names()
    except SecretListError as e:
        print(f"Error: Failed to list secrets: {e}", file=sys.stderr)
        sys.exit(1)

    for name in names:
        print(name)


def cmd_config_show(args):
    """Show which config file is in effect and its github settings."""
    from secret_registrar.secrets.domains.config_loader import default_config_path, load_config

    config = load_config(args.config)

    if config["path"]:
        print(f"Config path: {config['path']}")
        print(f"Source: {config['source']}")
    else:
        print(f"Config path: {default_config_path()}")
        print("Source: builtin (file not found)")

    for name, value in config["github"].items():
        print(f"  {name}: {value if value is not None else '(unset)'}")


def cmd_version(args):
    """Show version information."""
    print(f"secret-registrar {__version__}")


def _add_config_argument(parser):
    parser.add_argument(
        "--config",
        help="Path to config file (default: ~/.config/secret-registrar/config.yml)"
    )


def _add_registry_arguments(parser):
    _add_config_argument(parser)
    parser.add_argument(
        "--repo",
        help="Target repository as OWNER/REPO (default: repository of the current directory)"
    )
    parser.add_argument(
        "--env",
        help="Register environment secrets for this deployment environment"
    )
    parser.add_argument(
        "--app",
        choices=["actions", "codespaces", "dependabot"],
        help="Application the secrets belong to (default: actions)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging on stderr"
    )


def _add_register_arguments(parser):
    # Optional here so a missing file reaches the registrar's own usage handling (exit 1)
    parser.add_argument(
        "secrets_file",
        nargs="?",
        help="Path to a KEY=VALUE secrets file"
    )
    _add_registry_arguments(parser)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be registered without changing any secret"
    )


def _dispatch(handler, args):
    """Run a command handler with the shared error handling."""
    from secret_registrar.secrets.domains.config_loader import ConfigError

    _apply_verbosity(args)
    try:
        handler(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def register_main(argv=None):
    """Entrypoint for `register-secrets <secrets_file>`."""
    parser = argparse.ArgumentParser(
        prog="register-secrets",
        description="Register GitHub secrets from a KEY=VALUE file using the gh CLI",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    _add_register_arguments(parser)

    args = parser.parse_args(argv)
    _dispatch(cmd_register, args)


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (missing file, config error, listing failed)
        2 - Usage errors (invalid arguments, invalid repository format)
    """
    parser = argparse.ArgumentParser(
        prog="secretctl",
        description="secret-registrar CLI - register repository secrets in bulk via gh",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    _version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of secret-registrar"
    )

    # register command
    register_parser = subparsers.add_parser(
        "register",
        help="Register secrets from a file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Register every KEY=VALUE line of a secrets file as a repository secret.

Behavior:
  1. Blank lines and lines starting with '#' are ignored
  2. Each line is split on the first '='; key and value are trimmed
  3. Lines with an empty key or value are skipped silently
  4. Each secret is set with 'gh secret set', one at a time, in file order
  5. The registered secret names are listed at the end

A failed registration is reported and the remaining lines are still processed.
        """
    )
    _add_register_arguments(register_parser)

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List registered secret names",
        description="List the names of registered secrets (values are never readable)"
    )
    _add_registry_arguments(list_parser)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Inspect secret-registrar configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config show command
    config_show_parser = config_subparsers.add_parser(
        "show",
        help="Show effective configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Display the configuration file in use and the resulting github settings.

Sources:
  - argument: Path given with --config
  - default: Default XDG location (~/.config/secret-registrar/config.yml)
  - builtin: No config file; built-in defaults apply
        """
    )
    _add_config_argument(config_show_parser)

    args = parser.parse_args(argv)

    # If no command provided, show help and exit with usage error code
    if not args.command:
        parser.print_help()
        sys.exit(2)

    # Route to command handlers
    if args.command == "version":
        _dispatch(cmd_version, args)
    elif args.command == "register":
        _dispatch(cmd_register, args)
    elif args.command == "list":
        _dispatch(cmd_list, args)
    elif args.command == "config":
        if args.config_command == "show":
            _dispatch(cmd_config_show, args)
        else:
            config_parser.print_help()
            sys.exit(2)
    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
