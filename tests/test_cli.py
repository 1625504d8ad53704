"""Tests for the secretctl and register-secrets entrypoints."""
import json
import subprocess

import pytest

from secret_registrar.cli import main as cli


class FakeGh:
    """Stands in for subprocess.run, recording gh invocations."""

    def __init__(self, fail_keys=(), list_returncode=0):
        self.commands = []
        self.registered = {}
        self.fail_keys = set(fail_keys)
        self.list_returncode = list_returncode

    def __call__(self, cmd, input=None, **kwargs):
        self.commands.append(cmd)
        action = cmd[2]
        if action == "set":
            key = cmd[3]
            if key in self.fail_keys:
                return subprocess.CompletedProcess(cmd, 1, "", "HTTP 422\n")
            self.registered[key] = input
            return subprocess.CompletedProcess(cmd, 0, "", "")
        if action == "list":
            if self.list_returncode:
                return subprocess.CompletedProcess(cmd, self.list_returncode, "", "not authenticated")
            names = [{"name": name} for name in self.registered]
            return subprocess.CompletedProcess(cmd, 0, json.dumps(names), "")
        raise AssertionError(f"unexpected gh command: {cmd}")


@pytest.fixture
def fake_gh(monkeypatch, temp_home):
    gh = FakeGh()
    monkeypatch.setattr(subprocess, "run", gh)
    return gh


def _exit_code(func, argv):
    with pytest.raises(SystemExit) as exc_info:
        func(argv)
    return exc_info.value.code


class TestRegisterSecretsEntrypoint:

    def test_registers_file(self, fake_gh, secrets_file, capsys):
        path = secrets_file("# c\nAPI_KEY=abc123\nDB_PASS = p@ss=word\nBAD\n")

        assert _exit_code(cli.register_main, [path]) == 0

        assert fake_gh.registered == {"API_KEY": "abc123", "DB_PASS": "p@ss=word"}
        out = capsys.readouterr().out
        assert "✓ API_KEY registered" in out
        assert "Registered secrets:\nAPI_KEY\nDB_PASS" in out

    def test_missing_argument_exits_1(self, fake_gh, capsys):
        assert _exit_code(cli.register_main, []) == 1
        assert "Usage:" in capsys.readouterr().out
        assert fake_gh.commands == []

    def test_missing_argument_reported_before_broken_config(self, fake_gh, temp_config_dir, capsys):
        (temp_config_dir / "config.yml").write_text("invalid: yaml: content: [")

        assert _exit_code(cli.register_main, []) == 1

        captured = capsys.readouterr()
        assert "Usage:" in captured.out
        assert "Error:" not in captured.err
        assert fake_gh.commands == []

    def test_missing_file_exits_1(self, fake_gh, tmp_path):
        assert _exit_code(cli.register_main, [str(tmp_path / "missing.txt")]) == 1
        assert fake_gh.commands == []

    def test_failed_entry_still_exits_0(self, monkeypatch, temp_home, secrets_file, capsys):
        gh = FakeGh(fail_keys={"B"})
        monkeypatch.setattr(subprocess, "run", gh)

        assert _exit_code(cli.register_main, [secrets_file("A=1\nB=2\nC=3\n")]) == 0

        assert list(gh.registered) == ["A", "C"]
        assert "✗ B registration failed" in capsys.readouterr().out

    def test_repo_flag_passed_to_gh(self, fake_gh, secrets_file):
        _exit_code(cli.register_main, [secrets_file("A=1\n"), "--repo", "octo/repo"])

        for cmd in fake_gh.commands:
            assert cmd[-2:] == ["--repo", "octo/repo"]

    def test_repo_from_config(self, fake_gh, temp_config_dir, secrets_file):
        (temp_config_dir / "config.yml").write_text("github:\n  repo: cfg/repo\n  env: prod\n")

        _exit_code(cli.register_main, [secrets_file("A=1\n")])

        assert fake_gh.commands[0] == ["gh", "secret", "set", "A", "--repo", "cfg/repo", "--env", "prod"]

    def test_flag_overrides_config(self, fake_gh, temp_config_dir, secrets_file):
        (temp_config_dir / "config.yml").write_text("github:\n  repo: cfg/repo\n")

        _exit_code(cli.register_main, [secrets_file("A=1\n"), "--repo", "flag/repo"])

        assert fake_gh.commands[0][-2:] == ["--repo", "flag/repo"]

    def test_invalid_repo_exits_2(self, fake_gh, secrets_file):
        assert _exit_code(cli.register_main, [secrets_file("A=1\n"), "--repo", "no-owner"]) == 2
        assert fake_gh.commands == []

    def test_config_error_exits_1(self, fake_gh, temp_config_dir, secrets_file, capsys):
        (temp_config_dir / "config.yml").write_text("github:\n  app: pages\n")

        assert _exit_code(cli.register_main, [secrets_file("A=1\n")]) == 1
        assert "Error:" in capsys.readouterr().err
        assert fake_gh.commands == []

    def test_dry_run_sets_nothing(self, fake_gh, secrets_file, capsys):
        assert _exit_code(cli.register_main, [secrets_file("A=1\n"), "--dry-run"]) == 0

        assert [cmd[2] for cmd in fake_gh.commands] == ["list"]
        out = capsys.readouterr().out
        assert "Dry run" in out
        assert "✓ A registered" in out


class TestSecretctl:

    def test_no_command_exits_2(self, fake_gh):
        assert _exit_code(cli.main, []) == 2

    def test_register_subcommand(self, fake_gh, secrets_file):
        assert _exit_code(cli.main, ["register", secrets_file("A=1\n")]) == 0
        assert fake_gh.registered == {"A": "1"}

    def test_register_without_file_exits_1(self, fake_gh):
        assert _exit_code(cli.main, ["register"]) == 1

    def test_list(self, fake_gh, capsys):
        fake_gh.registered = {"X": "1", "Y": "2"}

        cli.main(["list"])

        assert capsys.readouterr().out.split() == ["X", "Y"]

    def test_list_failure_exits_1(self, monkeypatch, temp_home, capsys):
        monkeypatch.setattr(subprocess, "run", FakeGh(list_returncode=1))

        assert _exit_code(cli.main, ["list"]) == 1
        assert "not authenticated" in capsys.readouterr().err

    def test_version(self, fake_gh, capsys):
        cli.main(["version"])
        assert capsys.readouterr().out.startswith("secret-registrar ")

    def test_config_without_subcommand_exits_2(self, fake_gh):
        assert _exit_code(cli.main, ["config"]) == 2
