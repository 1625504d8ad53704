"""Exceptions raised by the secret registration workflow."""


class UsageError(Exception):
    """No secrets file was supplied."""
    pass


class RegistrationError(Exception):
    """The registry client failed to set a secret."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to register {key}: {reason}")


class SecretListError(Exception):
    """The registry client failed to list secret names."""
    pass
