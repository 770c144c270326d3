"""Secure credential storage for node daemon secrets.

Stores daemon shared secrets in the OS keychain so config files only hold
a reference key (credential_key).

Key format: node:{node_name}:daemon
"""

from __future__ import annotations

__all__ = [
    "NodeCredentialStorage",
    "get_credential_storage",
    "load_credential",
]

from daemon_bridge.constants import APP_NAME

# Service name for keyring storage
KEYRING_SERVICE = APP_NAME


class NodeCredentialStorage:
    """Keychain storage for one node's daemon credential.

    Usage:
        storage = NodeCredentialStorage("node-1")
        storage.save("s3cr3t")
        token = storage.load()
    """

    def __init__(self, node_name: str) -> None:
        self._node_name = node_name
        self._service = KEYRING_SERVICE
        self._username = f"node:{node_name}:daemon"

    @property
    def credential_key(self) -> str:
        """Key stored in bridge.json instead of the credential itself."""
        return self._username

    def save(self, credential: str) -> None:
        """Save credential to keychain.

        Raises:
            RuntimeError: If keychain access fails.
        """
        import keyring
        from keyring.errors import KeyringError

        try:
            keyring.set_password(self._service, self._username, credential)
        except KeyringError as e:
            raise RuntimeError(f"Failed to save credential to keychain: {e}") from e

    def load(self) -> str | None:
        """Load credential from keychain.

        Returns:
            The stored credential, or None if not found.

        Raises:
            RuntimeError: If keychain access fails.
        """
        return load_credential(self._username)

    def delete(self) -> None:
        """Delete credential from keychain.

        Raises:
            RuntimeError: If keychain access fails.
        """
        import keyring
        from keyring.errors import KeyringError, PasswordDeleteError

        try:
            keyring.delete_password(self._service, self._username)
        except PasswordDeleteError:
            pass
        except KeyringError as e:
            raise RuntimeError(f"Failed to delete credential from keychain: {e}") from e


def get_credential_storage(node_name: str) -> NodeCredentialStorage:
    """Get credential storage for a node."""
    return NodeCredentialStorage(node_name)


def load_credential(credential_key: str) -> str | None:
    """Load a credential by its keychain key.

    Args:
        credential_key: Key as stored in NodeConfig.credential_key.

    Returns:
        The stored credential, or None if not found.

    Raises:
        RuntimeError: If keychain access fails.
    """
    import keyring
    from keyring.errors import KeyringError

    try:
        return keyring.get_password(KEYRING_SERVICE, credential_key)
    except KeyringError as e:
        raise RuntimeError(f"Failed to access keychain: {e}") from e
