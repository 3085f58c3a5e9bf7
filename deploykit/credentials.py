"""Loading of signing keys and RPC gateway secrets from local files."""

import json
from pathlib import Path
from typing import Union

from deploykit.errors import ConfigurationError, CredentialError
from deploykit.models import CredentialHandle, InfuraSecrets

PathLike = Union[str, Path]


def load_signing_key(path: PathLike) -> CredentialHandle:
    """
    Load the signing key from a one-line secret file.

    The file is read on every call. The first line is trimmed and may carry a
    0x prefix.

    Args:
        path: Path to the secret file (usually ``.devkey``)

    Returns:
        CredentialHandle wrapping the key

    Raises:
        CredentialError: If the file is absent, unreadable, empty or not a key
    """
    key_path = Path(path)
    try:
        text = key_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CredentialError(f"Secret file not found: {key_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialError(f"Failed to read secret file {key_path}: {e}") from e

    lines = text.strip().splitlines()
    privkey_str = lines[0].strip() if lines else ""
    if not privkey_str:
        raise CredentialError(f"Secret file is empty: {key_path}")

    # Remove 0x prefix if present
    if privkey_str.lower().startswith("0x"):
        privkey_str = privkey_str[2:]

    try:
        private_key_bytes = bytes.fromhex(privkey_str)
    except ValueError as e:
        raise CredentialError(f"Secret file {key_path} does not contain a hex private key") from e

    return CredentialHandle(private_key_bytes, source=str(key_path))


def load_infura_secrets(path: PathLike) -> InfuraSecrets:
    """Load ``infuraProjectId`` and ``infuraSecret`` from a JSON secrets file."""
    secrets_path = Path(path)
    try:
        data = json.loads(secrets_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Secrets file not found: {secrets_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read secrets file {secrets_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Secrets file {secrets_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Secrets file {secrets_path} must contain a JSON object")

    values = {}
    for key in ("infuraProjectId", "infuraSecret"):
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"Secrets file {secrets_path} is missing {key!r}")
        values[key] = value.strip()

    return InfuraSecrets(project_id=values["infuraProjectId"], secret=values["infuraSecret"])
