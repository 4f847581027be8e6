"""Load the openexchangerates.org App ID from disk."""

from __future__ import annotations

from pathlib import Path

from fx_glance.errors import InvalidCredentialError, MissingCredentialError
from fx_glance.ingestion.models import CREDENTIAL_LENGTH, Credential
from fx_glance.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["load_credential", "validate_credential"]


def _missing_message(path: Path) -> str:
    return (
        "Error: please provide your openexchangerates.org account's API key in\n"
        f"  {path}"
    )


def validate_credential(value: str, path: Path) -> Credential:
    """Trim ``value`` and check it is a 32 character key."""

    token = value.strip()
    if not token:
        raise MissingCredentialError(_missing_message(path), path)
    if len(token) != CREDENTIAL_LENGTH:
        raise InvalidCredentialError(
            f"{_missing_message(path)}\n"
            f"  (expected {CREDENTIAL_LENGTH} characters, found {len(token)})",
            path,
        )
    return Credential(value=token, source=path)


def load_credential(path: str | Path) -> Credential:
    """Read the API key file, raising a :class:`CredentialError` subclass on failure."""

    key_path = Path(path).resolve()
    try:
        contents = key_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingCredentialError(_missing_message(key_path), key_path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise MissingCredentialError(
            f"{_missing_message(key_path)}\n  ({exc})", key_path
        ) from exc
    credential = validate_credential(contents, key_path)
    LOGGER.debug("Loaded API key from %s", key_path)
    return credential
