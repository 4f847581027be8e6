from __future__ import annotations

from pathlib import Path

import pytest

from fx_glance.errors import CredentialError, InvalidCredentialError, MissingCredentialError
from fx_glance.ingestion.credentials import load_credential, validate_credential

VALID_KEY = "0123456789abcdef0123456789abcdef"


def test_load_credential_trims_whitespace(tmp_path: Path) -> None:
    key_file = tmp_path / "api_key.txt"
    key_file.write_text(f"  {VALID_KEY}\n", encoding="utf-8")

    credential = load_credential(key_file)

    assert credential.value == VALID_KEY
    assert credential.source == key_file.resolve()


def test_load_credential_missing_file_points_at_path(tmp_path: Path) -> None:
    key_file = tmp_path / "api_key.txt"

    with pytest.raises(MissingCredentialError) as excinfo:
        load_credential(key_file)

    assert str(key_file.resolve()) in str(excinfo.value)
    assert excinfo.value.path == key_file.resolve()


def test_load_credential_empty_file(tmp_path: Path) -> None:
    key_file = tmp_path / "api_key.txt"
    key_file.write_text("   \n", encoding="utf-8")

    with pytest.raises(MissingCredentialError):
        load_credential(key_file)


@pytest.mark.parametrize("length", [31, 33, 1, 64])
def test_validate_credential_rejects_wrong_length(length: int) -> None:
    with pytest.raises(InvalidCredentialError, match=f"found {length}"):
        validate_credential("k" * length, Path("api_key.txt"))


def test_credential_errors_share_base_class(tmp_path: Path) -> None:
    with pytest.raises(CredentialError):
        load_credential(tmp_path / "absent.txt")
