"""
Tests for the local CV bucket.
"""
import pytest

from covercraft.services import storage_service


def test_upload_and_read_back(cv_bucket):
    key = storage_service.upload_cv(3, "resume.pdf", b"%PDF-1.7 data")

    assert key.startswith("3/")
    assert key.endswith("_resume.pdf")
    assert storage_service.read_cv(key) == b"%PDF-1.7 data"
    assert (cv_bucket / key).is_file()


def test_key_uses_basename_only():
    key = storage_service.build_cv_key(5, "../../etc/passwd")

    assert key.startswith("5/")
    assert key.endswith("_passwd")
    assert ".." not in key


def test_read_rejects_keys_outside_bucket(cv_bucket):
    cv_bucket.mkdir(parents=True, exist_ok=True)

    with pytest.raises(ValueError):
        storage_service.read_cv("../outside.txt")
