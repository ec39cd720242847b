# tests/conftest.py
from typing import Any, Dict, List, Optional, Set

import pytest
from botocore.exceptions import ClientError

from offloader.models.offload_config import OffloadConfig
from offloader.services.crypto.credential_store import CredentialStore


# -----------------------------
# Test Doubles / Fakes
# -----------------------------
class FakeS3Client:
    """Records put/delete calls; keys in ``fail_keys`` raise AccessDenied."""

    def __init__(self, fail_keys: Optional[Set[str]] = None):
        self.fail_keys = set(fail_keys or ())
        self.put_calls: List[Dict[str, Any]] = []
        self.delete_calls: List[Dict[str, Any]] = []
        self.objects: Dict[str, bytes] = {}

    def _maybe_fail(self, key: str, operation: str):
        if key in self.fail_keys:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                operation,
            )

    def put_object(self, Bucket: str, Key: str, Body, ContentType: str):
        body = Body.read()
        self.put_calls.append(
            {"bucket": Bucket, "key": Key, "body": body, "content_type": ContentType}
        )
        self._maybe_fail(Key, "PutObject")
        self.objects[Key] = body

    def delete_object(self, Bucket: str, Key: str):
        self.delete_calls.append({"bucket": Bucket, "key": Key})
        self._maybe_fail(Key, "DeleteObject")
        self.objects.pop(Key, None)

    def head_object(self, Bucket: str, Key: str):
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")
        return {"ContentLength": len(self.objects[Key])}


# -----------------------------
# Helpers
# -----------------------------
def write_file(path, content=b"data"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def make_config(base_dir, **overrides) -> OffloadConfig:
    values = dict(
        bucket="media-bucket",
        region="us-east-1",
        access_key="AKIATESTKEY",
        secret_key="secret",
        local_base_url="https://x.test/up",
        local_base_dir=str(base_dir),
        remote_base_url="https://cdn.test",
        endpoint_url=None,
    )
    values.update(overrides)
    return OffloadConfig(**values)


# -----------------------------
# Fixtures
# -----------------------------
@pytest.fixture
def base_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def config(base_dir):
    return make_config(base_dir)


@pytest.fixture
def fake_s3():
    return FakeS3Client()


@pytest.fixture
def store(tmp_path):
    store = CredentialStore(str(tmp_path / "data" / "secure-data" / "crypto.json"))
    store.bootstrap()
    return store
