"""
Static asset lookup for the SPA frontend.

Assets come from a local build directory, an S3-compatible bucket (Tencent
COS), or an in-memory map for tests.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

SPA_ENTRY_PATH = "/index.html"


@dataclass
class Asset:
    body: bytes
    media_type: str


def _object_key(path: str) -> str:
    """Map a request path to a store key; directory paths resolve to index.html."""
    key = path.lstrip("/")
    if not key or key.endswith("/"):
        key += "index.html"
    return key


def _guess_media_type(key: str) -> str:
    media_type, _ = mimetypes.guess_type(key)
    return media_type or "application/octet-stream"


class AssetStore(Protocol):
    """Returns the asset stored at a request path, or None on a miss."""

    def fetch(self, path: str) -> Optional[Asset]:
        ...


@dataclass
class InMemoryAssetStore:
    """Test double keyed by object key (no leading slash)."""

    objects: dict[str, bytes] = field(default_factory=dict)

    def fetch(self, path: str) -> Optional[Asset]:
        key = _object_key(path)
        body = self.objects.get(key)
        if body is None:
            return None
        return Asset(body=body, media_type=_guess_media_type(key))


@dataclass
class LocalAssetStore:
    """Serves files from a directory, typically the frontend build output."""

    directory: str

    def __post_init__(self):
        self.root = Path(self.directory).resolve()

    def fetch(self, path: str) -> Optional[Asset]:
        key = _object_key(path)
        candidate = (self.root / key).resolve()
        if not candidate.is_relative_to(self.root) or not candidate.is_file():
            return None
        return Asset(body=candidate.read_bytes(), media_type=_guess_media_type(key))


@dataclass
class CosAssetStore:
    """
    Reads assets from an S3-compatible bucket (Tencent COS).
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str

    def __post_init__(self):
        # Use virtual-hosted style addressing to satisfy COS requirements.
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
            config=config,
        )

    def fetch(self, path: str) -> Optional[Asset]:
        key = _object_key(path)
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in ("NoSuchKey", "404"):
                return None
            raise
        media_type = response.get("ContentType") or _guess_media_type(key)
        return Asset(body=response["Body"].read(), media_type=media_type)
