"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from taskboard.assets import AssetStore, CosAssetStore, LocalAssetStore
from taskboard.config import get_settings
from taskboard.db import DbClient, InMemoryDbClient, SqlDbClient
from taskboard.kv import InMemoryKvClient, KvClient, RedisKvClient, ThemeStore
from taskboard.summarizer import GeminiSummarizer, InMemorySummarizer, Summarizer

_db_client: DbClient | None = None
_kv_client: KvClient | None = None
_summarizer: Summarizer | None = None
_asset_store: AssetStore | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so the engine's connection pool is shared across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = SqlDbClient(settings.database_url)
    return _db_client


def get_kv_client() -> KvClient:
    global _kv_client
    if _kv_client:
        return _kv_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.redis_url:
        _kv_client = InMemoryKvClient()
    else:
        _kv_client = RedisKvClient(url=settings.redis_url)
    return _kv_client


def get_theme_store() -> ThemeStore:
    return ThemeStore(kv=get_kv_client(), key=get_settings().theme_key)


def get_summarizer() -> Summarizer:
    global _summarizer
    if _summarizer:
        return _summarizer

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.gemini_api_key:
        _summarizer = InMemorySummarizer()
    else:
        _summarizer = GeminiSummarizer(
            api_key=settings.gemini_api_key,
            model=settings.summary_model,
        )
    return _summarizer


def get_asset_store() -> AssetStore | None:
    """
    Return the configured asset store, or None when no static assets are set up.
    """
    global _asset_store
    if _asset_store:
        return _asset_store

    settings = get_settings()
    if settings.assets_dir:
        _asset_store = LocalAssetStore(settings.assets_dir)
    elif settings.cos_bucket:
        _asset_store = CosAssetStore(
            bucket=settings.cos_bucket,
            region=settings.cos_region or "",
            endpoint=settings.cos_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
        )
    return _asset_store
