"""
목적: 설정 모듈 공개 API를 제공한다.
설명: 설정 로더와 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/shared/config/loader.py, src/search_sync/shared/config/settings.py
"""

from search_sync.shared.config.loader import ConfigLoader, load_settings
from search_sync.shared.config.settings import (
    ContentStoreSettings,
    ElasticsearchSettings,
    IndexSettings,
    RebuildStrategy,
    ReconciliationSettings,
    StorageSettings,
    SyncSettings,
)

__all__ = [
    "ConfigLoader",
    "load_settings",
    "SyncSettings",
    "ElasticsearchSettings",
    "IndexSettings",
    "StorageSettings",
    "ReconciliationSettings",
    "ContentStoreSettings",
    "RebuildStrategy",
]
