"""
목적: 검색 인덱스 생성 본문(설정 + 매핑)을 제공한다.
설명: ngram 분석기와 고정 필드 매핑을 정의하며 인덱스 생성 시 한 번만 적용된다.
디자인 패턴: 팩토리 함수
참조: src/search_sync/integrations/search/gateway.py
"""

from __future__ import annotations

import copy
from typing import Any, Dict

NGRAM_ANALYZER = "ngram_analyzer"
NGRAM_TOKENIZER = "ngram_tokenizer"


def _ngram_text() -> Dict[str, Any]:
    return {
        "type": "text",
        "analyzer": NGRAM_ANALYZER,
        "fields": {"keyword": {"type": "keyword"}},
    }


def _stored(field_type: str) -> Dict[str, Any]:
    return {"type": field_type, "index": False}


def _image_format() -> Dict[str, Any]:
    return {
        "properties": {
            "ext": _stored("text"),
            "hash": _stored("text"),
            "height": _stored("long"),
            "mime": _stored("text"),
            "name": _stored("text"),
            "size": _stored("float"),
            "sizeInBytes": _stored("long"),
            "url": _stored("text"),
            "width": _stored("long"),
        }
    }


_SETTINGS: Dict[str, Any] = {
    "analysis": {
        "tokenizer": {
            NGRAM_TOKENIZER: {"type": "ngram", "min_gram": 3, "max_gram": 5},
        },
        "analyzer": {
            NGRAM_ANALYZER: {
                "type": "custom",
                "tokenizer": NGRAM_TOKENIZER,
                "filter": ["lowercase"],
            },
        },
    },
    # max_gram - min_gram
    "index": {"max_ngram_diff": 2},
}

_MAPPINGS: Dict[str, Any] = {
    "properties": {
        "categories": {
            "properties": {
                "createdAt": _stored("date"),
                "id": _stored("long"),
                "name": _ngram_text(),
                "publishedAt": _stored("date"),
                "updatedAt": _stored("date"),
            }
        },
        "description": _ngram_text(),
        "file": {
            "properties": {
                "createdAt": _stored("date"),
                "ext": _stored("text"),
                "folderPath": _stored("text"),
                "formats": {
                    "properties": {
                        "large": _image_format(),
                        "medium": _image_format(),
                        "small": _image_format(),
                        "thumbnail": _image_format(),
                    }
                },
                "hash": _stored("text"),
                "height": _stored("long"),
                "id": _stored("long"),
                "mime": _stored("text"),
                "name": _stored("text"),
                "provider": _stored("text"),
                "size": _stored("float"),
                "updatedAt": _stored("date"),
                "url": _stored("text"),
                "width": _stored("long"),
            }
        },
        "labels": {
            "properties": {
                "createdAt": _stored("date"),
                "id": _stored("long"),
                "publishedAt": _stored("date"),
                "type": _stored("text"),
                "updatedAt": _stored("date"),
                "value": _ngram_text(),
            }
        },
        "orderCount": _stored("text"),
        "title": _ngram_text(),
        "wishlistCount": _stored("text"),
    }
}


def index_settings() -> Dict[str, Any]:
    """인덱스 분석기 설정의 복사본을 반환한다."""

    return copy.deepcopy(_SETTINGS)


def index_mappings() -> Dict[str, Any]:
    """필드 매핑의 복사본을 반환한다."""

    return copy.deepcopy(_MAPPINGS)


def mapping_schema() -> Dict[str, Any]:
    """인덱스 생성 요청 본문 전체를 반환한다.

    Returns:
        dict: `{"settings": ..., "mappings": ...}` 형태의 생성 본문.
    """

    return {"settings": index_settings(), "mappings": index_mappings()}
