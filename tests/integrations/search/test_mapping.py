"""
목적: 인덱스 생성 본문을 검증한다.
설명: ngram 분석기 설정과 text/keyword 이중 필드, 표시 전용 필드의 index:false를 확인한다.
디자인 패턴: 팩토리 함수
참조: src/search_sync/integrations/search/mapping.py
"""

from __future__ import annotations

from search_sync.integrations.search import mapping_schema


def test_analyzer_settings() -> None:
    """ngram 토크나이저/분석기 설정 값을 검증한다."""

    settings = mapping_schema()["settings"]

    assert settings["analysis"]["tokenizer"]["ngram_tokenizer"] == {
        "type": "ngram",
        "min_gram": 3,
        "max_gram": 5,
    }
    assert settings["analysis"]["analyzer"]["ngram_analyzer"] == {
        "type": "custom",
        "tokenizer": "ngram_tokenizer",
        "filter": ["lowercase"],
    }
    assert settings["index"]["max_ngram_diff"] == 2


def test_text_fields_have_keyword_subfield() -> None:
    """검색 대상 텍스트 필드가 ngram 분석기와 keyword 하위 필드를 가지는지 검증한다."""

    properties = mapping_schema()["mappings"]["properties"]
    expected = {"type": "text", "analyzer": "ngram_analyzer", "fields": {"keyword": {"type": "keyword"}}}

    assert properties["title"] == expected
    assert properties["description"] == expected
    assert properties["categories"]["properties"]["name"] == expected
    assert properties["labels"]["properties"]["value"] == expected


def test_display_only_fields_are_not_indexed() -> None:
    """표시 전용 필드가 index:false로 저장되는지 검증한다."""

    properties = mapping_schema()["mappings"]["properties"]
    file_props = properties["file"]["properties"]

    assert sorted(properties) == [
        "categories",
        "description",
        "file",
        "labels",
        "orderCount",
        "title",
        "wishlistCount",
    ]
    assert properties["orderCount"] == {"type": "text", "index": False}
    assert file_props["size"] == {"type": "float", "index": False}
    assert sorted(file_props["formats"]["properties"]) == ["large", "medium", "small", "thumbnail"]
    assert file_props["formats"]["properties"]["thumbnail"]["properties"]["sizeInBytes"] == {
        "type": "long",
        "index": False,
    }


def test_schema_is_a_fresh_copy() -> None:
    """반환값 변경이 다음 호출에 영향을 주지 않는지 검증한다."""

    first = mapping_schema()
    first["settings"]["index"]["max_ngram_diff"] = 99

    assert mapping_schema()["settings"]["index"]["max_ngram_diff"] == 2
