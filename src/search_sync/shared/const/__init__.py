"""
목적: 공통 상수 집합을 제공한다.
설명: 설정 로딩과 인덱스 이름 규칙에서 사용하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/search_sync/shared/config/loader.py, src/search_sync/core/indexing/naming.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_PREFIX: 설정으로 읽어들일 환경 변수 접두사.
        ENV_NESTED_DELIMITER: 환경 변수 키를 중첩 경로로 해석하는 구분자.
        DEFAULT_ALIAS_NAME: 기본 검색 별칭 이름.
        DEFAULT_INDEX_PREFIX: 번호가 붙는 실제 인덱스 이름의 접두사.
        INDEX_SEQUENCE_WIDTH: 인덱스 번호 자릿수.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_PREFIX = "SEARCH_SYNC__"
    ENV_NESTED_DELIMITER = "__"
    DEFAULT_ALIAS_NAME = "search-sync"
    DEFAULT_INDEX_PREFIX = "search-sync-index"
    INDEX_SEQUENCE_WIDTH = 6


__all__ = ["SharedConst"]
