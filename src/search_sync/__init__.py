"""
목적: 검색 인덱스 동기화 엔진 패키지를 제공한다.
설명: 콘텐츠 저장소 변경을 영속 작업 큐로 받아 Elasticsearch 인덱스에 반영하는 재조정 엔진이다.
디자인 패턴: 계층형 아키텍처(shared / integrations / core)
참조: src/search_sync/app.py, src/search_sync/core/indexing/engine.py
"""

__version__ = "0.1.0"
