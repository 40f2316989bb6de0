"""
목적: 핵심 도메인 패키지를 제공한다.
설명: 검색 인덱스 동기화 도메인 로직을 포함한다.
디자인 패턴: 계층형 아키텍처
참조: src/search_sync/core/indexing
"""
