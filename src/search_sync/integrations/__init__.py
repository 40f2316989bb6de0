"""
목적: 외부 시스템 연동 패키지를 제공한다.
설명: SQLite 저장소, Elasticsearch 게이트웨이, 콘텐츠 저장소 포트를 포함한다.
디자인 패턴: 어댑터 패턴
참조: src/search_sync/integrations/db, src/search_sync/integrations/search, src/search_sync/integrations/content
"""
