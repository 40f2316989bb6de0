"""
목적: DB 연동 패키지를 제공한다.
설명: 작업 큐/운영 로그/인덱스 상태를 저장하는 SQLite 연결을 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/integrations/db/sqlite/connection.py
"""

from search_sync.integrations.db.sqlite import SqliteConnectionManager

__all__ = ["SqliteConnectionManager"]
