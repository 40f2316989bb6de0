"""
목적: SQLite 연결 모듈 공개 API를 제공한다.
설명: 공유 SQLite 연결 관리자를 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/integrations/db/sqlite/connection.py
"""

from search_sync.integrations.db.sqlite.connection import SqliteConnectionManager

__all__ = ["SqliteConnectionManager"]
