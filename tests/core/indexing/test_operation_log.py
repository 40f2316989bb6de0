"""
목적: 운영 로그 저장소를 검증한다.
설명: 성공/실패 기록 추가와 최신순 조회, 개수 제한을 확인한다.
디자인 패턴: 저장소 패턴
참조: src/search_sync/core/indexing/operation_log.py
"""

from __future__ import annotations

from search_sync.core.indexing import LogOutcome, OperationLog


def test_recent_entries_newest_first(operation_log: OperationLog) -> None:
    """최근 기록이 최신순으로 반환되는지 검증한다."""

    operation_log.record_pass("first")
    operation_log.record_fail("second")
    operation_log.record_pass("third")

    entries = operation_log.recent_entries(limit=2)

    assert [entry.message for entry in entries] == ["third", "second"]
    assert entries[1].outcome == LogOutcome.FAILURE
    assert len(operation_log.recent_entries()) == 3
