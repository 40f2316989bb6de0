"""
목적: 동기화 엔진 명령줄 트리거를 제공한다.
설명: 재구축, 드레인, 컬렉션 색인, 작업 등록, 운영 로그 조회, 주기 실행을 argparse 하위 명령으로 노출한다.
디자인 패턴: 스크립트 오케스트레이션
참조: src/search_sync/app.py
"""

from __future__ import annotations

import argparse
import json
import sys
import threading
from typing import Callable, Dict, List, Optional, Union

from search_sync.app import SearchSyncApp
from search_sync.shared.config import load_settings
from search_sync.shared.exceptions import BaseAppException


def _item_id(raw: str) -> Union[int, str]:
    return int(raw) if raw.isdigit() else raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="search-sync", description="검색 인덱스 동기화 엔진")
    parser.add_argument("--config", default=None, help="JSON 설정 파일 경로")
    parser.add_argument("--env-file", default=None, help="로드할 .env 파일 경로")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("rebuild", help="설정된 모든 컬렉션으로 인덱스를 다시 채운다")
    commands.add_parser("drain", help="대기 중인 색인 작업을 한 번 처리한다")

    index_collection = commands.add_parser("index-collection", help="컬렉션 하나를 즉시 색인한다")
    index_collection.add_argument("collection")
    index_collection.add_argument("--index", default=None, help="대상 인덱스 (기본: 현재 인덱스)")

    enqueue = commands.add_parser("enqueue", help="색인 작업을 등록한다")
    kinds = enqueue.add_subparsers(dest="kind", required=True)
    kinds.add_parser("full-site")
    upsert = kinds.add_parser("upsert")
    upsert.add_argument("collection")
    upsert.add_argument("item_id", type=_item_id)
    remove = kinds.add_parser("remove")
    remove.add_argument("collection")
    remove.add_argument("item_id", type=_item_id)
    collection = kinds.add_parser("collection")
    collection.add_argument("collection")

    logs = commands.add_parser("logs", help="최근 운영 로그를 출력한다")
    logs.add_argument("--limit", type=int, default=50)

    run = commands.add_parser("run", help="주기 드레인 워커를 실행한다")
    run.add_argument("--interval", type=float, default=None, help="드레인 주기(초)")
    return parser


def _print(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, default=str, indent=2))


def _enqueue(app: SearchSyncApp, args: argparse.Namespace) -> int:
    handlers: Dict[str, Callable[[], object]] = {
        "full-site": app.enqueue_full_site_task,
        "upsert": lambda: app.enqueue_item_upsert(args.collection, args.item_id),
        "remove": lambda: app.enqueue_item_remove(args.collection, args.item_id),
        "collection": lambda: app.enqueue_collection_reindex(args.collection),
    }
    task = handlers[args.kind]()
    _print(task.model_dump(mode="json"))
    return 0


def _run_forever(app: SearchSyncApp, interval: Optional[float]) -> int:
    stopper = threading.Event()
    worker = app.start_worker(interval)
    print(f"[진행][search-sync] 드레인 워커 실행 중 (state={worker.state.value}). Ctrl+C로 종료합니다.")
    try:
        while not stopper.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        print("[진행][search-sync] 종료 요청을 받았습니다.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(config_path=args.config, env_file=args.env_file)
        app = SearchSyncApp(settings)
    except BaseAppException as error:
        print(f"[오류][search-sync] {error}", file=sys.stderr)
        return 2

    ensure_index = args.command in {"rebuild", "drain", "index-collection", "run"}
    try:
        app.start(ensure_index=ensure_index)
        if args.command == "rebuild":
            return 0 if app.rebuild_index() else 1
        if args.command == "drain":
            return 0 if app.index_pending_data() else 1
        if args.command == "index-collection":
            return 0 if app.index_collection(args.collection, args.index) else 1
        if args.command == "enqueue":
            return _enqueue(app, args)
        if args.command == "logs":
            _print([entry.model_dump(mode="json") for entry in app.recent_logs(args.limit)])
            return 0
        if args.command == "run":
            return _run_forever(app, args.interval)
    except BaseAppException as error:
        print(f"[오류][search-sync] {error}", file=sys.stderr)
        return 1
    finally:
        app.stop()
    return 1


if __name__ == "__main__":
    sys.exit(main())
