"""
목적: `python -m search_sync` 실행 진입점을 제공한다.
설명: 명령줄 트리거의 main을 호출한다.
디자인 패턴: 엔트리 포인트
참조: src/search_sync/cli.py
"""

import sys

from search_sync.cli import main

sys.exit(main())
