"""
アプリケーションログ閲覧サービス
  - ログファイルの末尾N行を返す（ファイル全体をメモリに載せない）。
"""

from collections import deque
from pathlib import Path
from typing import Optional

# 1回のリクエストで返す最大行数
MAX_LINES = 5000

def tail_log(log_path: Path, lines: int = 200) -> Optional[str]:
    """
    ログファイルの末尾を取得

    Args:
        log_path: ログファイルのパス
        lines: 取得する行数（1〜MAX_LINES に丸める）

    Returns:
        末尾の行を改行で連結した文字列。ファイルが無い場合は None
    """
    if not log_path.exists():
        return None

    count = max(1, min(lines, MAX_LINES))
    with log_path.open("r", encoding="utf-8", errors="replace") as f:
        tail = deque(f, maxlen=count)
    return "".join(tail).rstrip("\n")
