# app/core/logging_config.py
"""
 - ロギングの初期設定を行うモジュール。
 - コンソール出力に加え、ログ閲覧API（/api/employees/logs）が読み取る
   ローテーション付きのログファイルへ出力する。
"""

import logging
from logging.handlers import RotatingFileHandler
from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(process)d --- [%(name)s] %(message)s"

# 多重初期化を避けるためのフラグ
_configured = False

def init_logging(settings: Settings) -> None:
    """ルートロガーにコンソール・ファイルハンドラを設定する"""
    global _configured
    if _configured:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # ログディレクトリが無ければ作成
    log_path = settings.get_log_file_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    _configured = True
    logging.getLogger(__name__).info(f"ログ出力先: {log_path}")
