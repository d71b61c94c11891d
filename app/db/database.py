from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
import logging
from app.core.config import settings

# ロガーの設定
logger = logging.getLogger(__name__)

# DB URLを取得
DATABASE_URL = settings.get_database_url()

# エンジン作成
if DATABASE_URL.startswith("sqlite"):
    # SQLiteはスレッドをまたいだ接続利用を許可する必要がある
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False}
    )
    logger.info("SQLiteデータベースに接続")
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True
    )
    logger.info(f"データベースに接続: {engine.url.render_as_string(hide_password=True)}")

# セッション作成
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db() -> None:
    """テーブル作成（もしテーブルがまだない場合）"""
    # モデルをメタデータに登録するためにインポート
    import app.models  # noqa: F401
    from app.db.base_class import Base

    Base.metadata.create_all(bind=engine)
    logger.info("テーブル作成確認完了")
