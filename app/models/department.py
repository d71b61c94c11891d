from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.db.base_class import Base

class Department(Base):
    """
    - 部署情報を格納するテーブル。
    - 社員（employees）と1対多で関連する。
    """

    __tablename__ = "departments"

    # 部署ID（主キー / AUTO_INCREMENT）
    id = Column(Integer, primary_key=True, autoincrement=True)

    # 部署名（例：Engineering）
    name = Column(String(100), nullable=False)

    # 作成日時（UTC）
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # 更新日時（UTC）
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # リレーション
    employees = relationship("Employee", back_populates="department")
