from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.db.base_class import Base

class Employee(Base):
    """
    - 社員情報を格納するテーブル。
    - 所属部署（departments）への外部キーを持つ。
    """

    __tablename__ = "employees"

    # 社員ID（主キー / AUTO_INCREMENT）
    id = Column(Integer, primary_key=True, autoincrement=True)

    # 名
    first_name = Column(String(50), nullable=False)

    # 姓
    last_name = Column(String(50), nullable=False)

    # メールアドレス
    email = Column(String(255), nullable=True)

    # 年齢（任意）
    age = Column(Integer, nullable=True)

    # 所属部署ID（外部キー）
    department_id = Column(ForeignKey("departments.id"), nullable=False)

    # 作成日時（UTC）
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # 更新日時（UTC）
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # リレーション
    department = relationship("Department", back_populates="employees")
