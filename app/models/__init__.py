# app/models/__init__.py

"""
このファイルは、SQLAlchemyのメタデータに全てのモデルを登録するための初期化モジュールです。
"""

# ログインユーザー（認証・MFA情報）
from .user import User

# 部署
from .department import Department

# 社員
from .employee import Employee

__all__ = [
    "User",
    "Department",
    "Employee",
]
