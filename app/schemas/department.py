from pydantic import ConfigDict, Field
from app.schemas.base import CamelModel

# 部署作成・更新用スキーマ
class DepartmentIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)

# 部署表示用（レスポンスなどで使用）
class DepartmentOut(CamelModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
