from pydantic import ConfigDict, Field
from typing import Optional
from app.schemas.base import CamelModel
from app.schemas.department import DepartmentOut

# 社員登録時に指定する所属部署（IDのみ参照）
class DepartmentRef(CamelModel):
    id: Optional[int] = None

# 社員作成・更新用スキーマ
class EmployeeIn(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    department: Optional[DepartmentRef] = None

# 社員表示用（所属部署をネストして返す）
class EmployeeOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    age: Optional[int] = None
    department: Optional[DepartmentOut] = None

    model_config = ConfigDict(from_attributes=True)
