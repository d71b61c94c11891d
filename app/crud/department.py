# app/crud/department.py
"""
 - 部署に関するDB操作（CRUD）を定義するモジュール。
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import commit_or_raise
from app.models.department import Department
from app.schemas.department import DepartmentIn

# 部署一覧を取得する関数
def get_departments(db: Session) -> List[Department]:
    return db.query(Department).order_by(Department.id).all()

# IDで部署を取得する関数
def get_department(db: Session, department_id: int) -> Optional[Department]:
    return db.query(Department).filter(Department.id == department_id).first()

# 部署を登録する関数
def create_department(db: Session, department_in: DepartmentIn) -> Department:
    department = Department(name=department_in.name)
    db.add(department)
    commit_or_raise(db, "create department")
    db.refresh(department)
    return department

# 部署を更新する関数
def update_department(db: Session, department: Department, department_in: DepartmentIn) -> Department:
    department.name = department_in.name
    commit_or_raise(db, "update department")
    db.refresh(department)
    return department

# 部署を削除する関数
def delete_department(db: Session, department: Department) -> None:
    db.delete(department)
    commit_or_raise(db, "delete department")
