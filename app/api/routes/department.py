# app/api/routes/department.py
"""
部署管理用APIルート
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.core.dependencies import get_current_username
from app.core.exceptions import ConflictError, NotFoundError
from app.crud import department as department_crud
from app.crud.employee import count_employees_in_department
from app.db.session import get_db
from app.models.department import Department
from app.schemas.department import DepartmentIn, DepartmentOut

# ロガーの設定
logger = logging.getLogger(__name__)

# FastAPIのルーターを初期化
router = APIRouter(prefix="/departments", tags=["Departments"])


def _get_department_or_404(db: Session, department_id: int) -> Department:
    department = department_crud.get_department(db, department_id)
    if department is None:
        raise NotFoundError(f"Department not found with id: {department_id}")
    return department


@router.get("", response_model=List[DepartmentOut])
def list_departments(
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """部署一覧を取得"""
    logger.info("Fetching all departments")
    return department_crud.get_departments(db)


@router.get("/{department_id}", response_model=DepartmentOut)
def get_department(
    department_id: int,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """IDで部署を取得"""
    logger.info(f"Fetching department with id: {department_id}")
    department = _get_department_or_404(db, department_id)
    logger.info(f"Department found: {department.name} (id: {department.id})")
    return department


@router.post("", response_model=DepartmentOut)
def create_department(
    department_in: DepartmentIn,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """部署を登録"""
    logger.info(f"User {username} is creating department: {department_in.name}")
    department = department_crud.create_department(db, department_in)
    logger.info(f"User {username} created department with id: {department.id}")
    return department


@router.put("/{department_id}", response_model=DepartmentOut)
def update_department(
    department_id: int,
    department_in: DepartmentIn,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """部署を更新"""
    logger.info(f"User {username} is updating department with id: {department_id}")
    department = _get_department_or_404(db, department_id)
    department = department_crud.update_department(db, department, department_in)
    logger.info(f"User {username} updated department with id: {department.id}")
    return department


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_department(
    department_id: int,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """部署を削除（所属社員がいる場合は削除しない）"""
    logger.info(f"User {username} is deleting department with id: {department_id}")
    department = _get_department_or_404(db, department_id)
    if count_employees_in_department(db, department_id) > 0:
        logger.error(f"User {username} error deleting department with id {department_id}: department has employees")
        raise ConflictError("Department has employees")
    department_crud.delete_department(db, department)
    logger.info(f"User {username} deleted department with id: {department_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
