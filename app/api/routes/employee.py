# app/api/routes/employee.py
"""
社員管理用APIルート（アプリケーションログの閲覧を含む）
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from app.core.config import get_settings
from app.core.dependencies import get_current_username
from app.core.exceptions import BadRequestError, NotFoundError
from app.crud import employee as employee_crud
from app.crud.department import get_department
from app.db.session import get_db
from app.models.department import Department
from app.models.employee import Employee
from app.schemas.employee import EmployeeIn, EmployeeOut
from app.services.log_reader import tail_log

# ロガーの設定
logger = logging.getLogger(__name__)

# FastAPIのルーターを初期化
router = APIRouter(prefix="/employees", tags=["Employees"])


def _get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = employee_crud.get_employee(db, employee_id)
    if employee is None:
        raise NotFoundError(f"Employee not found with id: {employee_id}")
    return employee


def _resolve_department(db: Session, employee_in: EmployeeIn, username: str, action: str) -> Department:
    """リクエストで指定された所属部署を取得（未指定は400、存在しなければ404）"""
    if employee_in.department is None or employee_in.department.id is None:
        logger.error(f"User {username} tried to {action} employee without department")
        raise BadRequestError("Department is required")
    department = get_department(db, employee_in.department.id)
    if department is None:
        raise NotFoundError(f"Department not found with id: {employee_in.department.id}")
    return department


# ルーティングの都合上 /{employee_id} より先に定義する
@router.get("/logs", response_class=PlainTextResponse)
def get_logs(
    lines: int = Query(200, ge=1),
    username: str = Depends(get_current_username)
):
    """アプリケーションログの末尾を取得"""
    result = tail_log(get_settings().get_log_file_path(), lines)
    if result is None:
        return "Log file not found."
    return result


@router.get("", response_model=List[EmployeeOut])
def list_employees(
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """社員一覧を取得"""
    return employee_crud.get_employees(db)


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """IDで社員を取得"""
    return _get_employee_or_404(db, employee_id)


@router.post("", response_model=EmployeeOut)
def create_employee(
    employee_in: EmployeeIn,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """社員を登録"""
    department = _resolve_department(db, employee_in, username, "create")
    logger.info(
        f"User {username} is creating employee: {employee_in.first_name} {employee_in.last_name} "
        f"(email: {employee_in.email})"
    )
    employee = employee_crud.create_employee(db, employee_in, department)
    logger.info(f"User {username} created employee with id: {employee.id}")
    return employee


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    employee_in: EmployeeIn,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """社員を更新"""
    logger.info(f"User {username} is updating employee with id: {employee_id}")
    employee = _get_employee_or_404(db, employee_id)
    department = _resolve_department(db, employee_in, username, "update")
    employee = employee_crud.update_employee(db, employee, employee_in, department)
    logger.info(f"User {username} updated employee with id: {employee.id}")
    return employee


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    username: str = Depends(get_current_username)
):
    """社員を削除"""
    logger.info(f"User {username} is deleting employee with id: {employee_id}")
    employee = _get_employee_or_404(db, employee_id)
    employee_crud.delete_employee(db, employee)
    logger.info(f"User {username} deleted employee with id: {employee_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
