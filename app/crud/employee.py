# app/crud/employee.py
"""
 - 社員に関するDB操作（CRUD）を定義するモジュール。
 - 所属部署の存在確認はルート側で行い、ここでは受け取った部署をそのまま紐付ける。
"""

from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from app.crud.base import commit_or_raise
from app.models.department import Department
from app.models.employee import Employee
from app.schemas.employee import EmployeeIn

# 社員一覧を取得する関数（部署情報も合わせて読み込む）
def get_employees(db: Session) -> List[Employee]:
    return (
        db.query(Employee)
        .options(joinedload(Employee.department))
        .order_by(Employee.id)
        .all()
    )

# IDで社員を取得する関数
def get_employee(db: Session, employee_id: int) -> Optional[Employee]:
    return (
        db.query(Employee)
        .options(joinedload(Employee.department))
        .filter(Employee.id == employee_id)
        .first()
    )

# 部署に所属する社員数を数える関数
def count_employees_in_department(db: Session, department_id: int) -> int:
    return db.query(Employee).filter(Employee.department_id == department_id).count()

# 社員を登録する関数
def create_employee(db: Session, employee_in: EmployeeIn, department: Department) -> Employee:
    employee = Employee(
        first_name=employee_in.first_name,
        last_name=employee_in.last_name,
        email=employee_in.email,
        age=employee_in.age,
        department=department,
    )
    db.add(employee)
    commit_or_raise(db, "create employee")
    db.refresh(employee)
    return employee

# 社員を更新する関数
def update_employee(db: Session, employee: Employee, employee_in: EmployeeIn, department: Department) -> Employee:
    employee.first_name = employee_in.first_name
    employee.last_name = employee_in.last_name
    employee.email = employee_in.email
    employee.age = employee_in.age
    employee.department = department
    commit_or_raise(db, "update employee")
    db.refresh(employee)
    return employee

# 社員を削除する関数
def delete_employee(db: Session, employee: Employee) -> None:
    db.delete(employee)
    commit_or_raise(db, "delete employee")
