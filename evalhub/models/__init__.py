"""
Database models
"""
from evalhub.models.department import Department
from evalhub.models.user import User, ROLE_ADMIN, ROLE_USER
from evalhub.models.evaluation import Evaluation, CRITERIA_FIELDS
from evalhub.models.user_data import UserData

__all__ = [
    "Department",
    "User",
    "ROLE_ADMIN",
    "ROLE_USER",
    "Evaluation",
    "CRITERIA_FIELDS",
    "UserData",
]
