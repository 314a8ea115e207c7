"""
Role and ownership checks applied per request
"""
from typing import Optional
from evalhub.errors import Forbidden
from evalhub.models.user import User, ROLE_ADMIN


def authorize_role(identity: User, required_role: str):
    """Fail unless the acting account holds exactly the required role"""
    if identity.role != required_role:
        raise Forbidden(f"Access denied: {required_role} only")


def authorize_self_or_admin(
    identity: User,
    target_account_id: int,
    message: str = "Not authorized to access this resource"
):
    """Admins may act on anyone; everyone else only on their own account"""
    if identity.role == ROLE_ADMIN or identity.id == target_account_id:
        return
    raise Forbidden(message)


def authorize_role_change(identity: User, target: User, new_role: Optional[str]):
    """Changing a role is Admin-only, including on one's own account"""
    if new_role is None or new_role == target.role:
        return
    if identity.role != ROLE_ADMIN:
        raise Forbidden("Not authorized to change user role")
