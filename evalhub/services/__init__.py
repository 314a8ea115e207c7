"""
Service layer
"""
from evalhub.services.auth import (
    verify_password, get_password_hash, authenticate_user,
    create_access_token, decode_token, get_current_user,
    get_current_active_admin
)
from evalhub.services.access import (
    authorize_role, authorize_self_or_admin, authorize_role_change
)
from evalhub.services.scoring import compute_average, compute_rollup, recompute_user_rollup
from evalhub.services.queries import query_service
from evalhub.services.export import evaluation_exporter

__all__ = [
    # Auth
    "verify_password", "get_password_hash", "authenticate_user",
    "create_access_token", "decode_token", "get_current_user",
    "get_current_active_admin",
    # Access control
    "authorize_role", "authorize_self_or_admin", "authorize_role_change",
    # Scoring
    "compute_average", "compute_rollup", "recompute_user_rollup",
    # Services
    "query_service",
    "evaluation_exporter",
]
