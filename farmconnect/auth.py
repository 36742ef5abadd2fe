from collections import namedtuple
from functools import wraps

from flask import g
from flask_jwt_extended import create_access_token, get_jwt, verify_jwt_in_request
from werkzeug.security import check_password_hash, generate_password_hash

from farmconnect.errors import Forbidden, Unauthorized, error_response

CurrentUser = namedtuple("CurrentUser", ["id", "email", "role"])


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def generate_token(user) -> str:
    # expiry comes from JWT_ACCESS_TOKEN_EXPIRES (7 days)
    return create_access_token(
        identity=str(user.id),
        additional_claims={"email": user.email, "role": user.role},
    )


def current_user() -> CurrentUser:
    return g.user


def login_required(view):
    """Verify the bearer token and expose its identity as ``g.user``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        claims = get_jwt()
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise Unauthorized("Invalid token")
        g.user = CurrentUser(id=user_id, email=claims.get("email"), role=claims.get("role"))
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles):
    """Like login_required, and additionally reject callers outside ``roles``."""

    def decorator(view):
        @wraps(view)
        def gate(*args, **kwargs):
            if g.user.role not in roles:
                raise Forbidden(f"Access denied. Required role: {', '.join(roles)}")
            return view(*args, **kwargs)

        return login_required(gate)

    return decorator


def register_token_handlers(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response("No token provided", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response("Invalid token", 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response("Token expired", 401)
