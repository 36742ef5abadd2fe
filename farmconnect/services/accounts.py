import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from farmconnect.auth import hash_password, verify_password
from farmconnect.errors import Conflict, NotFound, Unauthorized, ValidationError
from farmconnect.models import Role, User, utcnow

logger = logging.getLogger(__name__)


class Accounts:
    """Registration, credential checks and profile edits for users."""

    def __init__(self, session):
        self.session = session

    def register(self, email, full_name, role, password, phone=None) -> User:
        if not email or not full_name or not role or not password:
            raise ValidationError("Email, full_name, role, and password are required")
        if role not in Role.ALL:
            raise ValidationError(f"Role must be one of: {', '.join(Role.ALL)}")

        user = User(
            email=email,
            phone=phone or None,
            full_name=full_name,
            role=role,
            password=hash_password(password),
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict("Email already exists")

        logger.info("Registered %s user %s", role, user.id)
        return user

    def authenticate(self, identifier, password) -> User:
        if not identifier or not password:
            raise ValidationError("Please provide email/phone and password")

        # same failure for unknown identifier and wrong password
        if "@" in identifier:
            query = select(User).where(User.email == identifier)
        else:
            query = select(User).where(User.phone == identifier)
        user = self.session.scalars(query.order_by(User.id)).first()

        if user is None or not verify_password(password, user.password):
            raise Unauthorized("Invalid credentials")
        return user

    def get(self, user_id) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def update_profile(self, user_id, full_name=None, phone=None) -> User:
        changes = {}
        if full_name:
            changes["full_name"] = full_name
        if phone:
            changes["phone"] = phone
        if not changes:
            raise ValidationError("No fields to update")

        user = self.get(user_id)
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = utcnow()
        self.session.commit()
        return user
