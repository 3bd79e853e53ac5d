import logging
import re
from typing import Any, Dict, Optional
from pymongo.database import Database
from app.core.database import USERS_COLLECTION
from app.core.security import create_session_token, get_password_hash, verify_password
from app.models.user import new_user_document
from app.services.result import ErrorKind, ServiceResult

logger = logging.getLogger(__name__)

# Checked in this order; the first failing rule decides the message
PASSWORD_RULES = (
    (lambda password: re.search(r"[A-Z]", password) is not None,
     "Password must include at least one uppercase letter."),
    (lambda password: re.search(r"[a-z]", password) is not None,
     "Password must include at least one lowercase letter."),
    (lambda password: len(password) >= 6,
     "Password must be at least 6 characters long."),
)

USER_EXISTS_MESSAGE = "User already exists. Please log in."
USER_NOT_FOUND_MESSAGE = "No user found with this email."
INCORRECT_PASSWORD_MESSAGE = "Incorrect password."


def validate_password(password: Optional[str]) -> Optional[str]:
    """Return the message of the first password rule that fails, or None"""
    password = password or ""
    for rule, message in PASSWORD_RULES:
        if not rule(password):
            return message
    return None


class AuthService:
    """Registration, password login and Google login against the users collection"""

    @staticmethod
    def register(
        db: Database,
        name: Optional[str],
        email: Optional[str],
        photo_url: Optional[str],
        password: Optional[str]
    ) -> ServiceResult[Dict[str, Any]]:
        """Create a password account and issue a session token"""
        try:
            policy_error = validate_password(password)
            if policy_error:
                return ServiceResult.failure(ErrorKind.VALIDATION, policy_error)

            users = db[USERS_COLLECTION]
            # Find-before-insert; two concurrent registrations for the same
            # email can both pass this check
            if users.find_one({"email": email}):
                return ServiceResult.failure(ErrorKind.CONFLICT, USER_EXISTS_MESSAGE)

            # Hash before storing - the plaintext password never reaches the store
            result = users.insert_one(new_user_document(
                name=name,
                email=email,
                photo_url=photo_url,
                hashed_password=get_password_hash(password),
            ))
            # Log the store id only; emails stay out of the logs
            logger.info(f"Registered user {result.inserted_id}")

            return ServiceResult.success({
                "message": "Registration successful!",
                "token": create_session_token(email),
            })
        except Exception:
            logger.exception("Registration failed")
            return ServiceResult.server_error()

    @staticmethod
    def login(
        db: Database,
        email: Optional[str],
        password: Optional[str]
    ) -> ServiceResult[Dict[str, Any]]:
        """Check email and password and issue a fresh session token"""
        try:
            # "No such user" and "wrong password" are reported separately
            user = db[USERS_COLLECTION].find_one({"email": email})
            if not user:
                return ServiceResult.failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND_MESSAGE)

            if not verify_password(password or "", user.get("password")):
                return ServiceResult.failure(ErrorKind.AUTH, INCORRECT_PASSWORD_MESSAGE)

            # Each login issues a new token; earlier tokens stay valid until expiry
            logger.info(f"User {user['_id']} logged in")
            return ServiceResult.success({
                "message": "Login successful!",
                "token": create_session_token(email),
            })
        except Exception:
            logger.exception("Login failed")
            return ServiceResult.server_error()

    @staticmethod
    def google_login(
        db: Database,
        name: Optional[str],
        email: Optional[str],
        photo_url: Optional[str]
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Log in a Google-authenticated user, provisioning an account on first sight.

        An existing account for the email (from either login path) is left
        untouched, so repeated calls create at most one record.
        """
        try:
            users = db[USERS_COLLECTION]
            if not users.find_one({"email": email}):
                # No password is stored; the account can only use Google login
                result = users.insert_one(new_user_document(
                    name=name,
                    email=email,
                    photo_url=photo_url,
                    from_google=True,
                ))
                logger.info(f"Provisioned Google user {result.inserted_id}")

            return ServiceResult.success({
                "message": "Google login successful!",
                "token": create_session_token(email),
            })
        except Exception:
            logger.exception("Google login failed")
            return ServiceResult.server_error()


auth_service = AuthService()
