"""
User repository for account CRUD operations.

Passwords are opaque strings: hashing and verification belong to the
caller, this layer only stores and compares them.
"""

from fakestore.core.database import Storage, StorageError
from fakestore.core.logging_config import get_logger, log_with_context
from fakestore.schemas.records import User
from fakestore.schemas.results import (
    CheckEmailResult,
    CheckUserResult,
    CreateUserResult,
    DeleteUserResult,
    EmailAvailable,
    Failure,
    UpdateUserResult,
    UserCreated,
    UserDeleted,
    UserIdentity,
    UserList,
    UserListResult,
    UserUpdated,
)

logger = get_logger(__name__)


class UserRepository:
    """
    Repository for user data access.

    Every method returns a tagged result; StorageError never escapes.

    Attributes:
        storage: Shared storage handle
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    async def check_email_taken(self, email: str) -> CheckEmailResult:
        """
        Check whether an email already belongs to a user.

        Returns:
            EmailAvailable, or a CONFLICT Failure when the email is in use

        Note:
            Pure read. Used by create_user before inserting to give a better
            message than the UNIQUE constraint would.
        """
        try:
            row = await self.storage.fetch_one(
                "SELECT id FROM users WHERE email = :email",
                {"email": email},
            )
        except StorageError:
            logger.error("Storage failure", extra={"operation": "check_email_taken"}, exc_info=True)
            return Failure.storage("Failed to check email!")

        if row is not None:
            return Failure.conflict("The email is already used.")
        return EmailAvailable()

    async def create_user(self, name: str, email: str, password: str) -> CreateUserResult:
        """
        Create a new user.

        Args:
            name: Display name
            email: Login email (must be unused)
            password: Opaque, already-hashed password

        Returns:
            UserCreated with the generated id, or a Failure

        Example:
            >>> result = await repo.create_user("Ada", "ada@example.com", "<hash>")
            >>> result.id
            1

        Note:
            Check-then-insert without a transaction. If two creates race on
            the same email, the loser hits the UNIQUE constraint and gets a
            STORAGE failure instead of CONFLICT.
        """
        check = await self.check_email_taken(email)
        if isinstance(check, Failure):
            return check

        try:
            res = await self.storage.execute(
                "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                [name, email, password],
            )
        except StorageError:
            logger.error("Storage failure", extra={"operation": "create_user"}, exc_info=True)
            return Failure.storage("Failed to insert user!")

        log_with_context(logger, "info", "User created", operation="create_user", user_id=res.generated_id)
        return UserCreated(id=res.generated_id, name=name, email=email)

    async def check_user(self, email: str, password: str) -> CheckUserResult:
        """
        Look up a user by exact email and password.

        Returns:
            UserIdentity, or an UNAUTHORIZED Failure that does not say which
            of the two fields was wrong
        """
        try:
            row = await self.storage.fetch_one(
                "SELECT id, name FROM users WHERE email = :email AND password = :password",
                {"email": email, "password": password},
            )
        except StorageError:
            logger.error("Storage failure", extra={"operation": "check_user"}, exc_info=True)
            return Failure.storage("Failed to login user!")

        if row is None:
            return Failure.unauthorized("Wrong email or password.")
        return UserIdentity(id=row["id"], name=row["name"], email=email)

    async def update_user(self, user_id: int, name: str, password: str) -> UpdateUserResult:
        """
        Replace a user's name and password.

        Email is immutable and cannot be changed here.

        Returns:
            UserUpdated, or a VALIDATION Failure when either field is empty

        Note:
            Existence of user_id is not checked; an unknown id updates zero
            rows and still reports success.
        """
        if not name or not password:
            return Failure.validation("New name and password can't be empty.")

        try:
            res = await self.storage.execute(
                "UPDATE users SET name = :name, password = :password WHERE id = :id",
                {"name": name, "password": password, "id": user_id},
            )
        except StorageError:
            logger.error(
                "Storage failure",
                extra={"operation": "update_user", "user_id": user_id},
                exc_info=True,
            )
            return Failure.storage("Failed to update user!")

        log_with_context(
            logger,
            "info",
            "User updated",
            operation="update_user",
            user_id=user_id,
            affected_rows=res.affected_rows,
        )
        return UserUpdated(message="User name and password updated successfully.", name=name)

    async def delete_user(self, email: str) -> DeleteUserResult:
        """
        Delete the user owning an email.

        Idempotent: an unknown email is OK with affected_rows == 0. Orders
        and carts of the user are left in place.
        """
        try:
            res = await self.storage.execute(
                "DELETE FROM users WHERE email = :email",
                {"email": email},
            )
        except StorageError:
            logger.error("Storage failure", extra={"operation": "delete_user"}, exc_info=True)
            return Failure.storage("Failed to delete user!")

        return UserDeleted(affected_rows=res.affected_rows)

    async def get_all_users(self) -> UserListResult:
        """
        Return every user, in store order. No pagination.

        Each User carries its password attribute, but the field is excluded
        from model_dump() and therefore from the envelope.
        """
        try:
            rows = await self.storage.fetch_all("SELECT * FROM users")
        except StorageError:
            logger.error("Storage failure", extra={"operation": "get_all_users"}, exc_info=True)
            return Failure.storage("Failed to get all users!")

        return UserList(users=[User.from_row(row) for row in rows])
