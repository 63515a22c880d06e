"""
Tagged results returned by every repository operation.

Each operation returns either one success variant (``status == "OK"``) or
a Failure (``status == "error"``) carrying an ErrorKind. ``to_envelope()``
flattens any result into the uniform dict shape consumed by the API layer:

    {"status": "OK", ...data}
    {"status": "error", "message": "..."}
"""

from enum import Enum
from typing import Any, List, Literal, Union

from pydantic import BaseModel

from fakestore.schemas.records import Order, User


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    STORAGE = "storage"


class Result(BaseModel):
    def to_envelope(self) -> dict:
        return self.model_dump(mode="json")


class Ok(Result):
    status: Literal["OK"] = "OK"


class Failure(Result):
    """
    Any unsuccessful outcome.

    Attributes:
        kind: Which error class this is
        message: Human-readable message for the caller
    """

    status: Literal["error"] = "error"
    kind: ErrorKind
    message: str

    def to_envelope(self) -> dict:
        return {"status": self.status, "message": self.message}

    @classmethod
    def validation(cls, message: str) -> "Failure":
        return cls(kind=ErrorKind.VALIDATION, message=message)

    @classmethod
    def conflict(cls, message: str) -> "Failure":
        return cls(kind=ErrorKind.CONFLICT, message=message)

    @classmethod
    def unauthorized(cls, message: str) -> "Failure":
        return cls(kind=ErrorKind.UNAUTHORIZED, message=message)

    @classmethod
    def storage(cls, message: str) -> "Failure":
        return cls(kind=ErrorKind.STORAGE, message=message)


# User domain

class EmailAvailable(Ok):
    pass


class UserCreated(Ok):
    id: int
    name: str
    email: str


class UserIdentity(Ok):
    id: int
    name: str
    email: str


class UserUpdated(Ok):
    message: str
    name: str


class UserDeleted(Ok):
    affected_rows: int


class UserList(Ok):
    users: List[User]


# Order domain

class OrderCreated(Ok):
    id: int


class OrderList(Ok):
    orders: List[Order]


class OrderUpdated(Ok):
    affected_rows: int


# Cart domain

class CartUpdated(Ok):
    affected_rows: int


class CartContents(Ok):
    items: List[Any]


CheckEmailResult = Union[EmailAvailable, Failure]
CreateUserResult = Union[UserCreated, Failure]
CheckUserResult = Union[UserIdentity, Failure]
UpdateUserResult = Union[UserUpdated, Failure]
DeleteUserResult = Union[UserDeleted, Failure]
UserListResult = Union[UserList, Failure]
CreateOrderResult = Union[OrderCreated, Failure]
OrderListResult = Union[OrderList, Failure]
UpdateOrderResult = Union[OrderUpdated, Failure]
UpdateCartResult = Union[CartUpdated, Failure]
GetCartResult = Union[CartContents, Failure]


def is_ok(result: Result) -> bool:
    """True for any success variant."""
    return isinstance(result, Ok)
