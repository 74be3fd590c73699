# Pydantic schemas package
from davinci_cli.schemas.user import (
    Credentials,
    Method,
    NewUser,
    Profile,
    Request,
    SessionToken,
    User,
)

__all__ = [
    "Credentials",
    "Method",
    "NewUser",
    "Profile",
    "Request",
    "SessionToken",
    "User",
]
