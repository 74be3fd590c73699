"""
User Schemas.

Pydantic schemas for the DaVinci user-management payloads and the values
passed between the shell, the session acquirer and the request dispatcher.

Field names follow the wire format. camelCase wire fields are exposed as
snake_case attributes through aliases; unknown fields are kept so that a
user read from a blob is sent back exactly as written.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

ZERO_GUID = "00000000-0000-0000-0000-000000000000"

ADMIN_ROLE_ID = "413f59a5-6354-116b-3b3e-0a94f94ea000"
AGENT_ROLE_ID = "d5fa771f-11a2-73af-a5fe-91f42c06e709"
NO_ACCESS_ROLE_ID = "e3759ee3-6add-ad4c-e970-4a5c7be32c1f"

DEFAULT_ACCOUNT_NAME = "Default"


class LogLevel(int, Enum):
    """Per-user server log level."""

    LOOP = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5
    CRITICAL = 6
    NONE = 100


class Method(str, Enum):
    """HTTP methods accepted by the request dispatcher."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def utc_timestamp() -> str:
    """Return the current UTC time as ISO 8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Credentials(RootModel[dict[str, Any]]):
    """Auth request payload, loaded once and sent verbatim."""


class SessionToken(BaseModel):
    """
    Full Set-Cookie string captured from the auth response.

    Immutable once acquired. The cookie is reused verbatim as the Cookie
    header of every later request and is never rendered by repr or str.
    """

    cookie: str = Field(min_length=1, repr=False)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "SessionToken(***REDACTED***)"


class Request(BaseModel):
    """A single dispatched call."""

    method: Method
    host: str
    path: str
    payload: Any = None
    token: SessionToken | None = None

    model_config = ConfigDict(frozen=True)

    def body(self) -> bytes:
        """Serialize the payload; an absent payload becomes the literal ``null``."""
        return json.dumps(self.payload).encode("utf-8")


class Profile(BaseModel):
    """A profile assigned to a user."""

    profileid: str
    profilename: str
    userid: str | None = None

    model_config = ConfigDict(extra="allow")


class User(BaseModel):
    """A single user record from the DaVinci API."""

    userid: str | None = None
    username: str
    email: str
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    password: str | None = None
    is_active: bool | None = Field(default=None, alias="isActive")
    roleid: str | None = None
    rolename: str | None = None
    accountid: str | None = None
    accountname: str | None = None
    original_accountid: str | None = Field(default=None, alias="originalAccountid")
    profileid: str | None = None
    profilename: str | None = None
    customerid: str | None = None
    has_license: bool | None = Field(default=None, alias="hasLicense")
    last_login_time: str | None = Field(default=None, alias="lastLoginTime")
    attributes: Any = None
    profiles: list[Profile] | None = None
    profiles_json: str | None = Field(default=None, alias="profilesJson")
    loglevel: int | None = None
    log_modified_date: str | None = Field(default=None, alias="logModifiedDate")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Wire representation, keeping only the fields that were set plus any unknown ones."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class NewUser(BaseModel):
    """Input for the create flow."""

    username: str = Field(min_length=1)
    profileid: str = Field(min_length=1)
    profilename: str = Field(min_length=1)

    @field_validator("username", "profileid", "profilename", mode="before")
    @classmethod
    def strip_whitespace(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    def to_user(self) -> User:
        """
        Build a User with the create defaults.

        The user is an active Agent on the caller's own account (zero GUID
        account id), holds a licence, logs nothing, and carries exactly one
        profile mirroring profileid/profilename.
        """
        profiles = [
            Profile(profileid=self.profileid, profilename=self.profilename, userid=ZERO_GUID),
        ]
        now = utc_timestamp()
        return User(
            username=self.username,
            email=self.username,
            profileid=self.profileid,
            profilename=self.profilename,
            is_active=True,
            roleid=AGENT_ROLE_ID,
            accountid=ZERO_GUID,
            accountname=DEFAULT_ACCOUNT_NAME,
            has_license=True,
            profiles=profiles,
            loglevel=LogLevel.NONE.value,
            profiles_json=json.dumps([p.model_dump() for p in profiles], separators=(",", ":")),
            last_login_time=now,
            log_modified_date=now,
        )
