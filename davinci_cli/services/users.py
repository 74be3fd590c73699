"""
User Service.

The four user lifecycle operations. Each one composes the request
dispatcher with a fixed endpoint from application.yaml and a payload
shape from davinci_cli.schemas.user.

Blob-sourced data is validated before dispatch so that a malformed local
file never reaches the remote API.

Usage:
    service = UserService(client, get_app_config().application, BlobStore(), root)
    users = await service.export_users(token)
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from davinci_cli.client import APIClient
from davinci_cli.core.config_schema import ApplicationSchema
from davinci_cli.core.exceptions import ValidationError
from davinci_cli.core.logging import get_logger
from davinci_cli.schemas.user import Method, NewUser, SessionToken, User
from davinci_cli.storage.blob import BlobStore

_users_adapter = TypeAdapter(list[User])
_ids_adapter = TypeAdapter(list[str])


def _schema_error(source: str, error: SchemaValidationError) -> ValidationError:
    """Convert a pydantic error into an application ValidationError."""
    return ValidationError(
        f"Invalid data in {source}: {error.error_count()} error(s)",
        details={"errors": error.errors(include_url=False, include_input=False)},
    )


def build_user(
    prompt: Callable[[str], str],
    username: str | None = None,
    profileid: str | None = None,
    profilename: str | None = None,
) -> User:
    """
    Build a new User, prompting for any value not supplied.

    Args:
        prompt: Line input source, called with the question text
        username: Login name, also used as the email
        profileid: Id of the user's default profile
        profilename: Name of the user's default profile

    Returns:
        User with the create defaults applied

    Raises:
        ValidationError: If any of the three values is empty
    """
    username = username or prompt("Enter username: ")
    profileid = profileid or prompt("Enter profileid: ")
    profilename = profilename or prompt("Enter profilename: ")

    try:
        new_user = NewUser(username=username, profileid=profileid, profilename=profilename)
    except SchemaValidationError as e:
        raise _schema_error("new user", e) from e

    return new_user.to_user()


class UserService:
    """
    Export, import, delete and create users.

    Holds no session state: the token is passed to every call.
    """

    def __init__(
        self,
        client: APIClient,
        config: ApplicationSchema,
        store: BlobStore,
        base_dir: Path,
    ) -> None:
        self.client = client
        self.config = config
        self.store = store
        self.base_dir = base_dir
        self._logger = get_logger(self.__class__.__module__)

    @property
    def api_host(self) -> str:
        return self.config.hosts.api

    def blob_path(self, configured: str) -> Path:
        """Resolve a configured blob path against the base directory."""
        path = Path(configured)
        return path if path.is_absolute() else self.base_dir / path

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(operation, source="api", service=self.__class__.__name__, **context)

    async def export_users(self, token: SessionToken) -> list[Any]:
        """
        Fetch every user and write the array verbatim to the export blob.

        Raises:
            ValidationError: If the API does not return an array
        """
        users = await self.client.dispatch(
            Method.GET, self.api_host, self.config.endpoints.users, None, token,
        )
        if not isinstance(users, list):
            raise ValidationError(
                "Expected a user array from the API",
                details={"response": users},
            )

        path = self.store.write_array(self.blob_path(self.config.blobs.export_users), users)
        self._log_operation("Users exported", count=len(users), path=str(path))
        return users

    async def import_users(self, token: SessionToken) -> Any:
        """
        Send the users of the import blob to the bulk-import endpoint.

        Returns:
            The remote per-user failure report, unchanged
        """
        path = self.blob_path(self.config.blobs.import_users)
        raw = self.store.read_array(path)
        if not raw:
            raise ValidationError(f"No users to import in {path}")

        try:
            _users_adapter.validate_python(raw, strict=True)
        except SchemaValidationError as e:
            raise _schema_error(str(path), e) from e

        # Sent exactly as read; validation only rejects, it never rewrites.
        payload = raw
        self._logger.debug("Import payload", source="api", payload=payload)
        report = await self.client.dispatch(
            Method.PUT, self.api_host, self.config.endpoints.import_users, payload, token,
        )
        self._log_operation("Users imported", count=len(payload))
        return report

    async def delete_users(self, token: SessionToken) -> Any:
        """
        Send the user ids of the delete blob to the bulk-delete endpoint.

        Returns:
            The remote per-id failure report, unchanged
        """
        path = self.blob_path(self.config.blobs.delete_users)
        raw = self.store.read_array(path)
        if not raw:
            raise ValidationError(f"No user ids to delete in {path}")

        try:
            ids = _ids_adapter.validate_python(raw, strict=True)
        except SchemaValidationError as e:
            raise _schema_error(str(path), e) from e

        if any(not user_id.strip() for user_id in ids):
            raise ValidationError(f"Empty user id in {path}")

        report = await self.client.dispatch(
            Method.POST, self.api_host, self.config.endpoints.delete_users, ids, token,
        )
        self._log_operation("Users deleted", count=len(ids))
        return report

    async def create_user(self, token: SessionToken, user: User) -> Any:
        """
        Create one user.

        The API has no single-create endpoint, so the user is sent to the
        bulk-import endpoint as a one-element array.
        """
        payload = [user.to_payload()]
        self._logger.debug("Create payload", source="api", payload=payload)
        response = await self.client.dispatch(
            Method.PUT, self.api_host, self.config.endpoints.import_users, payload, token,
        )
        self._log_operation("User created", username=user.username)
        return response
