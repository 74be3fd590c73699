"""
Interactive Shell Mode.

Numbered menu loop over the user operations. Uses Rich for output.

The loop has two states: idle (menu shown, waiting for a choice) and
running (one operation executing). Every operation returns to idle whether
it succeeded or failed, so a bad local file or a dropped connection never
costs the authenticated session. Only the exit option ends the loop.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from rich.console import Console
from rich.markup import escape

from davinci_cli.core.exceptions import ApplicationError
from davinci_cli.core.logging import get_logger, log_with_source
from davinci_cli.schemas.user import SessionToken
from davinci_cli.services.users import UserService, build_user

logger = get_logger(__name__)

MENU = (
    "What do you want to do?"
    "\n(1) Export users"
    "\n(2) Import users"
    "\n(3) Delete Users"
    "\n(4) Create New User"
    "\n(5) Exit\n"
)

EXIT_CHOICE = "5"


class InteractiveShell:
    """
    Interactive menu for user operations.

    Usage:
        shell = InteractiveShell(service, token)
        await shell.run()
    """

    def __init__(
        self,
        service: UserService,
        token: SessionToken,
        console: Console | None = None,
        prompt: Callable[[str], str] | None = None,
    ) -> None:
        """
        Initialize the interactive shell.

        Args:
            service: User operations
            token: Session token passed to every operation
            console: Rich console for output
            prompt: Line input source; defaults to console.input
        """
        self.service = service
        self.token = token
        self.console = console or Console()
        self.prompt = prompt or self.console.input
        self.running = False
        self.commands: dict[str, Callable[[], Awaitable[Any]]] = {
            "1": self._cmd_export,
            "2": self._cmd_import,
            "3": self._cmd_delete,
            "4": self._cmd_create,
        }

    async def run(self) -> int:
        """Run the menu loop until the exit option is chosen. Returns the exit code."""
        self.running = True

        while self.running:
            try:
                choice = self.prompt(MENU).strip()
            except KeyboardInterrupt:
                self.console.print("\n[dim]Use 5 to exit[/dim]")
                continue
            except EOFError:
                break

            if choice == EXIT_CHOICE:
                self.running = False
                continue

            command = self.commands.get(choice)
            if command is None:
                log_with_source(logger, "cli", "warning", "invalid input", choice=choice)
                self.console.print("Invalid input")
                continue

            await self._execute(command)

        log_with_source(logger, "cli", "info", "Shell exited")
        return 0

    async def _execute(self, command: Callable[[], Awaitable[Any]]) -> None:
        """Run one operation, turning any failure into a logged message."""
        try:
            result = await command()
        except ApplicationError as e:
            log_with_source(
                logger,
                "cli",
                "error",
                "Operation failed",
                error_type=type(e).__name__,
                code=e.code,
                error=e.message,
            )
            self.console.print("[red]Failed to execute operation:[/red]")
            self.console.print(f"[red]{type(e).__name__}: {escape(e.message)}[/red]")
            return
        except Exception as e:
            logger.exception("Unexpected operation failure", source="cli")
            self.console.print("[red]Failed to execute operation:[/red]")
            self.console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
            return

        self.console.print_json(data=result)

    async def _cmd_export(self) -> Any:
        return await self.service.export_users(self.token)

    async def _cmd_import(self) -> Any:
        return await self.service.import_users(self.token)

    async def _cmd_delete(self) -> Any:
        return await self.service.delete_users(self.token)

    async def _cmd_create(self) -> Any:
        user = build_user(self.prompt)
        self.console.print_json(data=user.to_payload())
        return await self.service.create_user(self.token, user)
