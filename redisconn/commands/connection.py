"""Connection commands."""

from typing import Any

from redisconn.commands.conversions import to_pong, to_status
from redisconn.commands.dispatcher import (
    ARGUMENTS,
    CONNECTION,
    PASSWORD,
    CommandDispatcher,
    EncodableT,
)


class ConnectionCommands(CommandDispatcher):
    """AUTH, ECHO and PING."""

    def auth(self, password: str) -> str | None:
        """Authenticate the handle this command runs on.

        With pooling enabled only the borrowed handle is authenticated; the
        endpoint password given at init applies to every handle.
        """
        return self._execute(
            "AUTH", CONNECTION, lambda c: c.auth(password), (PASSWORD, password), convert=to_status
        )

    def echo(self, message: EncodableT) -> Any:
        """Return ``message`` unchanged."""
        return self._execute(
            "ECHO", CONNECTION, lambda c: c.echo(message), (ARGUMENTS, message)
        )

    def ping(self) -> str:
        """Returns ``"PONG"``."""
        return self._execute("PING", CONNECTION, lambda c: c.ping(), convert=to_pong)
