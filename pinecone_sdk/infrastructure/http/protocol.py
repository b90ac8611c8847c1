"""Protocol definition for control-plane transports."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class TransportResponse:
    """Status and raw body of one control-plane exchange."""

    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class ControlPlaneTransport(Protocol):
    """Protocol for executing control-plane requests.

    Implementations send exactly one request per call and never retry.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
    ) -> TransportResponse:
        """Execute one request.

        Args:
            method: HTTP verb.
            path: Path relative to the controller host, e.g. ``/indexes``.
            json: Optional JSON-serializable request body.

        Returns:
            The response status and body, whatever the status.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
