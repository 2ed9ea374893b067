import json as jsonlib
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from navi_sdk.exceptions import NaviAPIError


@dataclass
class UnifiedResponse:
    """
    Transport-independent response.

    Transports read the body before releasing the connection, so the
    response stays usable after the underlying client has moved on.
    """

    status_code: int
    text: str
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        try:
            return jsonlib.loads(self.text)
        except ValueError as err:
            raise NaviAPIError(
                f"Invalid JSON in response from {self.url}",
                details=self.text[:200],
                status_code=self.status_code,
            ) from err


class BaseTransport:
    """
    Abstract transport layer interface for NAVI SDK.
    All HTTP client backends should inherit from this class.

    Implementations must raise NaviTransportError for network-level failures
    and return a UnifiedResponse for any HTTP status.
    """

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        raise NotImplementedError(
            "Transport implementations must override this method."
        )

    async def close(self):
        pass
