"""
HTTP client for the Rust playground execution service.

Sends a single JSON request per snippet and maps the response to the
captured output shown to users:
- stdout when the program compiled and ran
- stderr otherwise (compiler errors, panics)
"""

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rustbot.config.schema import PlaygroundConfig
from rustbot.errors import PlaygroundError, PlaygroundTimeoutError


class ExecuteRequest(BaseModel):
    """Request body for the execute endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    channel: str = "stable"
    mode: str = "debug"
    edition: str = "2018"
    crate_type: str = Field(default="bin", alias="crateType")
    tests: bool = False
    code: str
    backtrace: bool = False


class ExecuteResponse(BaseModel):
    """Response body of the execute endpoint."""
    stdout: str
    stderr: str
    success: bool

    @property
    def output(self) -> str:
        """Captured output to show: stdout on success, stderr otherwise."""
        return self.stdout if self.success else self.stderr


class PlaygroundClient:
    """
    Async client for the execution service.

    Owns one httpx.AsyncClient; call close() (or use ``async with``)
    when done.
    """

    def __init__(
        self,
        config: PlaygroundConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config or PlaygroundConfig()
        self._client = client or httpx.AsyncClient(timeout=self.config.timeout)

    async def __aenter__(self) -> "PlaygroundClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def build_request(self, code: str) -> ExecuteRequest:
        """Build the request body for a program."""
        return ExecuteRequest(
            channel=self.config.channel,
            mode=self.config.mode,
            edition=self.config.edition,
            crate_type=self.config.crate_type,
            tests=self.config.tests,
            code=code,
            backtrace=self.config.backtrace,
        )

    async def execute(self, code: str) -> ExecuteResponse:
        """
        Compile and run a program on the execution service.

        Args:
            code: Complete Rust program source.

        Returns:
            Parsed service response.

        Raises:
            PlaygroundTimeoutError: The request timed out.
            PlaygroundError: Transport error, bad status or malformed body.
        """
        body = self.build_request(code).model_dump(by_alias=True)
        logger.debug(f"Executing {len(code)} bytes of code on {self.config.url}")

        try:
            response = await self._client.post(
                self.config.url,
                json=body,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise PlaygroundTimeoutError(f"request to {self.config.url} timed out") from e
        except httpx.HTTPStatusError as e:
            raise PlaygroundError(f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise PlaygroundError(str(e) or type(e).__name__) from e

        try:
            result = ExecuteResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise PlaygroundError("invalid response from execution service") from e

        logger.debug(f"Execution finished: success={result.success}")
        return result
