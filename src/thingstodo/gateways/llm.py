from functools import wraps

import httpx
from loguru import logger

from thingstodo.errors import RemoteGenerationError

SYSTEM_PROMPT = "You are a helpful travel planning assistant. Always respond with valid JSON."


def with_client(func):
    """Provide an ``httpx.AsyncClient`` unless the caller passes ``client``."""

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        if kwargs.get("client") is not None:
            return await func(self, *args, **kwargs)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            kwargs["client"] = client
            return await func(self, *args, **kwargs)

    return wrapper


class ArkGateway:
    """Chat-completion client for the text-generation service."""

    def __init__(
        self,
        api_key: str | None,
        endpoint: str,
        model: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the gateway.

        Args:
            api_key: Bearer token for the service. Calls fail fast without one.
            endpoint: Full URL of the chat completions endpoint.
            model: Model identifier sent with every request.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.api_key = api_key
        self.endpoint = endpoint
        self.model = model
        self.timeout = timeout
        self.transport = transport

    @with_client
    async def complete(self, prompt: str, *, client: httpx.AsyncClient = None) -> str:
        """Send ``prompt`` and return the text of the first choice.

        Raises:
            RemoteGenerationError: missing key, timeout, transport failure,
                non-success status or a payload without message content.
        """
        if not self.api_key:
            raise RemoteGenerationError("API key not configured. Set ARK_API_KEY or ark_api_key in the config file.")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        logger.info(f"Requesting completion from '{self.endpoint}' with model '{self.model}'")
        try:
            response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            raise RemoteGenerationError(f"Request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise RemoteGenerationError(f"Network error: {e}") from e

        if not response.is_success:
            logger.error(f"Generation API error {response.status_code}: {response.text[:200]}")
            raise RemoteGenerationError(
                f"API Error: {response.status_code} {response.reason_phrase}", status_code=response.status_code
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RemoteGenerationError(f"Unexpected response payload: {e}") from e

        if not isinstance(content, str):
            raise RemoteGenerationError("Response message has no text content")
        return content
