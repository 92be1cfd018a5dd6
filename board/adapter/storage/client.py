"""Object storage clients.

Stores attachment blobs in an S3-compatible (or plain HTTP) bucket gateway.
"""

from urllib.parse import quote

import httpx
import logfire

from board.config import StorageSettings
from board.domain.error import StorageUnavailableError, UploadFailedError
from board.domain.service.attachment_service import ObjectStorage


class HttpObjectStorage(ObjectStorage):
    """Object storage client speaking plain HTTP PUT to a bucket gateway."""

    def __init__(
        self, settings: StorageSettings, client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize storage client.

        Args:
            settings: Endpoint, bucket, public URL and credentials
            client: Shared HTTP client (one is created when omitted)
        """
        self.endpoint = settings.endpoint.rstrip("/")
        self.bucket = settings.bucket
        self.public_base_url = settings.public_base_url.rstrip("/")
        self.access_token = settings.access_token
        self.client = client or httpx.AsyncClient(timeout=settings.timeout_seconds)

    async def aclose(self) -> None:
        await self.client.aclose()

    def _object_url(self, key: str) -> str:
        return f"{self.endpoint}/{self.bucket}/{quote(key)}"

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{quote(key)}"

    async def put(self, content: bytes, key: str, content_type: str) -> str:
        """Upload a blob with a single PUT request."""
        headers = {"Content-Type": content_type}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = await self.client.put(
                self._object_url(key), content=content, headers=headers
            )
        except httpx.TransportError as e:
            logfire.error(
                "Object storage unreachable",
                endpoint=self.endpoint,
                key=key,
                error=str(e),
            )
            raise StorageUnavailableError(f"Object storage unreachable: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logfire.error(
                "Object storage request failed",
                endpoint=self.endpoint,
                key=key,
                error=str(e),
            )
            raise UploadFailedError(f"Object storage request failed: {e}") from e

        if response.status_code >= 400:
            logfire.error(
                "Object storage rejected upload",
                key=key,
                status_code=response.status_code,
                body=response.text[:500],
            )
            raise UploadFailedError(
                f"Object storage rejected upload with status {response.status_code}"
            )

        return self.public_url(key)


class InMemoryObjectStorage(ObjectStorage):
    """In-memory object storage for development and testing.

    Set `failure` to make every subsequent upload raise it.
    """

    def __init__(self, base_url: str = "memory://attachments") -> None:
        self.base_url = base_url
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.failure: Exception | None = None

    async def put(self, content: bytes, key: str, content_type: str) -> str:
        """Keep the blob in a dict."""
        if self.failure is not None:
            raise self.failure
        self.objects[key] = (content, content_type)
        return f"{self.base_url}/{key}"
