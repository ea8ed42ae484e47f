"""Mirror catalog retrieval."""

import json

import httpx
from pydantic import ValidationError

from install_texlive.exceptions import MalformedCatalogError
from install_texlive.logger import get_logger
from install_texlive.models.mirror import CatalogUnavailable, MirrorCatalog

logger = get_logger(__name__)


class MirrorCatalogClient:
    """Fetches the mirror status catalog.

    Network trouble is a soft failure and yields ``CatalogUnavailable``. A
    catalog that was delivered but cannot be parsed raises.
    """

    def __init__(self, url: str, timeout: float = 30.0, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize the catalog client.

        Args:
            url: Catalog URL
            timeout: Request timeout in seconds
            client: Client to use instead of creating one per fetch
        """
        self.url = url
        self.timeout = timeout
        self._client = client

    async def fetch(self) -> MirrorCatalog | CatalogUnavailable:
        """Fetch and parse the catalog."""
        try:
            if self._client is not None:
                response = await self._client.get(self.url)
            else:
                async with httpx.AsyncClient(follow_redirects=True, timeout=self.timeout) as client:
                    response = await client.get(self.url)
        except httpx.HTTPError as e:
            logger.warning(f"Unable to retrieve mirror catalog from {self.url}: {e}")
            return CatalogUnavailable(reason=str(e) or type(e).__name__)

        if response.status_code != 200:
            logger.warning(f"Mirror catalog request to {self.url} returned status {response.status_code}")
            return CatalogUnavailable(reason=f"HTTP {response.status_code}")

        try:
            catalog = MirrorCatalog.from_document(json.loads(response.text))
        except (json.JSONDecodeError, ValidationError) as e:
            raise MalformedCatalogError(self.url, str(e)) from e

        logger.debug(f"Loaded mirror catalog with {len(catalog.records)} mirrors")
        return catalog
