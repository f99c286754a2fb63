"""
HTTP master-data gateway.

Talks to a remote master-data API exposing ``/masters``,
``/masters/check`` and ``/masters/{type}``. Transport failures and
5xx answers are translated into the domain error taxonomy.
"""

import logging
from typing import Any

import httpx

from worklog.domain.masters.entities import (
    ITEM_CLASSES,
    MasterCollection,
    MasterSnapshot,
    MasterType,
    MasterVersions,
)
from worklog.domain.masters.gateway import MasterDataGateway
from worklog.domain.shared.exceptions import ServerError, TransportError

logger = logging.getLogger(__name__)


class HttpMasterDataGateway(MasterDataGateway):
    """Gateway issuing one HTTP GET per operation."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(
        self, path: str, params: dict[str, str] | None = None
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=params)
        except httpx.TransportError as e:
            raise TransportError(f"No response from {url}: {e}", url=url) from e

        if response.status_code >= 500:
            raise ServerError(
                f"Master source answered {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        if response.is_error:
            raise ServerError(
                f"Unexpected status {response.status_code} from {url}",
                status_code=response.status_code,
                url=url,
            )
        return response.json()

    async def load_all(self) -> MasterSnapshot:
        data = await self._get_json("/masters")
        return MasterSnapshot.model_validate(data)

    async def check_versions(self, versions: MasterVersions) -> list[MasterType]:
        data = await self._get_json("/masters/check", versions.as_query_params())
        stale = []
        for name in data.get("updatedMasters", []):
            try:
                stale.append(MasterType(name))
            except ValueError:
                logger.warning("Ignoring unknown master type %r in check response", name)
        return stale

    async def fetch_one(self, master_type: MasterType) -> MasterCollection:
        data = await self._get_json(f"/masters/{master_type.value}")
        item_class = ITEM_CLASSES[master_type]
        items = [item_class.model_validate(row) for row in data.get(master_type.value, [])]
        return MasterCollection(
            master_type=master_type, items=items, version=data["version"]
        )
