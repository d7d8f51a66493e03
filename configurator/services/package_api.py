"""
Storefront Package API
======================

Thin adapter over the storefront's package endpoints.

- Catalog fetch: features/add-ons/usage tiers for a customizable package,
  add-ons only for a standard one. Failures degrade to an empty catalog so
  the wizard still opens with "no items" states.
- Selection submit: posts the confirmed package selection. Failures are
  reported as recoverable PersistenceError.

No caching, retries or auth: those belong to the hosting application.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from configurator.config import StorefrontAPIConfig
from configurator.exceptions import CatalogError, PersistenceError
from configurator.models.catalog import Catalog, Package

logger = logging.getLogger(__name__)

CUSTOM_FEATURES_PATH = "/api/pricingpackages/custom/features"
ADD_ONS_PATH = "/api/AddOns"
SELECT_PATH = "/api/pricingpackages/custom/select"


class PackageApiClient:
    """
    Async client for catalog fetch and selection submit.

    Usage:
        async with PackageApiClient.from_config(config.api) as api:
            catalog = await api.fetch_catalog(package)
            controller = ConfigurationController(package, catalog, persistence=api)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    @classmethod
    def from_config(cls, config: StorefrontAPIConfig) -> "PackageApiClient":
        return cls(base_url=config.base_url, timeout=config.timeout)

    async def __aenter__(self) -> "PackageApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def fetch_catalog(self, package: Package) -> Catalog:
        """
        Fetch the catalog offered for a package.

        Never raises: transport errors, bad status codes and malformed
        bodies all yield an empty catalog.
        """
        path = CUSTOM_FEATURES_PATH if package.is_customizable else ADD_ONS_PATH
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Failed to load package config for {package.id}: {e}")
            return Catalog.empty()
        except ValueError as e:
            logger.warning(f"Package config for {package.id} is not JSON: {e}")
            return Catalog.empty()

        try:
            if package.is_customizable:
                catalog = Catalog.from_api(data)
            else:
                items = data.get("addOns", data.get("items", [])) if isinstance(data, dict) else data
                catalog = Catalog.add_ons_only(items)
        except CatalogError as e:
            logger.warning(f"Discarding malformed catalog for package {package.id}: {e}")
            return Catalog.empty()

        logger.info(
            f"Loaded catalog for package {package.id}: "
            f"{len(catalog.core_features)} features, {len(catalog.add_ons)} add-ons, "
            f"{len(catalog.usage_based_pricing)} usage tiers",
            extra={"package_id": package.id},
        )
        return catalog

    async def submit_selection(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit a package selection request.

        Raises:
            PersistenceError: Transport failure or non-2xx response
        """
        try:
            response = await self._client.post(SELECT_PATH, json=request)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PersistenceError(
                f"Package selection rejected: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise PersistenceError(f"Package selection request failed: {e}") from e

        logger.info(f"Submitted selection for package {request.get('packageId')}")
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}
