"""
Service Catalog
Create, fetch and update the services a provider offers
"""

import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.models.provider import ProviderResponse
from app.models.service import (
    Service, ServiceCreate, ServiceUpdate, ServiceResponse, ServiceWithProvider
)
from app.schemas.common import ActionResult
from app.services.base_service import BaseService
from app.services.provider_service import ProviderService, exact_match
from app.services.revalidation_service import RevalidationService
from app.utils.exceptions import ConsistencyError, DocumentLookupError, PersistenceError

logger = logging.getLogger(__name__)


class ServiceCatalog(BaseService[Service]):
    """
    Service actions

    A service and its provider's ``services_offered`` list are written in
    two steps. If the provider side fails after the service is inserted,
    the service is deleted again so neither side references a missing
    document.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        revalidator: RevalidationService,
        providers: Optional[ProviderService] = None
    ):
        super().__init__(db, "services", Service, id_field="service_id")
        self.revalidator = revalidator
        self.providers = providers or ProviderService(db, revalidator)

    async def get_service(self, service_id: str) -> Optional[ServiceWithProvider]:
        """
        Fetch a service with its provider resolved

        Returns:
            The service, or None if no service has ``service_id``

        Raises:
            DocumentLookupError: on a store failure
        """
        try:
            service = await self.get_by_id(service_id)
            if service is None:
                return None
            provider = await self.providers.find_one({"provider_id": service.provider_id})
        except PyMongoError as e:
            logger.error(f"Service lookup failed for {service_id}: {e}")
            raise DocumentLookupError(
                f"An error occurred while fetching a service: {e}",
                status_code=503
            ) from e

        return ServiceWithProvider(
            **service.model_dump(),
            provider=ProviderResponse(**provider.model_dump()) if provider else None
        )

    async def create_service(self, data: ServiceCreate) -> ActionResult[ServiceResponse]:
        """
        Create a service and link it to the provider

        Returns:
            ok with the new service, not_found when ``user_id`` has no
            provider (nothing is written), conflict when the provider
            already offers a service with that name

        Raises:
            ConsistencyError: the provider vanished before the link was written
            PersistenceError: on a store failure
        """
        inserted: Optional[Service] = None
        try:
            provider = await self.providers.find_one({"user_id": data.user_id})
            if provider is None:
                logger.info(f"Service not created: no provider for {data.user_id}")
                return ActionResult.not_found("Provider")

            if await self._name_taken(provider.provider_id, data.service_name):
                return ActionResult.conflict("A service with this name already exists")

            service = Service(
                provider_id=provider.provider_id,
                **data.model_dump(exclude={"user_id", "path"})
            )
            inserted = await self.create(service)

            linked = await self.providers.push(
                {"provider_id": provider.provider_id},
                "services_offered",
                service.service_id
            )
        except PyMongoError as e:
            logger.error(f"Service creation failed for {data.user_id}: {e}")
            if inserted is not None:
                await self._discard(inserted)
            raise PersistenceError(f"An error occurred when creating service: {e}") from e

        if linked is None:
            await self._discard(service)
            raise ConsistencyError(
                "Provider not found or update has failed",
                details={"provider_id": provider.provider_id, "service_id": service.service_id}
            )

        logger.info(f"Created service {service.service_id} for provider {provider.provider_id}")
        await self.revalidator.revalidate(data.path)

        return ActionResult.success(ServiceResponse(**service.model_dump()))

    async def fetch_services(self, user_id: str) -> list[ServiceResponse]:
        """
        List a provider's services in the order they were added

        Raises:
            DocumentLookupError: no provider for ``user_id``, or a store failure
        """
        try:
            provider = await self.providers.find_one({"user_id": user_id})
            services = await self.get_many_by_ids(provider.services_offered) if provider else []
        except PyMongoError as e:
            logger.error(f"Service listing failed for {user_id}: {e}")
            raise DocumentLookupError(
                f"An error occurred while fetching services: {e}",
                status_code=503
            ) from e

        if provider is None:
            raise DocumentLookupError(f"Provider with ID '{user_id}' not found")

        return [ServiceResponse(**service.model_dump()) for service in services]

    async def update_service(self, service_id: str, data: ServiceUpdate) -> ActionResult[ServiceResponse]:
        """
        Update a service

        ``image_url`` is written only when provided, so the stored image
        survives updates that leave it out.

        Returns:
            ok with the updated service, not_found when no service has
            ``service_id``

        Raises:
            PersistenceError: on a store failure
        """
        try:
            updated = await self.update(service_id, data.model_dump(exclude={"path"}))
        except PyMongoError as e:
            logger.error(f"Service update failed for {service_id}: {e}")
            raise PersistenceError(f"An error occurred while updating service: {e}") from e

        if updated is None:
            return ActionResult.not_found("Service")

        logger.info(f"Updated service {service_id}")
        await self.revalidator.revalidate(data.path)

        return ActionResult.success(ServiceResponse(**updated.model_dump()))

    async def _name_taken(self, provider_id: str, service_name: str) -> bool:
        query = {"provider_id": provider_id, "service_name": exact_match(service_name)}
        return await self.collection.find_one(query) is not None

    async def _discard(self, service: Service) -> None:
        """Compensating delete for a service that could not be linked"""
        try:
            await self.delete(service.service_id)
            logger.warning(f"Removed unlinked service {service.service_id}")
        except PyMongoError as e:
            logger.error(f"Unlinked service {service.service_id} could not be removed: {e}")
