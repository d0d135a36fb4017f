"""
Provider Service
Profile reads and updates for service providers
"""

import logging
import re
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.models.provider import Provider, ProviderProfileUpdate, ProviderResponse
from app.schemas.common import ActionResult
from app.services.base_service import BaseService
from app.services.revalidation_service import RevalidationService
from app.utils.exceptions import DocumentLookupError, PersistenceError

logger = logging.getLogger(__name__)


def exact_match(value: str) -> dict:
    """Case-insensitive whole-string regex query"""
    return {"$regex": f"^{re.escape(value)}$", "$options": "i"}


class ProviderService(BaseService[Provider]):
    """Provider profile actions"""

    def __init__(self, db: AsyncIOMotorDatabase, revalidator: RevalidationService):
        super().__init__(db, "providers", Provider, id_field="provider_id")
        self.revalidator = revalidator

    async def get_provider(self, user_id: str) -> Optional[Provider]:
        """Find a provider by account id, None if absent"""
        try:
            return await self.find_one({"user_id": user_id})
        except PyMongoError as e:
            logger.error(f"Provider lookup failed for {user_id}: {e}")
            raise DocumentLookupError(
                f"An error occurred while fetching a provider: {e}",
                status_code=503
            ) from e

    async def update_profile(self, data: ProviderProfileUpdate) -> ActionResult[ProviderResponse]:
        """
        Apply a profile update

        ``image_url`` is written only when provided. The company name must
        not belong to another provider.

        Returns:
            ok with the updated profile, not_found when no provider has
            ``user_id``, conflict when the company name is taken

        Raises:
            PersistenceError: on a store failure
        """
        try:
            provider = await self.find_one({"user_id": data.user_id})
            if provider is None:
                return ActionResult.not_found("Provider")

            duplicate = await self.collection.find_one({
                "company_name": exact_match(data.company_name),
                "user_id": {"$ne": data.user_id}
            })
            if duplicate:
                return ActionResult.conflict("Company already exists")

            updated = await self.update(
                provider.provider_id,
                data.model_dump(exclude={"user_id", "path"})
            )
        except PyMongoError as e:
            logger.error(f"Profile update failed for {data.user_id}: {e}")
            raise PersistenceError(f"An error occurred while updating the profile: {e}") from e

        if updated is None:
            return ActionResult.not_found("Provider")

        logger.info(f"Updated profile for provider {updated.provider_id}")
        await self.revalidator.revalidate(data.path)

        return ActionResult.success(ProviderResponse(**updated.model_dump()))
