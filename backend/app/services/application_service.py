"""
Gebeta Backend: Application Service
===================================

What:  Registration workflow for businesses that want to be listed.

Flow:
    submit()  → status 'pending'
    update()  → admin sets status and/or note
                first transition to 'approved' creates the Business and
                stores its id on the application; repeated approvals reuse
                that link, so a business is never created twice
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, InvalidInputError, NotFoundError
from app.models.application import APPLICATION_STATUSES, Application
from app.schemas.application import ApplicationCreate, ApplicationResponse, ApplicationUpdate
from app.services.business_service import business_service

logger = logging.getLogger(__name__)


class ApplicationService:

    async def submit(self, db: AsyncSession, data: ApplicationCreate) -> ApplicationResponse:
        application = Application(**data.model_dump(), status="pending")
        try:
            db.add(application)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error submitting application: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not submit the application. Please try again.",
            ) from e

        logger.info("Application submitted: %s (%s)", application.id, application.business_name)
        return ApplicationResponse.model_validate(application)

    async def list_applications(
        self,
        db: AsyncSession,
        status: Optional[str] = None,
    ) -> List[ApplicationResponse]:
        """List newest first. `status` of None or 'all' returns every application."""
        query = select(Application).order_by(Application.created_at.desc())
        if status and status != "all":
            if status not in APPLICATION_STATUSES:
                raise InvalidInputError(
                    message=f"Unknown status '{status}'. Must be one of: all, {', '.join(APPLICATION_STATUSES)}",
                    field="status",
                )
            query = query.where(Application.status == status)

        try:
            applications = (await db.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing applications: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not retrieve applications. Please try again.") from e
        return [ApplicationResponse.model_validate(a) for a in applications]

    async def get_application(self, db: AsyncSession, application_id: uuid.UUID) -> ApplicationResponse:
        return ApplicationResponse.model_validate(await self._load(db, application_id))

    async def update(
        self,
        db: AsyncSession,
        application_id: uuid.UUID,
        data: ApplicationUpdate,
    ) -> ApplicationResponse:
        application = await self._load(db, application_id)

        if data.status == "approved" and application.business_id is None:
            business = await business_service.insert(
                db,
                slug=application.business_name,
                name=application.business_name,
                category=application.category,
                description=application.description,
                location={"address": application.location},
            )
            application.business_id = business.id
            logger.info("Application %s approved, created business %s", application.id, business.id)

        if data.status is not None:
            application.status = data.status
        if data.admin_note is not None:
            application.admin_note = data.admin_note

        try:
            await db.flush()
            await db.refresh(application)
        except SQLAlchemyError as e:
            logger.error("Database error updating application %s: %s", application_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the application. Please try again.",
                context={"application_id": str(application_id)},
            ) from e

        return ApplicationResponse.model_validate(application)

    async def _load(self, db: AsyncSession, application_id: uuid.UUID) -> Application:
        try:
            application = await db.get(Application, application_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching application %s: %s", application_id, str(e))
            raise DatabaseError(context={"application_id": str(application_id)}) from e
        if application is None:
            raise NotFoundError(resource="application", resource_id=str(application_id))
        return application


application_service = ApplicationService()
