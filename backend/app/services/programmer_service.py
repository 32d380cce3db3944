"""
Programmers Backend — Programmer Service (Business Logic)
===========================================================

What:  CRUD operations for the Programmer resource.
How:   Validate normalized payload → hash password when supplied → persist.
Who:   Called by the /api/programmers route handlers.

Error Handling Strategy:
    - Field rule violations → FieldValidationError (422, field → messages)
    - Missing records       → NotFoundError (404)
    - SQLAlchemy failures   → DatabaseError (500, generic message, details logged)
    Application errors raised inside a method propagate unchanged.

ProgrammerService is stateless; the session is passed into every call and
the commit happens in get_db_session once the route returns.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Type

import pydantic
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, FieldValidationError, NotFoundError
from app.models.programmer import ID_MAX, Programmer
from app.schemas.programmer import (
    ProgrammerCreate,
    ProgrammerPatch,
    ProgrammerUpdate,
    collect_field_errors,
)
from app.services.password_service import hash_password

logger = logging.getLogger(__name__)


def validate_input(
    model: Type[pydantic.BaseModel], data: Dict[str, Any]
) -> pydantic.BaseModel:
    """Validates `data` against `model`, raising FieldValidationError on failure."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise FieldValidationError(errors=collect_field_errors(e))


class ProgrammerService:
    """
    Business logic layer for programmer records.

    Responsibilities:
        - list_programmers(): ordered listing with limit/offset and total count
        - get_programmer(): single lookup with not-found handling
        - create_programmer() / update_programmer() / delete_programmer()
    """

    async def list_programmers(
        self,
        db: AsyncSession,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[Programmer], int]:
        """
        Returns (records, total_count), ordered by id ascending.

        Query plan:
            SELECT * FROM programmers ORDER BY id LIMIT :limit OFFSET :offset
            SELECT count(id) FROM programmers
        """
        try:
            query = select(Programmer).order_by(Programmer.id).offset(offset)
            if limit is not None:
                query = query.limit(limit)
            result = await db.execute(query)
            programmers = list(result.scalars().all())

            count_result = await db.execute(select(func.count(Programmer.id)))
            total_count = count_result.scalar() or 0
            return programmers, total_count

        except SQLAlchemyError as e:
            logger.error("Database error listing programmers: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve programmers. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_programmer(self, db: AsyncSession, programmer_id: int) -> Programmer:
        """
        Raises:
            NotFoundError: no record with this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        # Ids outside the column range cannot exist; the driver would reject them
        if not 0 < programmer_id <= ID_MAX:
            raise NotFoundError(resource="programmer", resource_id=str(programmer_id))

        try:
            result = await db.execute(
                select(Programmer).where(Programmer.id == programmer_id)
            )
            programmer = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching programmer %s: %s", programmer_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the programmer. Please try again.",
                context={"programmer_id": programmer_id},
            )

        if programmer is None:
            raise NotFoundError(resource="programmer", resource_id=str(programmer_id))
        return programmer

    async def create_programmer(self, db: AsyncSession, data: Dict[str, Any]) -> Programmer:
        """
        Validates and inserts a new record.

        Workflow:
            1. Validate against ProgrammerCreate (all fields required)
            2. Hash the password; the plaintext goes no further
            3. Add + flush to obtain the generated id
        """
        payload = validate_input(ProgrammerCreate, data)
        # argon2 is CPU-bound; keep it off the event loop
        password_hash = await run_in_threadpool(hash_password, payload.password)

        programmer = Programmer(
            name=payload.name,
            experience=payload.experience,
            password_hash=password_hash,
        )
        try:
            db.add(programmer)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating programmer: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the programmer. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Programmer %s created", programmer.id)
        return programmer

    async def update_programmer(
        self,
        db: AsyncSession,
        programmer_id: int,
        data: Dict[str, Any],
        partial: bool = False,
    ) -> Programmer:
        """
        Full (PUT) or partial (PATCH) update.

        PUT:   name and experience required; password optional.
        PATCH: only the supplied fields are validated and applied.
        An omitted password keeps the stored hash.
        """
        programmer = await self.get_programmer(db, programmer_id)

        model = ProgrammerPatch if partial else ProgrammerUpdate
        payload = validate_input(model, data)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        password = changes.pop("password", None)
        for field, value in changes.items():
            setattr(programmer, field, value)
        if password is not None:
            programmer.password_hash = await run_in_threadpool(hash_password, password)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating programmer %s: %s", programmer_id, str(e))
            raise DatabaseError(
                message="Could not save the programmer. Please try again.",
                context={"programmer_id": programmer_id},
            )

        logger.info(
            "Programmer %s updated (fields: %s%s)",
            programmer_id,
            ", ".join(sorted(changes)) or "none",
            ", password" if password is not None else "",
        )
        return programmer

    async def delete_programmer(self, db: AsyncSession, programmer_id: int) -> None:
        programmer = await self.get_programmer(db, programmer_id)
        try:
            await db.delete(programmer)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting programmer %s: %s", programmer_id, str(e))
            raise DatabaseError(
                message="Could not delete the programmer. Please try again.",
                context={"programmer_id": programmer_id},
            )
        logger.info("Programmer %s deleted", programmer_id)


programmer_service = ProgrammerService()
