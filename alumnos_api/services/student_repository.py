"""
Alumnos API: Student Record Repository
======================================

What:  Translates the five record operations into parameterized statements
       against the DALUMN table.
Why:   Route handlers stay free of SQL; all driver failures are converted in
       exactly one place.
How:   Every operation opens a session scope from the pooled engine,
       executes one statement, commits, and releases the connection. The
       scope rolls back and releases on every failure path as well.
Who:   Built once by create_app() from a StoreConfig; injected into handlers.

Failure Translation:
    Any SQLAlchemyError (connectivity, constraint violation, bad parameter)
    becomes DatabaseError whose message is the driver's own text, e.g.
        MySQL:  "Duplicate entry 'A001' for key 'PRIMARY'"
        SQLite: "UNIQUE constraint failed: DALUMN.aluctr"

    Not-found is never an exception here: get_by_id() returns None and
    update()/delete() return the affected-row count.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from alumnos_api.config import StoreConfig
from alumnos_api.database import create_engine_for, create_session_factory
from alumnos_api.exceptions import DatabaseError
from alumnos_api.models.student import Student
from alumnos_api.schemas.student import StudentCreate, StudentRecord, StudentUpdate

logger = logging.getLogger(__name__)


def driver_message(exc: SQLAlchemyError) -> str:
    """
    Extract the store driver's native error text from a SQLAlchemy exception.

    PyMySQL-family drivers (aiomysql) raise errors whose args are
    (errno, message); only the message part is returned. Other drivers
    contribute the string form of the original exception.
    """
    orig = getattr(exc, "orig", None)
    if orig is None:
        return str(exc)
    args = getattr(orig, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return str(args[1])
    return str(orig)


class StudentRepository:
    """
    Data access for Student rows.

    Operations:
        list()              → every row, unordered
        get_by_id(id)       → the row or None
        create(fields)      → inserts all eleven attributes
        update(id, fields)  → overwrites ten attributes, returns affected rows
        delete(id)          → removes the row, returns affected rows

    The repository holds no per-request state; the engine's pool is
    the only thing shared between concurrent calls.
    """

    def __init__(self, config: StoreConfig):
        self.config = config
        self.engine = create_engine_for(config)
        self._session_factory = create_session_factory(self.engine)

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """
        Scoped acquisition: connection out of the pool → statement → release.

        Commits when the block succeeds; rolls back and converts the
        driver failure into DatabaseError otherwise. The session (and its
        connection) is closed on every path.
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as exc:
            message = driver_message(exc)
            logger.error("Database error during %s: %s", operation, message)
            raise DatabaseError(
                message=message,
                context={"operation": operation, "error_type": type(exc).__name__},
            ) from exc

    async def list(self) -> List[StudentRecord]:
        """SELECT every DALUMN row. No ordering and no limit."""
        async with self._transaction("list") as session:
            result = await session.execute(select(Student))
            students = [StudentRecord.model_validate(row) for row in result.scalars().all()]
        logger.debug("Listed %d students", len(students))
        return students

    async def get_by_id(self, student_id: str) -> Optional[StudentRecord]:
        """
        Fetch one row by identifier.

        Returns:
            The record, or None when no row matches.
        """
        async with self._transaction("get_by_id") as session:
            result = await session.execute(select(Student).where(Student.id == student_id))
            student = result.scalars().first()
            if student is None:
                return None
            return StudentRecord.model_validate(student)

    async def create(self, fields: StudentCreate) -> None:
        """
        INSERT one row with all eleven attributes.

        There is no existence check beforehand: a duplicate identifier is
        reported by the store's primary key and raised as DatabaseError.
        """
        values = fields.model_dump()
        async with self._transaction("create") as session:
            await session.execute(insert(Student).values(**values))
        logger.info("Student %s inserted", values.get("id"))

    async def update(self, student_id: str, fields: StudentUpdate) -> int:
        """
        UPDATE the ten non-identifier attributes of one row.

        Returns:
            Affected-row count. Zero when no row matched; the call still
            succeeds in that case.
        """
        statement = (
            update(Student)
            .where(Student.id == student_id)
            .values(**fields.model_dump())
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("update") as session:
            result = await session.execute(statement)
            affected = result.rowcount
        logger.info("Student %s updated (%d rows)", student_id, affected)
        return affected

    async def delete(self, student_id: str) -> int:
        """
        DELETE one row.

        Returns:
            Affected-row count: 0 means the identifier did not exist.
        """
        statement = (
            delete(Student)
            .where(Student.id == student_id)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction("delete") as session:
            result = await session.execute(statement)
            affected = result.rowcount
        logger.info("Student %s delete affected %d rows", student_id, affected)
        return affected

    async def ping(self) -> bool:
        """Round trip with SELECT 1. Used by the health check."""
        try:
            async with self._transaction("ping") as session:
                await session.execute(text("SELECT 1"))
        except DatabaseError:
            return False
        return True

    async def dispose(self) -> None:
        """Close every pooled connection (application shutdown)."""
        await self.engine.dispose()
