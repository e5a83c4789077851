"""
Alumnos API: Student SQLAlchemy Model
=====================================

What:  ORM model for the existing `DALUMN` table in MySQL.
Why:   Gives the repository typed, parameterized statements over columns
       whose historical names (aluctr, aluapp, ...) stay out of the API.
How:   Each attribute maps an English name onto the legacy column name.
       The schema itself is owned by the database; this model never
       migrates it (the tests create it in SQLite from this metadata).

Column map:
    id                aluctr   primary key, supplied by the client
    paternal_surname  aluapp
    maternal_surname  aluapm
    given_name        alunom
    sex               alusex
    birth_date        alunac   DATE, ISO-8601 string on the wire
    birth_place       alulna
    tax_id            alurfc   RFC
    national_id       alucur   CURP
    school_id         aluesc   school reference, not validated here
    email             alumai

Every column is NOT NULL, which is the only validation this service has.
"""

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from alumnos_api.database import Base


class IsoDate(TypeDecorator):
    """
    DATE column exchanged as an ISO-8601 string.

    Strings are parsed on the way in; a string that is not a date fails
    inside statement execution and therefore surfaces like any other
    driver error. Values read back are rendered as YYYY-MM-DD.
    """

    impl = Date
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if isinstance(value, str):
            return date.fromisoformat(value)
        return value

    def process_result_value(self, value, dialect):
        if isinstance(value, date):
            return value.isoformat()
        return value


class Student(Base):
    """One student record (one DALUMN row)."""

    __tablename__ = "DALUMN"

    id: Mapped[str] = mapped_column("aluctr", String(20), primary_key=True)
    paternal_surname: Mapped[str] = mapped_column("aluapp", String(50), nullable=False)
    maternal_surname: Mapped[str] = mapped_column("aluapm", String(50), nullable=False)
    given_name: Mapped[str] = mapped_column("alunom", String(50), nullable=False)
    sex: Mapped[str] = mapped_column("alusex", String(1), nullable=False)
    birth_date: Mapped[str] = mapped_column("alunac", IsoDate(), nullable=False)
    birth_place: Mapped[str] = mapped_column("alulna", String(100), nullable=False)
    tax_id: Mapped[str] = mapped_column("alurfc", String(13), nullable=False)
    national_id: Mapped[str] = mapped_column("alucur", String(18), nullable=False)
    school_id: Mapped[int] = mapped_column("aluesc", Integer, nullable=False)
    email: Mapped[str] = mapped_column("alumai", String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Student(id='{self.id}', given_name='{self.given_name}')>"
