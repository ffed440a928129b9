"""
TxtStore — Record SQLAlchemy Model
===================================

What:  ORM model representing the `records` table.
Why:   The single table definition is the source of the bootstrap DDL and the
       target of every Record Store statement.
Who:   Used by RecordStore for statements and by the bootstrap for schema creation.

Table Design:
    - id: integer identity generated by the database (SERIAL on PostgreSQL,
      INTEGER PRIMARY KEY AUTOINCREMENT on SQLite). Both are monotonic, so an id
      is never handed out again after its row is deleted.
    - txt: TEXT, no length limit at this layer.
    No indexes beyond the primary key; List has no ORDER BY.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from txtstore.database import Base

# Range of the 32-bit INTEGER id column (SERIAL on PostgreSQL)
MIN_RECORD_ID = -(2 ** 31)
MAX_RECORD_ID = 2 ** 31 - 1


class Record(Base):
    """A single text record. Created, listed, and deleted; never updated."""

    __tablename__ = "records"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    txt: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Without AUTOINCREMENT, SQLite may reuse the highest id after it is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"<Record(id={self.id}, txt={self.txt!r})>"
