"""Shared plumbing for the entity repositories.

Each repository wraps one injected SQLAlchemy Session. Every public method
is a short sequence of independent round trips (check, then act) committed
as it goes; nothing spans more than one entity mutation.
"""
from __future__ import annotations
import logging
from typing import Any
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from errors import BadRequestError, DuplicateResourceError, PortfolioManagerError
from services.sql import PartialUpdate

logger = logging.getLogger(__name__)


def _constraint_error(err: IntegrityError, duplicate_message: str) -> PortfolioManagerError:
    # sqlite: "UNIQUE constraint failed", postgres: "duplicate key value violates unique constraint"
    if "unique" in str(err.orig).lower():
        return DuplicateResourceError(duplicate_message)
    return BadRequestError(f"Constraint violation: {err.orig}")


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def _insert(self, obj: Any, duplicate_message: str) -> Any:
        """Insert and commit `obj`, returning it refreshed with generated columns.

        The caller's duplicate pre-check can race with a concurrent insert;
        the table's unique constraint is the last word and is reported the
        same way as the pre-check.
        """
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Insert rejected by store constraint: %s", e.orig)
            raise _constraint_error(e, duplicate_message) from e
        self.db.refresh(obj)
        return obj

    def _update(self, table: str, key_column: str, key: Any, update: PartialUpdate, duplicate_message: str) -> int:
        """Run `UPDATE <table> SET <update> WHERE <key_column> = key`; returns matched row count."""
        stmt = text(f'UPDATE {table} SET {update.set_cols} WHERE "{key_column}" = :target_key')
        try:
            matched = self.db.execute(stmt, {**update.params, "target_key": key}).rowcount
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Update of %s %s rejected by store constraint: %s", table, key, e.orig)
            raise _constraint_error(e, duplicate_message) from e
        return matched
