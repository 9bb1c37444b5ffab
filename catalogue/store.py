"""
catalogue/store.py -- SQLAlchemy-backed store for the shared option catalogue.

The catalogue is never edited piecemeal. A designer saving preferences
replaces the whole set: replace_all() deletes every option and inserts the
new ones inside a single transaction (engine.begin()), so a failure part-way
rolls back to the previous catalogue and concurrent readers see either the
old set or the new one.

Usage:
    store = OptionStore("sqlite:///designdesk.db")
    store.replace_all([OptionGroup("Color", ["Red", "Blue"])])
    store.list_all()
    store.close()
"""

import logging

from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

from catalogue.models import Option, OptionGroup
from core.db import make_engine

logger = logging.getLogger("designdesk.catalogue")

metadata = MetaData()

_options = Table(
    "options",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("type", String(255), nullable=False),
)


class OptionStore:
    """Repository for Option entities."""

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    def list_all(self) -> list[Option]:
        """Return every option in insertion order."""
        with self.engine.connect() as conn:
            rows = conn.execute(_options.select().order_by(_options.c.id)).fetchall()
        return [_row_to_option(r) for r in rows]

    def replace_all(self, groups: list[OptionGroup]) -> list[Option]:
        """Atomically swap the catalogue for the options in groups.

        Each option string in a group becomes Option(name=option, type=group.topic_name),
        in submission order. Returns the new catalogue.
        """
        saved: list[Option] = []
        with self.engine.begin() as conn:
            deleted = conn.execute(_options.delete()).rowcount
            for group in groups:
                for name in group.options:
                    result = conn.execute(_options.insert().values(name=name, type=group.topic_name))
                    saved.append(Option(id=result.inserted_primary_key[0], name=name, type=group.topic_name))
        logger.info("Option catalogue replaced: %d removed, %d saved", deleted, len(saved))
        return saved

    def close(self) -> None:
        self.engine.dispose()


def _row_to_option(row) -> Option:
    return Option(id=row.id, name=row.name, type=row.type)
