# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - sqlalchemy backend

Stores rows into any database supported by sqlalchemy.

Every row operation runs in its own transaction. Page rows carry a version
number, updates only succeed if the version did not change since loading.
"""

import os

from contextlib import contextmanager

from sqlalchemy import create_engine, select, and_, MetaData, Table, Column, Integer, String, Boolean, Text
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pageshare.storage.error import StorageError
from . import MutableBackendBase

from pageshare import log

logging = log.getLogger(__name__)

NAME_LEN = 255
KIND_LEN = 16
KEY_LEN = 64


class MutableBackend(MutableBackendBase):
    """
    Pages, participations, email access grants and notices in a sql database.
    """

    @classmethod
    def from_uri(cls, uri):
        """
        Create a new cls instance from the using the uri

        :param cls: Class to create
        :param uri: The database uri that we pass on to SQLAlchemy, empty for
                    an in-memory sqlite database.
        """
        # using "::" to support windows pathnames that
        # may include ":" after the drive letter.
        params = uri.split("::")
        return cls(*params)

    def __init__(self, db_uri=None, table_prefix="", verbose=False):
        """
        :param db_uri: The database uri that we pass on to SQLAlchemy.
                       May contain user/password/host/port/etc.
        :param table_prefix: prefix for the table names
        :param verbose: Verbosity setting. If set to True this will print all SQL queries
                        to the console.
        """
        super().__init__()
        self.db_uri = db_uri or None
        self.verbose = verbose
        self.engine = None
        if self.db_uri and self.db_uri.startswith("sqlite:///"):
            db_path = os.path.dirname(self.db_uri.split("sqlite:///")[1])
            if db_path and not os.path.exists(db_path):
                os.makedirs(db_path)

        self.metadata = MetaData()
        self.pages = Table(
            table_prefix + "pages",
            self.metadata,
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("name", String(NAME_LEN), index=True),
            Column("title", String(NAME_LEN)),
            Column("owner_kind", String(KIND_LEN)),
            Column("owner_id", String(NAME_LEN)),
            Column("owner_name", String(NAME_LEN)),
            Column("created_by", String(NAME_LEN)),
            Column("flow", String(KIND_LEN)),
            Column("public", Boolean),
            Column("created_at", Integer),
            Column("updated_at", Integer),
            Column("version", Integer, nullable=False),
        )
        self.participations = Table(
            table_prefix + "participations",
            self.metadata,
            Column("page_id", Integer, nullable=False),
            Column("entity_kind", String(KIND_LEN), nullable=False),
            Column("entity_id", String(NAME_LEN), nullable=False),
            Column("entity_name", String(NAME_LEN)),
            Column("access", Integer, nullable=False),
            PrimaryKeyConstraint("page_id", "entity_kind", "entity_id"),
        )
        self.email_access = Table(
            table_prefix + "email_access",
            self.metadata,
            Column("page_id", Integer, nullable=False),
            Column("email", String(NAME_LEN), nullable=False),
            Column("key", String(KEY_LEN), nullable=False),
            Column("access", Integer, nullable=False),
            PrimaryKeyConstraint("page_id", "email"),
        )
        self.notices = Table(
            table_prefix + "notices",
            self.metadata,
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("recipient_kind", String(KIND_LEN), nullable=False),
            Column("recipient_id", String(NAME_LEN), nullable=False),
            Column("kind", String(NAME_LEN)),
            Column("page_id", Integer),
            Column("sender", String(NAME_LEN)),
            Column("message", Text),
            Column("created_at", Integer),
        )

    def open(self):
        if self.engine is not None:
            return
        if self.db_uri is None:
            # These are settings that apply only for development / testing only. The additional args are necessary
            # due to some limitations of the in-memory sqlite database.
            self.engine = create_engine(
                "sqlite:///:memory:", poolclass=StaticPool, connect_args={"check_same_thread": False}
            )
        else:
            self.engine = create_engine(self.db_uri, echo=self.verbose, echo_pool=self.verbose)

    def close(self):
        # an in-memory database would vanish together with its engine
        if self.engine is not None and self.db_uri is not None:
            self.engine.dispose()
            self.engine = None

    def create(self):
        self.open()
        with self._transaction() as conn:
            self.metadata.create_all(conn)
        self.close()

    def destroy(self):
        self.open()
        with self._transaction() as conn:
            self.metadata.drop_all(conn)
        self.close()

    @contextmanager
    def _transaction(self):
        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            logging.error(f"database error: {e}")
            raise StorageError(f"database error: {e}")

    def _where(self, table, query):
        return and_(*[table.c[key] == value for key, value in query.items()])

    def _select(self, table, query, order_by=None):
        statement = select(table)
        if query:
            statement = statement.where(self._where(table, query))
        if order_by is not None:
            statement = statement.order_by(order_by)
        with self._transaction() as conn:
            return [dict(row._mapping) for row in conn.execute(statement)]

    def _upsert(self, table, row, key_fields):
        key = {field: row[field] for field in key_fields}
        try:
            with self._transaction() as conn:
                result = conn.execute(table.update().where(self._where(table, key)).values(**row))
                if result.rowcount == 0:
                    conn.execute(table.insert().values(**row))
        except StorageError as e:
            inner = e.innerException[1]
            if not isinstance(inner, IntegrityError):
                raise
            # somebody else inserted the same row meanwhile
            with self._transaction() as conn:
                conn.execute(table.update().where(self._where(table, key)).values(**row))

    # pages

    def _load_page_row(self, page_id):
        rows = self._select(self.pages, dict(id=page_id))
        return rows[0] if rows else None

    def _page_rows(self, **query):
        return self._select(self.pages, query, order_by=self.pages.c.id)

    def _insert_page_row(self, row):
        with self._transaction() as conn:
            result = conn.execute(self.pages.insert().values(**row))
            return result.inserted_primary_key[0]

    def _update_page_row(self, row, expected_version):
        t = self.pages
        with self._transaction() as conn:
            result = conn.execute(t.update().where(and_(t.c.id == row["id"], t.c.version == expected_version)).values(**row))
            return result.rowcount == 1

    def _delete_page_row(self, page_id):
        with self._transaction() as conn:
            for table in (self.participations, self.email_access, self.notices):
                conn.execute(table.delete().where(table.c.page_id == page_id))
            conn.execute(self.pages.delete().where(self.pages.c.id == page_id))

    # participations

    def _participation_rows(self, **query):
        return self._select(self.participations, query)

    def _store_participation_row(self, row):
        self._upsert(self.participations, row, ("page_id", "entity_kind", "entity_id"))

    def _delete_participation_row(self, page_id, entity_kind, entity_id):
        key = dict(page_id=page_id, entity_kind=entity_kind, entity_id=entity_id)
        with self._transaction() as conn:
            conn.execute(self.participations.delete().where(self._where(self.participations, key)))

    # email access

    def _store_email_access_row(self, row):
        self._upsert(self.email_access, row, ("page_id", "email"))

    def _email_access_rows(self, **query):
        return self._select(self.email_access, query)

    # notices

    def _insert_notice_row(self, row):
        with self._transaction() as conn:
            result = conn.execute(self.notices.insert().values(**row))
            return result.inserted_primary_key[0]

    def _notice_rows(self, **query):
        return self._select(self.notices, query, order_by=self.notices.c.id)
