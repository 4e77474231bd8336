# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - backend base classes.

A backend only needs to implement the simple row operations, pages with
their participations, validation and version checks are done here.
"""

import threading
import time

from abc import abstractmethod, ABCMeta
from contextlib import contextmanager

from pageshare.items import Page
from pageshare.items.participation import make_participation
from pageshare.security import AccessLevel
from pageshare.storage.error import ConflictError, NoSuchPageError
from pageshare.storage.types import EmailAccess, Notice

from pageshare import log

logging = log.getLogger(__name__)

PAGE_FIELDS = (
    "id name title owner_kind owner_id owner_name created_by flow public created_at updated_at version".split()
)


class BackendBase(metaclass=ABCMeta):
    """
    Row level operations a backend has to provide. Each operation is
    atomic on its own.
    """

    @classmethod
    @abstractmethod
    def from_uri(cls, uri):
        """
        Create an instance using the data given in the URI.
        """

    @abstractmethod
    def create(self):
        """
        Create the backend.
        """

    @abstractmethod
    def destroy(self):
        """
        Destroy the backend; erase all data it contains.
        """

    @abstractmethod
    def open(self):
        """
        Open the backend; allocate resources.
        """

    @abstractmethod
    def close(self):
        """
        Close the backend; free resources (except the stored data!).
        """

    @abstractmethod
    def _load_page_row(self, page_id):
        """
        Return the row of page page_id or None.
        """

    @abstractmethod
    def _page_rows(self, **query):
        """
        Return the rows of all pages with fields equal to the query values.
        """

    @abstractmethod
    def _insert_page_row(self, row):
        """
        Store a new page row; return the new page id.
        """

    @abstractmethod
    def _update_page_row(self, row, expected_version):
        """
        Replace a page row if its stored version is expected_version;
        return False if the row does not exist or has another version.
        """

    @abstractmethod
    def _delete_page_row(self, page_id):
        """
        Delete a page row together with all rows belonging to the page.
        """

    @abstractmethod
    def _participation_rows(self, **query):
        """
        Return the participation rows with fields equal to the query values.
        """

    @abstractmethod
    def _store_participation_row(self, row):
        """
        Create or update the participation row with the same page_id,
        entity_kind and entity_id.
        """

    @abstractmethod
    def _delete_participation_row(self, page_id, entity_kind, entity_id):
        """
        Delete a participation row, if it exists.
        """

    @abstractmethod
    def _store_email_access_row(self, row):
        """
        Create or update the email access row with the same page_id and email.
        """

    @abstractmethod
    def _email_access_rows(self, **query):
        """
        Return the email access rows with fields equal to the query values.
        """

    @abstractmethod
    def _insert_notice_row(self, row):
        """
        Store a new notice row; return the new notice id.
        """

    @abstractmethod
    def _notice_rows(self, **query):
        """
        Return the notice rows with fields equal to the query values, oldest first.
        """


class MutableBackendBase(BackendBase):
    """
    Pages, participations, email access grants and notices on top of the
    row operations.
    """

    def __init__(self):
        self._locks = {}
        self._locks_lock = threading.Lock()

    @contextmanager
    def lock_page(self, page_id):
        """
        Serialize changes of one page. The lock is re-entrant, so code
        holding it may call save_page etc. Locks are dropped again when no
        thread holds or waits for them.
        """
        with self._locks_lock:
            entry = self._locks.setdefault(page_id, [threading.RLock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_lock:
                entry[1] -= 1
                if not entry[1]:
                    del self._locks[page_id]

    # pages

    def _page_from_row(self, row):
        page = Page(**{field: row[field] for field in PAGE_FIELDS})
        for part in self.participations_for_page(page.id):
            page.load_participation(part)
        page.mark_saved(self)
        return page

    def _page_to_row(self, page):
        row = {field: getattr(page, field) for field in PAGE_FIELDS}
        row["public"] = bool(row["public"])
        return row

    def get_page(self, page_id):
        """
        Load a page with its participations.

        :raises NoSuchPageError: if there is no such page
        """
        row = self._load_page_row(page_id)
        if row is None:
            raise NoSuchPageError(page_id)
        return self._page_from_row(row)

    def find_pages(self, **query):
        """all pages matching the query, e.g. find_pages(name="minutes", owner_id="rainbow")"""
        return [self._page_from_row(row) for row in self._page_rows(**query)]

    def save_page(self, page):
        """
        Store a page and its changed participations, delete its removed ones.

        :raises PageValidationError: if the page is invalid
        :raises ConflictError: if the page was changed by somebody else since it was loaded
        :returns: the page
        """
        page.validate(self)
        with self.lock_page(page.id):
            if page.id is None:
                now = int(time.time())
                page.created_at = page.created_at or now
                page.updated_at = page.updated_at or now
                page.version = 1
                row = self._page_to_row(page)
                del row["id"]
                page.id = self._insert_page_row(row)
                logging.debug(f"created page {page.id!r} {page.title!r}")
            else:
                expected_version = page.version
                row = self._page_to_row(page)
                row["version"] = expected_version + 1
                if not self._update_page_row(row, expected_version):
                    if self._load_page_row(page.id) is None:
                        raise NoSuchPageError(page.id)
                    raise ConflictError(page.id, expected_version)
                page.version = expected_version + 1
            for part in page.removed_participations.values():
                self._delete_participation_row(*part.key)
            for part in page.changed_participations():
                part.page_id = page.id
                self.save_participation(part)
            page.mark_saved(self)
        return page

    def destroy_page(self, page):
        """delete a page with all its participations, email access grants and notices"""
        with self.lock_page(page.id):
            self._delete_page_row(page.id)
        logging.debug(f"destroyed page {page.id!r}")
        page.storage = None

    def rename_entity(self, entity_kind, entity_id, name):
        """a user or group got renamed, update the owner names of its pages and its participations"""
        for page_row in self._page_rows(owner_kind=entity_kind, owner_id=entity_id):
            with self.lock_page(page_row["id"]):
                page = self.get_page(page_row["id"])
                page.owner_name = name
                self.save_page(page)
        for part in self.participations_for_entity(entity_kind, entity_id):
            part.entity_name = name
            self.save_participation(part)

    # participations

    def _participation_from_row(self, row):
        return make_participation(
            row["entity_kind"], row["page_id"], row["entity_id"], row["access"], entity_name=row["entity_name"], saved=True
        )

    def participations_for_page(self, page_id):
        return [self._participation_from_row(row) for row in self._participation_rows(page_id=page_id)]

    def participations_for_entity(self, entity_kind, entity_id):
        rows = self._participation_rows(entity_kind=entity_kind, entity_id=entity_id)
        return [self._participation_from_row(row) for row in rows]

    def get_participation(self, page_id, entity_kind, entity_id):
        rows = self._participation_rows(page_id=page_id, entity_kind=entity_kind, entity_id=entity_id)
        return self._participation_from_row(rows[0]) if rows else None

    def save_participation(self, part):
        """create or update a participation, atomic for this one row"""
        if part.page_id is None:
            raise ValueError(f"participation of an unsaved page: {part!r}")
        row = dict(
            page_id=part.page_id,
            entity_kind=part.entity_kind,
            entity_id=part.entity_id,
            entity_name=part.entity_name,
            access=int(part.access),
        )
        self._store_participation_row(row)
        part.mark_saved()
        return part

    def delete_participation(self, part):
        self._delete_participation_row(*part.key)

    # email access

    def save_email_access(self, access):
        row = dict(page_id=access.page_id, email=access.email, key=access.key, access=int(access.access))
        self._store_email_access_row(row)
        return access

    def get_email_access(self, page_id, email):
        rows = self._email_access_rows(page_id=page_id, email=email)
        if not rows:
            return None
        row = rows[0]
        return EmailAccess(row["page_id"], row["email"], row["key"], AccessLevel(row["access"]))

    # notices

    def add_notice(self, notice):
        row = notice._asdict()
        del row["id"]
        return notice._replace(id=self._insert_notice_row(row))

    def notices_for(self, recipient_kind, recipient_id):
        rows = self._notice_rows(recipient_kind=recipient_kind, recipient_id=recipient_id)
        return [Notice(**row) for row in rows]
