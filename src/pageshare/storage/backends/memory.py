# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - memory backend

Stores rows into memory (RAM, non-persistent!).

Note: likely this is mostly useful for unit tests.
"""

import threading

from . import MutableBackendBase


def _matches(row, query):
    return all(row.get(key) == value for key, value in query.items())


class MutableBackend(MutableBackendBase):
    """
    A simple dict-based in-memory backend. No persistence!
    """

    @classmethod
    def from_uri(cls, uri):
        return cls()

    def __init__(self):
        super().__init__()
        self._st = None
        self.__st = None
        self._rows_lock = threading.Lock()

    def create(self):
        self.__st = dict(pages={}, participations={}, email_access={}, notices={}, counters=dict(page=0, notice=0))

    def destroy(self):
        self.__st = None

    def open(self):
        self._st = self.__st

    def close(self):
        self._st = None

    def _next_id(self, kind):
        self._st["counters"][kind] += 1
        return self._st["counters"][kind]

    # pages

    def _load_page_row(self, page_id):
        with self._rows_lock:
            row = self._st["pages"].get(page_id)
            return dict(row) if row is not None else None

    def _page_rows(self, **query):
        with self._rows_lock:
            return [dict(row) for row in self._st["pages"].values() if _matches(row, query)]

    def _insert_page_row(self, row):
        with self._rows_lock:
            page_id = self._next_id("page")
            self._st["pages"][page_id] = dict(row, id=page_id)
            return page_id

    def _update_page_row(self, row, expected_version):
        with self._rows_lock:
            current = self._st["pages"].get(row["id"])
            if current is None or current["version"] != expected_version:
                return False
            self._st["pages"][row["id"]] = dict(row)
            return True

    def _delete_page_row(self, page_id):
        with self._rows_lock:
            self._st["pages"].pop(page_id, None)
            for table in ("participations", "email_access", "notices"):
                rows = self._st[table]
                for key in [key for key, row in rows.items() if row["page_id"] == page_id]:
                    del rows[key]

    # participations

    def _participation_rows(self, **query):
        with self._rows_lock:
            return [dict(row) for row in self._st["participations"].values() if _matches(row, query)]

    def _store_participation_row(self, row):
        key = row["page_id"], row["entity_kind"], row["entity_id"]
        with self._rows_lock:
            self._st["participations"][key] = dict(row)

    def _delete_participation_row(self, page_id, entity_kind, entity_id):
        with self._rows_lock:
            self._st["participations"].pop((page_id, entity_kind, entity_id), None)

    # email access

    def _store_email_access_row(self, row):
        with self._rows_lock:
            self._st["email_access"][row["page_id"], row["email"]] = dict(row)

    def _email_access_rows(self, **query):
        with self._rows_lock:
            return [dict(row) for row in self._st["email_access"].values() if _matches(row, query)]

    # notices

    def _insert_notice_row(self, row):
        with self._rows_lock:
            notice_id = self._next_id("notice")
            self._st["notices"][notice_id] = dict(row, id=notice_id)
            return notice_id

    def _notice_rows(self, **query):
        with self._rows_lock:
            rows = [dict(row) for row in self._st["notices"].values() if _matches(row, query)]
        return sorted(rows, key=lambda row: row["id"])
