# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.security.magiclink Tests
"""


import time

from flask import g as flaskg

from pageshare.security import AccessLevel, PermissionResolver, magiclink
from pageshare.utils.crypto import generate_token

from pageshare._tests import create_page


class TestMagicLink:

    def test_grant(self):
        page = create_page("Magic")
        record = magiclink.grant(flaskg.storage, page, " Bob@Example.com ")
        assert record.email == "bob@example.com"
        assert record.access is AccessLevel.VIEW
        assert record.key
        assert magiclink.has_grant(flaskg.storage, page, "bob@example.com")
        assert not magiclink.has_grant(flaskg.storage, page, "alice@example.com")

    def test_grant_is_capped_at_view(self):
        page = create_page("Magic admin")
        record = magiclink.grant(flaskg.storage, page, "bob@example.com", AccessLevel.ADMIN)
        assert record.access is AccessLevel.VIEW
        stored = flaskg.storage.get_email_access(page.id, "bob@example.com")
        assert stored.access is AccessLevel.VIEW

    def test_grant_twice_keeps_key(self):
        page = create_page("Magic twice")
        first = magiclink.grant(flaskg.storage, page, "bob@example.com")
        second = magiclink.grant(flaskg.storage, page, "BOB@example.com")
        assert first.key == second.key

    def test_validate(self):
        page = create_page("Magic validate")
        record = magiclink.grant(flaskg.storage, page, "bob@example.com")
        token = magiclink.make_token(record)
        assert magiclink.validate(flaskg.storage, page, "bob@example.com", token) == record
        assert magiclink.validate(flaskg.storage, page, "Bob@Example.com", token) == record

    def test_validate_rejects(self):
        page = create_page("Magic reject")
        other = create_page("Magic other")
        record = magiclink.grant(flaskg.storage, page, "bob@example.com")
        token = magiclink.make_token(record)
        assert magiclink.validate(flaskg.storage, page, "alice@example.com", token) is None
        assert magiclink.validate(flaskg.storage, other, "bob@example.com", token) is None
        assert magiclink.validate(flaskg.storage, page, "bob@example.com", "") is None
        assert magiclink.validate(flaskg.storage, page, "", token) is None
        forged = generate_token("some other key")[1]
        assert magiclink.validate(flaskg.storage, page, "bob@example.com", forged) is None

    def test_validate_timeout(self):
        page = create_page("Magic timeout")
        record = magiclink.grant(flaskg.storage, page, "bob@example.com")
        old_token = generate_token(record.key, stamp=int(time.time()) - 600)[1]
        assert magiclink.validate(flaskg.storage, page, "bob@example.com", old_token, timeout=60) is None
        assert magiclink.validate(flaskg.storage, page, "bob@example.com", old_token, timeout=None) == record

    def test_grants_are_no_participations(self):
        page = create_page("Magic apart")
        magiclink.grant(flaskg.storage, page, "bob@example.com")
        page = flaskg.storage.get_page(page.id)
        assert [part.entity_id for part in page.participations()] == ["aaron"]
        assert PermissionResolver(flaskg.groups).effective_access(flaskg.users["eve"], page) is None
