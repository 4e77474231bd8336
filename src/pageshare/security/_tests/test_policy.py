# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.security.policy Tests
"""


import pytest

from flask import current_app as app
from flask import g as flaskg

from pageshare.constants.misc import FLOW_DELETED
from pageshare.error import PermissionDenied
from pageshare.items import Page
from pageshare.security import AccessControlList, AccessLevel, PermissionResolver
from pageshare.security.policy import PagePolicy
from pageshare.user import AnonymousUser

from pageshare._tests import get_group, get_user


class TestPagePolicy:

    def setup_method(self, method):
        resolver = PermissionResolver(flaskg.groups)
        self.policy = PagePolicy(resolver, app.cfg.cache.acl_functions, flaskg.groups)

    def test_public_page_is_viewable_by_everybody(self):
        page = Page("Public", public=True)
        for actor in (AnonymousUser(), get_user("eve"), get_group("hermits")):
            assert self.policy.can_view(actor, page)
            assert self.policy.can_show(actor, page)
            assert self.policy.can_print(actor, page)
            assert not self.policy.can_update(actor, page)

    def test_private_page(self):
        page = Page("Private")
        page.add(get_user("blue"), AccessLevel.VIEW)
        assert self.policy.can_view(get_user("blue"), page)
        assert not self.policy.can_view(get_user("eve"), page)
        assert not self.policy.can_view(AnonymousUser(), page)

    def test_update_and_admin(self):
        page = Page("Levels")
        page.add(get_user("blue"), AccessLevel.EDIT)
        page.add(get_user("aaron"), AccessLevel.ADMIN)
        assert self.policy.can_update(get_user("blue"), page)
        assert not self.policy.can_admin(get_user("blue"), page)
        assert self.policy.can_admin(get_user("aaron"), page)
        assert self.policy.can_destroy(get_user("aaron"), page)
        assert not self.policy.can_destroy(get_user("blue"), page)

    def test_deleted_page(self):
        page = Page("Deleted", flow=FLOW_DELETED)
        page.add(get_user("aaron"), AccessLevel.ADMIN)
        assert self.policy.can_view(get_user("aaron"), page)
        assert not self.policy.can_update(get_user("aaron"), page)
        assert self.policy.can_admin(get_user("aaron"), page)

    def test_can_create_in_group(self):
        # members may create pages in their groups, anybody in a publicly viewable group
        assert self.policy.can_create(get_user("blue"), get_group("rainbow"))
        assert not self.policy.can_create(get_user("eve"), get_group("rainbow"))
        assert self.policy.can_create(get_user("eve"), get_group("animals"))

    def test_can_create_without_group(self):
        assert self.policy.can_create(get_user("eve"))
        assert not self.policy.can_create(AnonymousUser())

    def test_superuser_implies_functions(self):
        policy = PagePolicy(self.policy.resolver, functions_acl=AccessControlList(["root:superuser"]))
        assert policy.can_create(get_user("root"))
        assert not policy.can_create(get_user("aaron"))

    def test_authorize(self):
        page = Page("Authorize", id=3)
        page.add(get_user("blue"), AccessLevel.EDIT)
        self.policy.authorize(get_user("blue"), page, "update")
        with pytest.raises(PermissionDenied) as excinfo:
            self.policy.authorize(get_user("blue"), page, "share")
        assert excinfo.value.perm == "share"
        assert excinfo.value.page is page

    def test_authorize_unknown_action(self):
        with pytest.raises(ValueError):
            self.policy.authorize(get_user("blue"), Page("Unknown"), "fly")
