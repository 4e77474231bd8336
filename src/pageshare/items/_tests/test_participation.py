# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.items.participation Tests
"""


import pytest

from pageshare.constants.misc import GROUP, USER
from pageshare.items.participation import GroupParticipation, UserParticipation, make_participation
from pageshare.security import AccessLevel


class TestParticipation:

    def test_make_participation(self):
        part = make_participation(USER, 1, "aaron", "edit", entity_name="aaron")
        assert isinstance(part, UserParticipation)
        assert part.access is AccessLevel.EDIT
        assert part.key == (1, USER, "aaron")
        part = make_participation(GROUP, 1, "g-rainbow", AccessLevel.VIEW)
        assert isinstance(part, GroupParticipation)

    def test_make_participation_unknown_kind(self):
        with pytest.raises(ValueError):
            make_participation("robot", 1, "r2d2", "view")

    def test_new_participation_changed(self):
        part = UserParticipation(1, "aaron", AccessLevel.VIEW)
        assert part.access_changed
        assert part.previous_access is None
        part.mark_saved()
        assert part.previous_changes == (None, AccessLevel.VIEW)
        assert not part.access_changed

    def test_loaded_participation(self):
        part = UserParticipation(1, "aaron", AccessLevel.ADMIN, saved=True)
        assert not part.access_changed
        part.set_access("view")
        assert part.access_changed
        part.mark_saved()
        assert part.previous_changes == (AccessLevel.ADMIN, AccessLevel.VIEW)
        assert part.previous_access is AccessLevel.VIEW
        # saving without a change is a no-op for tracking
        part.mark_saved()
        assert part.previous_changes is None

    def test_set_same_access(self):
        part = GroupParticipation(1, "g-rainbow", AccessLevel.EDIT, saved=True)
        part.set_access(AccessLevel.EDIT)
        assert not part.access_changed

    def test_grants_access(self):
        part = UserParticipation(1, "aaron", AccessLevel.EDIT)
        assert part.grants_access("view")
        assert part.grants_access(AccessLevel.EDIT)
        assert not part.grants_access("admin")
        assert not UserParticipation(1, "eve", AccessLevel.NONE).grants_access("view")

    def test_to_dict(self):
        part = UserParticipation(3, "aaron", AccessLevel.ADMIN, entity_name="aaron")
        assert part.to_dict() == dict(
            page_id=3, entity_kind=USER, entity_id="aaron", entity_name="aaron", access="admin"
        )

    def test_equality(self):
        assert UserParticipation(1, "aaron", "view") == UserParticipation(1, "aaron", "view")
        assert UserParticipation(1, "aaron", "view") != UserParticipation(1, "aaron", "edit")
        assert UserParticipation(1, "aaron", "view") != GroupParticipation(1, "aaron", "view")
