# Copyright: 2003-2004 by Juergen Hermann <jh@web.de>
# Copyright: 2007 by MoinMoin:ThomasWaldmann
# Copyright: 2008 by MoinMoin:MelitaMihaljevic
# Copyright: 2009 by MoinMoin:DmitrijsMilajevs
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.datastructures.backends base test classes.
"""


from pytest import raises

from flask import g as flaskg

from pageshare.security import AccessControlList
from pageshare.datastructures import GroupDoesNotExistError
from pageshare.user import User


class GroupsBackendTest:

    test_groups = {
        "EditorGroup": ["AdminGroup", "John", "JoeDoe", "Editor1", "John"],
        "AdminGroup": ["Admin1", "Admin2", "John"],
        "OtherGroup": ["SomethingOther"],
        "RecursiveGroup": ["Something", "OtherRecursiveGroup"],
        "OtherRecursiveGroup": ["RecursiveGroup", "Anything", "NotExistingGroup"],
        "ThirdRecursiveGroup": ["ThirdRecursiveGroup", "Banana"],
        "EmptyGroup": [],
        "CheckNotExistingGroup": ["NotExistingGroup"],
    }

    expanded_groups = {
        "EditorGroup": ["Admin1", "Admin2", "John", "JoeDoe", "Editor1"],
        "AdminGroup": ["Admin1", "Admin2", "John"],
        "OtherGroup": ["SomethingOther"],
        "RecursiveGroup": ["Anything", "Something", "NotExistingGroup"],
        "OtherRecursiveGroup": ["Anything", "Something", "NotExistingGroup"],
        "ThirdRecursiveGroup": ["Banana"],
        "EmptyGroup": [],
        "CheckNotExistingGroup": ["NotExistingGroup"],
    }

    def test_contains(self):
        """
        Test groups backend and Group containment methods.
        """
        groups = flaskg.groups

        for group, members in self.expanded_groups.items():
            assert group in groups
            for member in members:
                assert member in groups[group]

        raises(GroupDoesNotExistError, lambda: groups["NotExistingGroup"])

    def test_contains_group(self):
        groups = flaskg.groups

        assert "AdminGroup" in groups["EditorGroup"]
        assert "EditorGroup" not in groups["AdminGroup"]

    def test_iter(self):
        groups = flaskg.groups

        for group, members in self.expanded_groups.items():
            returned_members = list(groups[group])
            assert len(returned_members) == len(members)
            for member in members:
                assert member in returned_members

    def test_get(self):
        groups = flaskg.groups

        assert groups.get("AdminGroup")
        assert "NotExistingGroup" not in groups
        assert groups.get("NotExistingGroup") is None
        assert groups.get("NotExistingGroup", []) == []

    def test_find_group(self):
        groups = flaskg.groups

        assert groups.find_group_by_name("AdminGroup").name == "AdminGroup"
        assert groups.find_group_by_name("NotExistingGroup") is None

    def test_groups_with_member(self):
        groups = flaskg.groups

        john_groups = list(groups.groups_with_member("John"))
        assert 2 == len(john_groups)
        assert "EditorGroup" in john_groups
        assert "AdminGroup" in john_groups
        assert "ThirdGroup" not in john_groups

    def test_all_group_ids(self):
        groups = flaskg.groups

        assert groups.all_group_ids("Admin1") == {"AdminGroup", "EditorGroup"}
        assert groups.all_group_ids("Anything") == {"RecursiveGroup", "OtherRecursiveGroup"}
        assert groups.all_group_ids("Nobody") == frozenset()

    def test_backend_acl_allow(self):
        """
        Test if the group backend works with acl code.
        Check user which has rights.
        """
        acl = AccessControlList(["AdminGroup:superuser,create"])

        for login in self.expanded_groups["AdminGroup"]:
            for right in ["superuser", "create"]:
                assert acl.may(
                    User(login), right, flaskg.groups
                ), f"{login} must have {right} right because they are a member of the AdminGroup"

    def test_backend_acl_deny(self):
        """
        Test if the group backend works with acl code.
        Check user which does not have rights.
        """
        acl = AccessControlList(["AdminGroup:create"])

        assert "SomeUser" not in flaskg.groups["AdminGroup"]
        assert not acl.may(User("SomeUser"), "create", flaskg.groups)

        assert "Admin1" in flaskg.groups["AdminGroup"]
        assert not acl.may(User("Admin1"), "superuser", flaskg.groups)

    def test_backend_acl_with_all(self):
        acl = AccessControlList(["EditorGroup:superuser,create All:create"])

        for member in self.expanded_groups["EditorGroup"]:
            for right in ["superuser", "create"]:
                assert acl.may(User(member), right, flaskg.groups)

        assert acl.may(User("Someone"), "create", flaskg.groups)
        assert not acl.may(User("Someone"), "superuser", flaskg.groups)

    def test_backend_acl_not_existing_group(self):
        assert "NotExistingGroup" not in flaskg.groups

        acl = AccessControlList(["NotExistingGroup:superuser,create All:create"])

        assert not acl.may(User("Someone"), "superuser", flaskg.groups)
