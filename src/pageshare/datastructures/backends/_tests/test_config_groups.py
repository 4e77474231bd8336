# Copyright: 2009 MoinMoin:DmitrijsMilajevs
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.datastructures.backends.config_groups tests
"""


import pytest

from flask import g as flaskg

from pageshare.datastructures.backends._tests import GroupsBackendTest
from pageshare.datastructures import ConfigGroups
from pageshare._tests import testconfig


class TestConfigGroupsBackend(GroupsBackendTest):

    @pytest.fixture
    def cfg(self):

        class Config(testconfig.Config):

            def groups(self):
                return ConfigGroups(GroupsBackendTest.test_groups)

        return Config


class TestGroupDefinitions:

    def test_ids_and_public_access(self):
        groups = flaskg.groups
        rainbow = groups["rainbow"]
        assert rainbow.id == "g-rainbow"
        assert rainbow.members == {"aaron", "blue"}
        assert rainbow.member_groups == {"committee"}
        assert not rainbow.allows_public("pester")
        assert groups["animals"].allows_public("pester")
        assert groups["animals"].allows_public("view")

    def test_equality(self):
        assert flaskg.groups["rainbow"] == flaskg.groups["rainbow"]
        assert flaskg.groups["rainbow"] != flaskg.groups["committee"]
