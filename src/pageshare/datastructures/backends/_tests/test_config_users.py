# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.datastructures.backends.config_users tests
"""


import pytest

from flask import g as flaskg

from pageshare.datastructures import ConfigUsers, UserDoesNotExistError
from pageshare.error import ConfigurationError


class TestConfigUsers:

    def test_getitem(self):
        blue = flaskg.users["blue"]
        assert blue.login == "blue"
        assert blue.name == "Blue"
        assert blue.email == "blue@example.org"
        assert blue.locale == "de"
        with pytest.raises(UserDoesNotExistError):
            flaskg.users["nobody"]

    @pytest.mark.parametrize("login", ["", "alice smith", " alice", "alice,bob"])
    def test_invalid_login(self, login):
        with pytest.raises(ConfigurationError):
            ConfigUsers({login: dict(name="Alice")})

    def test_lookups(self):
        users = flaskg.users
        assert users.find_user_by_login("eve").contacts == {"aaron"}
        assert users.find_user_by_login("nobody") is None
        assert users.get("nobody") is None

    def test_users_know_their_groups(self):
        assert flaskg.users["blue"].all_group_ids == {"g-rainbow"}
        assert flaskg.users["frank"].all_group_ids == {"g-animals"}
        assert flaskg.users["root"].all_group_ids == frozenset()
