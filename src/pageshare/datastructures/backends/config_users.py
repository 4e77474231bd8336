# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - config users backend

The config_users backend enables one to define user accounts in a
configuration file, e.g.::

    def users(self):
        return ConfigUsers({
            "alice": dict(name="Alice", email="alice@example.org", contacts=["bob"]),
            "bob": dict(email="bob@example.org", public_pester=True),
        }, groups=self.groups())
"""


from pageshare import user
from pageshare.datastructures.backends import BaseUsersBackend, UserDoesNotExistError
from pageshare.error import ConfigurationError


class ConfigUsers(BaseUsersBackend):

    def __init__(self, users, groups=None):
        """
        :param users: Dictionary of users where key is the login, and value is a
                      dict of user attributes (see pageshare.user.User).
        :param groups: groups backend for computing group memberships
        """
        super().__init__(groups)
        for login in users:
            if not user.isValidName(login):
                raise ConfigurationError(f"invalid user login: {login!r}")
        self._users = {login: dict(profile or {}) for login, profile in users.items()}

    def __contains__(self, login):
        return login in self._users

    def __iter__(self):
        return iter(self._users.keys())

    def __getitem__(self, login):
        try:
            profile = self._users[login]
        except KeyError:
            raise UserDoesNotExistError(login)
        return user.User(login, groups=self.groups, **profile)
