# Copyright: 2009 MoinMoin:DmitrijsMilajevs
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - config groups backend

The config_groups backend enables one to define groups and their
members in a configuration file.
"""


from pageshare.datastructures.backends import Group, BaseGroupsBackend, GroupDoesNotExistError


class ConfigGroup(Group):
    pass


class ConfigGroups(BaseGroupsBackend):

    def __init__(self, groups):
        """
        :param groups: Dictionary of groups where key is group name, and value
                       is either a list of members of that group (user logins
                       or names of other groups) or a dict with "members",
                       and optionally "id" and "public_access" keys.
        """
        super().__init__()

        self._groups = {}
        for group_name, definition in groups.items():
            if not isinstance(definition, dict):
                definition = dict(members=definition)
            self._groups[group_name] = definition

    def __contains__(self, group_name):
        return group_name in self._groups

    def __iter__(self):
        return iter(self._groups.keys())

    def __getitem__(self, group_name):
        try:
            definition = self._groups[group_name]
        except KeyError:
            raise GroupDoesNotExistError(group_name)
        return ConfigGroup(
            name=group_name, backend=self, id=definition.get("id"), public_access=definition.get("public_access")
        )

    def _retrieve_members(self, group_name):
        try:
            return self._groups[group_name].get("members", [])
        except KeyError:
            raise GroupDoesNotExistError(group_name)
