# Copyright: 2009 MoinMoin:DmitrijsMilajevs
# Copyright: 2009 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - base classes for group and user backends.

Groups and users are the two kinds of entity a page can be shared with.
Backends answer identity lookups (find a user by login, a group by name)
and group membership questions.
"""

from pageshare.constants.misc import GROUP


class GroupDoesNotExistError(KeyError):
    """
    Raised when a group name is not found in the backend.
    """


class UserDoesNotExistError(KeyError):
    """
    Raised when a user login is not found in the backend.
    """


class Group:
    """
    A group of users, loaded greedily from its backend.

    A group may list other groups as members (e.g. a committee inside a
    network). Membership checks follow that nesting, so a member of a
    committee is also a member of every group containing the committee.
    """

    kind = GROUP

    def __init__(self, name, backend, id=None, public_access=None):
        """
        :param name: name of the group
        :param backend: backend object which created this object
        :param id: stable id of the group, defaults to the name
        :param public_access: dict right -> bool, what non-members may do
        """
        self.name = name
        self.id = str(id) if id is not None else name
        self.public_access = dict(public_access or {})
        self._backend = backend
        self.members, self.member_groups = self._load_group()

    def _load_group(self):
        """
        Retrieve group data from the backend and split member users from
        member groups.
        """
        members_retrieved = set(self._backend._retrieve_members(self.name))
        member_groups = {member for member in members_retrieved if self._backend.is_group_name(member)}
        members = members_retrieved - member_groups
        return members, member_groups

    def __contains__(self, member, processed_groups=None):
        """
        Check if member is in this group, directly or via a member group.
        Recursion loops are prevented by remembering processed groups.
        """
        if not processed_groups:
            processed_groups = set()
        processed_groups.add(self.name)

        if member in self.members or member in self.member_groups:
            return True
        for group_name in self.member_groups:
            if group_name in processed_groups or group_name not in self._backend:
                continue
            if self._backend[group_name].__contains__(member, processed_groups):
                return True
        return False

    def __iter__(self, yielded_members=None, processed_groups=None):
        """
        Iterate over the user members of this group, including the users
        of member groups. Each member is yielded once.
        """
        if not yielded_members:
            yielded_members = set()
        if not processed_groups:
            processed_groups = set()
        processed_groups.add(self.name)

        for member in self.members:
            if member not in yielded_members:
                yielded_members.add(member)
                yield member
        for group_name in self.member_groups:
            if group_name in processed_groups or group_name not in self._backend:
                continue
            yield from self._backend[group_name].__iter__(yielded_members, processed_groups)

    def allows_public(self, right):
        """May anybody (member or not) do <right> with this group?"""
        return bool(self.public_access.get(right))

    def __eq__(self, other):
        return isinstance(other, Group) and self.id == other.id

    def __hash__(self):
        return hash((self.kind, self.id))

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self.name!r} members={self.members!r} groups={self.member_groups!r}>"


class BaseGroupsBackend:
    """
    Backend provides access to the group definitions for the other
    PageShare modules.
    """

    def is_group_name(self, member):
        return member in self

    def __contains__(self, group_name):
        """
        Check if a group called <group_name> is available in this backend.
        """
        raise NotImplementedError()

    def __iter__(self):
        """
        Iterate over names of groups available in this backend.
        """
        raise NotImplementedError()

    def __getitem__(self, group_name):
        """
        Get a group by its name.
        """
        raise NotImplementedError()

    def __repr__(self):
        return f"<{self.__class__} groups={list(self)}>"

    def _retrieve_members(self, group_name):
        raise NotImplementedError()

    def get(self, key, default=None):
        """
        Return the group named <key> if key is in the backend, else
        default. If default is not given, it defaults to None, so that
        this method never raises a GroupDoesNotExistError.
        """
        try:
            return self[key]
        except GroupDoesNotExistError:
            return default

    def find_group_by_name(self, name):
        """identity lookup: the group called <name> or None"""
        if name not in self:
            return None
        return self.get(name)

    def groups_with_member(self, member):
        """
        List all group names of groups containing <member>, also the ones
        containing it only through a member group.

        :param member: user login
        :returns: iterator of group names
        """
        for group_name in self:
            try:
                if member in self[group_name]:
                    yield group_name
            except GroupDoesNotExistError:
                pass

    def all_group_ids(self, member):
        """the transitive set of ids of groups <member> belongs to"""
        return frozenset(self[group_name].id for group_name in self.groups_with_member(member))


class BaseUsersBackend:
    """
    Backend provides identity lookups for users.
    """

    def __init__(self, groups=None):
        """
        :param groups: groups backend, used to compute group memberships of users
        """
        self.groups = groups

    def __contains__(self, login):
        raise NotImplementedError()

    def __iter__(self):
        """
        Iterate over logins of users available in this backend.
        """
        raise NotImplementedError()

    def __getitem__(self, login):
        raise NotImplementedError()

    def get(self, login, default=None):
        try:
            return self[login]
        except UserDoesNotExistError:
            return default

    def find_user_by_login(self, login):
        """identity lookup: the user with login <login> or None"""
        if login not in self:
            return None
        return self.get(login)

