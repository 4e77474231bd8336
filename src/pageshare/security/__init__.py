# Copyright: 2000-2004 Juergen Hermann <jh@web.de>
# Copyright: 2003-2008,2011-2012 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - Page Security Interface and Access Control

Page access is granted through participations: records tying a user or a
group to a page with an access level. The effective access of an actor is
the most privileged of its own participation and the participations of all
groups it belongs to.

Platform level functions (like creating pages outside of a group) are not
related to pages and are controlled by an access control list given in the
configuration (cfg.acl_functions).
"""


from enum import IntEnum

from pageshare.constants import rights
from pageshare.constants.rights import SPECIAL_USERS
from pageshare.datastructures.backends import Group
from pageshare.error import PermissionDenied
from pageshare.user import User

from pageshare import log

logging = log.getLogger(__name__)


class AccessLevel(IntEnum):
    """
    Access level of a participation, ordered from least to most privileged.

    NONE is a real, storable level: an explicit participation granting
    nothing. It is still better than having no participation at all, see
    most_privileged().
    """

    NONE = 0
    VIEW = 1
    EDIT = 2
    ADMIN = 3

    @classmethod
    def parse(cls, value):
        """
        Get the level for a level, its name (case insensitive) or its number.

        :raises ValueError: for unknown levels
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown access level: {value!r}")
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise ValueError(f"unknown access level: {value!r}")

    def satisfies(self, requested):
        """Does this level grant the requested permission?"""
        requested = AccessLevel.parse(requested)
        if self is AccessLevel.NONE:
            return False
        return self >= requested

    def __str__(self):
        return self.name.lower()

    def __format__(self, format_spec):
        return format(str(self), format_spec)


# rank of a missing participation, strictly worse than AccessLevel.NONE
ABSENT = -1


def _rank(level):
    return ABSENT if level is None else int(level)


def most_privileged(levels):
    """
    Return the most privileged of some optional levels.

    None entries (no participation) rank below AccessLevel.NONE, so an
    explicit NONE still wins over absence. Returns None if there are no
    levels or all of them are absent.
    """
    return max(levels, key=_rank, default=None)


def most_privileged_participation(participations):
    """
    Return the participation with the highest access level or None.
    Missing (None) participations are skipped.
    """
    parts = [part for part in participations if part is not None]
    if not parts:
        return None
    return max(parts, key=lambda part: _rank(part.access))


class Decision:
    """Result of a permission check, true if access is allowed."""

    allowed = False
    reason = None

    def __bool__(self):
        return self.allowed

    def __eq__(self, other):
        return type(self) is type(other) and self.reason == other.reason

    def __repr__(self):
        return f"{self.__class__.__name__}({self.reason!r})"


class Allowed(Decision):
    allowed = True

    def __init__(self, participation=None):
        self.participation = participation


class Denied(Decision):
    # reasons
    DELETED = "deleted"
    NO_PARTICIPATION = "no_participation"
    INSUFFICIENT = "insufficient_access"

    def __init__(self, reason):
        self.reason = reason


class PermissionResolver:
    """
    Computes the effective permission of an actor (user, group or anonymous)
    on a page. This is a pure read, it never changes anything.
    """

    def __init__(self, groups=None):
        """
        :param groups: groups backend, only used to resolve group entities
        """
        self.groups = groups

    def participations_for(self, entity, page):
        """
        All participations that apply to <entity>: for a user its own one
        plus the ones of all its groups, for a group only its own one.
        """
        match entity:
            case User(valid=True):
                parts = [page.participation_for_user(entity)]
                parts.extend(page.participations_for_groups(entity.all_group_ids))
                return parts
            case Group():
                return [page.participation_for_group(entity)]
        return []

    def most_privileged_participation_for(self, entity, page):
        """the participation with the highest access for entity or None"""
        return most_privileged_participation(self.participations_for(entity, page))

    def effective_access(self, entity, page):
        """the effective access level or None if no participation applies"""
        part = self.most_privileged_participation_for(entity, page)
        return part.access if part is not None else None

    def check(self, entity, page, perm):
        """
        Check if entity has permission perm on page.

        Edit access to deleted pages is always denied, even for admins.
        Public visibility is NOT considered here, see PagePolicy.can_view.

        :rtype: Allowed or Denied
        """
        perm = AccessLevel.parse(perm)
        if page.deleted and perm == AccessLevel.EDIT:
            return Denied(Denied.DELETED)
        part = self.most_privileged_participation_for(entity, page)
        if part is None:
            return Denied(Denied.NO_PARTICIPATION)
        if not part.grants_access(perm):
            return Denied(Denied.INSUFFICIENT)
        return Allowed(part)

    def may(self, entity, page, perm):
        return bool(self.check(entity, page, perm))

    def require(self, entity, page, perm):
        """
        Like check, but raise PermissionDenied if not allowed.

        :returns: the Allowed decision
        """
        decision = self.check(entity, page, perm)
        if not decision:
            logging.debug(f"{entity!r} denied {perm} on page {page.id!r}: {decision.reason}")
            raise PermissionDenied(AccessLevel.parse(perm), page)
        return decision


class AccessControlList:
    """
    Access Control List for platform level functions.

    Syntax of an ACL string::

        [+|-]User[,User,...]:[right[,right,...]] [[+|-]SomeGroup:...] ...
        ... [[+|-]Known:...] [[+|-]All:...]

    "User" is a user login, "SomeGroup" a group name, "Known" is a special
    group containing all logged in users, "All" contains everybody.

    The entries are processed in the order they are found, the first
    matching entry tells if the user has the right or not. Without a
    modifier, rights not given in an entry are denied for the matching
    users. With "+" or "-", only the listed rights are granted / denied
    and processing continues for other rights.

    Example::

        admin:superuser,create Known:create
    """

    special_users = SPECIAL_USERS  # order is important

    def __init__(self, lines=[], valid=None):
        """Initialize an ACL, starting from <nothing>."""
        if valid is None:
            valid = rights.ACL_RIGHTS_FUNCTIONS
        self.acl_rights_valid = valid
        assert isinstance(lines, (list, tuple))
        self.acl = []  # [ ('User', {"create": False, ...}), ... ]
        self.acl_lines = []
        for line in lines:
            self._addLine(line)

    def _addLine(self, aclstring):
        """Add another ACL line

        :param aclstring: acl string from configuration
        """
        self.acl_lines.append(aclstring)
        for modifier, entries, _rights in ACLStringIterator(self.acl_rights_valid, aclstring):
            for entry in entries:
                if modifier:
                    # + grants and - denies only the given rights
                    rightsdict = {right: modifier == "+" for right in _rights}
                else:
                    # the given rights are granted, all other valid rights denied
                    rightsdict = {right: right in _rights for right in self.acl_rights_valid}
                self.acl.append((entry, rightsdict))

    def may(self, user, dowhat, groups=None):
        """May <user> <dowhat>? Returns boolean answer.

        :param user: a User instance
        :param groups: groups backend for group entries
        """
        for entry, rightsdict in self.acl:
            allowed = None
            if entry == "All":
                allowed = rightsdict.get(dowhat)
            elif entry == "Known":
                if user.valid:
                    allowed = rightsdict.get(dowhat)
            elif groups is not None and entry in groups:
                if user.valid and user.login in groups[entry]:
                    allowed = rightsdict.get(dowhat)
            elif user.valid and entry == user.login:
                allowed = rightsdict.get(dowhat)
            if allowed is not None:
                return allowed
        return False

    def __eq__(self, other):
        return self.acl_lines == other.acl_lines


class ACLStringIterator:
    """Iterator for acl string

    Parse acl string and return the next entry on each call to next.

    Usage::

        for modifier, entries, rights in ACLStringIterator(rights_valid, 'login:right'):
            # process data
    """

    def __init__(self, rights, aclstring):
        """
        :param rights: the acl rights to consider when parsing
        :param aclstring: string to parse
        """
        self.rights = rights
        self.rest = aclstring.strip()
        self.finished = False

    def __iter__(self):
        return self

    def __next__(self):
        """Return the next values from the acl string

        The iterator finishes as soon as the string is fully parsed or can
        not be parsed any more.

        :rtype: 3 tuple - (modifier, [entry, ...], [right, ...])
        """
        if self.rest == "":
            self.finished = True
        if self.finished:
            raise StopIteration

        # Get optional modifier [+|-]entries:rights
        modifier = ""
        if self.rest[0] in ("+", "-"):
            modifier, self.rest = self.rest[0], self.rest[1:]

        try:
            entries, self.rest = self.rest.split(":", 1)
        except ValueError:
            self.finished = True
            raise StopIteration("Can't parse rest of string")
        entries = [entry.strip() for entry in entries.split(",") if entry.strip()]

        try:
            _rights, self.rest = self.rest.split(" ", 1)
            # allow multiple spaces between items
            self.rest = self.rest.lstrip()
        except ValueError:
            _rights, self.rest = self.rest, ""
        _rights = [r for r in _rights.split(",") if r in self.rights]

        return modifier, entries, _rights
