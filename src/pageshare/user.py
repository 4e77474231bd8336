# Copyright: 2000-2004 Juergen Hermann <jh@web.de>
# Copyright: 2003-2013 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - User Accounts

    User instances represent the acting person of a request and the people
    pages get shared with. Accounts are provided by a users backend (see
    pageshare.datastructures), group memberships by a groups backend.
"""


from pageshare.constants.misc import ANON, USER
from pageshare.constants.rights import PESTER
from pageshare.datastructures.backends import Group

from pageshare import log

logging = log.getLogger(__name__)


def normalizeName(name):
    """Make normalized user or group name

    Prevent impersonating another user with names containing leading,
    trailing or multiple whitespace, or using invisible unicode characters.

    :param name: user name, unicode
    :rtype: unicode
    :returns: name that can be used as a recipient name
    """
    # ' for names like O'Brian or email addresses.
    # "," is not allowed, it separates recipient names.
    allowedchars = "'@.-_+"
    name = "".join([c for c in name if c.isalnum() or c.isspace() or c in allowedchars])
    # Normalize white space. Each name can contain multiple
    # words separated with only one space.
    return " ".join(name.split())


def isValidName(name):
    """Validate user name

    :param name: user name, unicode
    """
    return bool(name) and name == normalizeName(name) and " " not in name


class User:
    """A user account (or the anonymous user)"""

    kind = USER

    def __init__(
        self,
        login=ANON,
        name=None,
        email=None,
        locale=None,
        timezone=None,
        contacts=(),
        public_pester=False,
        id=None,
        groups=None,
        valid=True,
    ):
        """
        :param login: unique login name, also used as recipient name
        :param name: display name, defaults to the login
        :param email: email address for notifications
        :param locale: preferred locale for notifications (None: site default)
        :param contacts: logins of users this user has a social connection with
        :param public_pester: if True, anybody may contact this user
        :param id: stable id, defaults to the login
        :param groups: groups backend used for membership lookups
        :param valid: False for the anonymous user
        """
        self.login = login
        self.name = name or login
        self.email = email
        self.locale = locale
        self.timezone = timezone
        self.contacts = frozenset(contacts)
        self.public_pester = public_pester
        self.id = str(id) if id is not None else login
        self.valid = valid
        self._groups = groups

    def __repr__(self):
        return f"<{self.__class__.__module__}.{self.__class__.__name__} at {id(self):#x} login:{self.login!r} valid:{self.valid!r}>"

    def __eq__(self, other):
        return isinstance(other, User) and self.valid and other.valid and self.id == other.id

    def __hash__(self):
        return hash((self.kind, self.id))

    @property
    def display_name(self):
        return self.name

    @property
    def all_group_ids(self):
        """ids of all groups this user belongs to, directly or through member groups"""
        if not self.valid or self._groups is None:
            return frozenset()
        return self._groups.all_group_ids(self.login)

    def is_member_of(self, group):
        return self.valid and group.id in self.all_group_ids


class AnonymousUser(User):
    """The user of a request that did not log in"""

    def __init__(self):
        super().__init__(login=ANON, valid=False)


class PesterPolicy:
    """
    Default social-contact check: may <actor> contact <entity>?

    A user may pester themself, their contacts, users sharing a group with
    them, and users allowing it publicly. A user may pester groups they are
    a member of and groups that allow it publicly. Anonymous users may
    pester nobody.

    To customize, inherit from this class and assign the subclass to
    "pester_policy" in the configuration.
    """

    def __init__(self, groups):
        self.groups = groups

    def may_pester(self, actor, entity):
        if actor is None or not actor.valid:
            return False
        match entity:
            case User(valid=True):
                return (
                    entity == actor
                    or actor.login in entity.contacts
                    or entity.public_pester
                    or bool(actor.all_group_ids & entity.all_group_ids)
                )
            case Group():
                return actor.is_member_of(entity) or entity.allows_public(PESTER)
        return False
