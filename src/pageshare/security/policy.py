# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - page access policy

One predicate per action a user can do with a page. The boolean predicates
return False and let the caller decide, authorize() raises PermissionDenied.

Viewing purposely lets public pages through without consulting the
participations, all other actions need participation derived access.
"""


from pageshare.constants.rights import ADMIN, CREATE, EDIT, SUPERUSER, VIEW
from pageshare.error import PermissionDenied
from pageshare.security import AccessControlList

from pageshare import log

logging = log.getLogger(__name__)


class PagePolicy:

    # action name -> predicate method name
    actions = {
        "show": "can_view",
        "view": "can_view",
        "print": "can_print",
        "update": "can_update",
        "edit": "can_update",
        "admin": "can_admin",
        "share": "can_admin",
        "destroy": "can_destroy",
    }

    def __init__(self, resolver, functions_acl=None, groups=None):
        """
        :param resolver: a PermissionResolver
        :param functions_acl: AccessControlList for platform level rights
        :param groups: groups backend for group entries in functions_acl
        """
        self.resolver = resolver
        if functions_acl is None:
            functions_acl = AccessControlList(["Known:create"])
        self.functions_acl = functions_acl
        self.groups = groups

    def can_view(self, actor, page):
        return page.public or self.resolver.may(actor, page, VIEW)

    can_show = can_view

    def can_print(self, actor, page):
        return self.can_view(actor, page)

    def can_update(self, actor, page):
        return self.resolver.may(actor, page, EDIT)

    def can_admin(self, actor, page):
        return self.resolver.may(actor, page, ADMIN)

    def can_destroy(self, actor, page):
        return self.can_admin(actor, page)

    def may_function(self, actor, right):
        """platform level right from the functions acl, superuser implies everything"""
        acl = self.functions_acl
        return acl.may(actor, right, self.groups) or acl.may(actor, SUPERUSER, self.groups)

    def can_create(self, actor, group=None):
        """
        May actor create a page, optionally owned by group?

        Any member of the group may create pages in it, as may anybody if
        the group is publicly viewable.
        """
        if group is not None:
            return actor.is_member_of(group) or group.allows_public(VIEW)
        return self.may_function(actor, CREATE)

    def authorize(self, actor, page, action):
        """
        Raise PermissionDenied unless actor may do action with page.

        :raises ValueError: for unknown actions
        """
        try:
            predicate = getattr(self, self.actions[action])
        except KeyError:
            raise ValueError(f"unknown action: {action!r}")
        if not predicate(actor, page):
            logging.debug(f"{actor!r} not authorized to {action} page {page.id!r}")
            raise PermissionDenied(action, page)
