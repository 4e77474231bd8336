# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - participations

A participation grants one entity (a user or a group) an access level on
one page. Pages own their participations: they are created and removed
through Page.add / Page.remove and get destroyed together with the page.

Group participations are not expanded to the group members, membership
gets resolved when permissions are checked.
"""


from pageshare.constants.misc import GROUP, USER
from pageshare.security import AccessLevel


class Participation:

    entity_kind = None

    def __init__(self, page_id, entity_id, access=AccessLevel.VIEW, entity_name=None, saved=False):
        """
        :param page_id: id of the page, None for pages not saved yet
        :param entity_id: id of the user or group
        :param access: AccessLevel (or something AccessLevel.parse accepts)
        :param entity_name: login of the user / name of the group
        :param saved: True if this participation was loaded from storage
        """
        self.page_id = page_id
        self.entity_id = entity_id
        self.entity_name = entity_name
        self.access = AccessLevel.parse(access)
        self.saved = saved
        self.previous_access = self.access if saved else None
        # (old, new) access of the last save that changed it, None otherwise
        self.previous_changes = None

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} page={self.page_id!r} {self.entity_kind}={self.entity_id!r} "
            f"access={self.access} previous={self.previous_access}>"
        )

    def __eq__(self, other):
        return (
            isinstance(other, Participation)
            and self.key == other.key
            and self.access == other.access
        )

    def __hash__(self):
        return hash(self.key)

    @property
    def key(self):
        return self.page_id, self.entity_kind, self.entity_id

    @property
    def access_changed(self):
        """True for new participations and ones whose access got changed since loading"""
        return not self.saved or self.access != self.previous_access

    def set_access(self, access):
        self.access = AccessLevel.parse(access)

    def grants_access(self, perm):
        return self.access.satisfies(perm)

    def mark_saved(self):
        """called by the storage after the participation was stored"""
        self.previous_changes = (self.previous_access, self.access) if self.access_changed else None
        self.saved = True
        self.previous_access = self.access

    def to_dict(self):
        return dict(
            page_id=self.page_id,
            entity_kind=self.entity_kind,
            entity_id=self.entity_id,
            entity_name=self.entity_name,
            access=str(self.access),
        )


class UserParticipation(Participation):
    entity_kind = USER


class GroupParticipation(Participation):
    entity_kind = GROUP


participation_classes = {
    USER: UserParticipation,
    GROUP: GroupParticipation,
}


def make_participation(entity_kind, page_id, entity_id, access, entity_name=None, saved=False):
    """create a participation of the right class for entity_kind"""
    try:
        cls = participation_classes[entity_kind]
    except KeyError:
        raise ValueError(f"unknown entity kind: {entity_kind!r}")
    return cls(page_id, entity_id, access, entity_name=entity_name, saved=saved)
