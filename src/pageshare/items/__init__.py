# Copyright: 2009 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pages

    A page is owned by a user or a group and shared with other users and
    groups through participations (see pageshare.items.participation).

    While pageshare.storage cares for persisting pages, this module cares
    for the page model itself: naming, urls, lifecycle and ownership.
"""


import re
import time
import unicodedata

from pageshare.constants.misc import FLOW_DELETED, FLOW_NORMAL, FLOWS, FRIENDLY_URL_MAX, GROUP, USER
from pageshare.datastructures.backends import Group
from pageshare.i18n import _
from pageshare.items.participation import make_participation
from pageshare.security import AccessLevel, PermissionResolver
from pageshare.storage.error import NoSuchPageError
from pageshare.user import User

from pageshare import log

logging = log.getLogger(__name__)


class PageValidationError(ValueError):
    """
    The page can't be saved, e.g. because its name is taken.
    """

    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class PageOwnerError(ValueError):
    """
    The page would end up without an owner, but the configuration
    requires every page to have one.
    """


def nameize(text):
    """
    Make a page name from text: transliterated to ascii, lowercase, words
    joined by single dashes, e.g. "Hello, Wörld!" -> "hello-world".
    """
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\s-]", "", text).strip().lower()
    return re.sub(r"[\s_-]+", "-", text).strip("-")


def entity_name(entity):
    """the name an entity is known by: the login of a user, the name of a group"""
    match entity:
        case User():
            return entity.login
        case Group():
            return entity.name
    raise TypeError(f"must be user or group, not {entity!r}")


def _is_many(entity):
    # groups are iterable too, so we only accept real collections here
    return isinstance(entity, (list, tuple, set, frozenset))


class Page:
    """
    A page with its participations.

    Pages get loaded and saved by a storage backend, see pageshare.storage.
    """

    def __init__(
        self,
        title,
        name=None,
        id=None,
        owner_kind=None,
        owner_id=None,
        owner_name=None,
        created_by=None,
        flow=FLOW_NORMAL,
        public=False,
        created_at=None,
        updated_at=None,
        version=0,
    ):
        if flow not in FLOWS:
            raise TypeError(f"flow needs to be one of {FLOWS}, not {flow!r}")
        self.id = id
        self.title = title
        self.name = name
        self.owner_kind = owner_kind
        self.owner_id = owner_id
        self.owner_name = owner_name
        self.created_by = created_by
        self.flow = flow
        self.public = public
        self.created_at = created_at
        self.updated_at = updated_at
        self.version = version
        self.user_participations = {}  # user id -> UserParticipation
        self.group_participations = {}  # group id -> GroupParticipation
        self.removed_participations = {}  # key -> Participation, to be deleted on save
        self.storage = None
        self._saved_state = None

    def __repr__(self):
        return f"<Page id={self.id!r} name={self.name!r} owner={self.owner_name!r} flow={self.flow!r}>"

    # naming

    def name_url(self):
        """string identifying a page within its owner's context"""
        return self.name or self.friendly_url()

    def friendly_url(self):
        """unique string for a page, including the id, e.g. "a-fine-page+5234" """
        if not self.title:
            # page being created, no title yet
            return str(self.id)
        s = nameize(self.title)
        if len(s) > FRIENDLY_URL_MAX:
            # limit name length and remove any half-cut trailing word
            s = re.sub(r"-[^-]*$", "", s[: FRIENDLY_URL_MAX - 1])
        return f"{s}+{self.id}"

    def uri(self):
        """best guess uri path of this page, e.g. /rainbows/what-a-fine-page+5234"""
        if self.owner_name:
            return f"/{self.owner_name}/{self.name_url()}"
        return f"/page/{self.friendly_url()}"

    def name_taken(self, storage):
        """is the name of this page already used by another page of the same owner?"""
        if not self.name:
            return False
        if self.owner_id is not None:
            pages = storage.find_pages(name=self.name, owner_kind=self.owner_kind, owner_id=self.owner_id)
        else:
            pages = storage.find_pages(name=self.name, created_by=self.created_by)
        return any(page.id != self.id and not page.deleted for page in pages)

    def validate(self, storage):
        """
        Check the page can be saved.

        :raises PageValidationError: on a blank title or bad / taken names
        """
        if not self.title:
            raise PageValidationError("title", _("Title can't be blank."))
        saved_name, saved_owner = self._saved_state or (None, None)
        name_changed = self._saved_state is None or saved_name != self.name
        owner_changed = self._saved_state is None or saved_owner != (self.owner_kind, self.owner_id)
        if (name_changed or owner_changed) and self.name_taken(storage):
            context = self.owner_name or self.created_by
            raise PageValidationError(
                "name", _("The name is already used for another page by {context}.").format(context=context)
            )
        if name_changed and self.name and self.name != nameize(self.name):
            raise PageValidationError("name", _("The name is invalid."))

    # lifecycle

    @property
    def deleted(self):
        return self.flow == FLOW_DELETED

    def save(self, storage=None):
        storage = storage or self.storage
        return storage.save_page(self)

    def delete(self, storage=None):
        self.flow = FLOW_DELETED
        return self.save(storage)

    def undelete(self, storage=None):
        self.flow = FLOW_NORMAL
        return self.save(storage)

    def touch(self):
        self.updated_at = int(time.time())

    def mark_saved(self, storage):
        """called by the storage after the page was stored"""
        self.storage = storage
        self._saved_state = (self.name, (self.owner_kind, self.owner_id))
        self.removed_participations = {}
        for part in self.participations():
            part.page_id = self.id

    # participations

    def participations(self):
        return list(self.user_participations.values()) + list(self.group_participations.values())

    def changed_participations(self):
        return [part for part in self.participations() if part.access_changed]

    def load_participation(self, part):
        """add a participation loaded from storage"""
        self._participations_of_kind(part.entity_kind)[part.entity_id] = part

    def _participations_of_kind(self, kind):
        if kind == USER:
            return self.user_participations
        if kind == GROUP:
            return self.group_participations
        raise ValueError(f"unknown entity kind: {kind!r}")

    def participation_for_user(self, user):
        return self.user_participations.get(user.id)

    def participation_for_group(self, group):
        return self.group_participations.get(group.id)

    def participations_for_groups(self, group_ids):
        return [self.group_participations[group_id] for group_id in group_ids if group_id in self.group_participations]

    def participation_for(self, entity):
        """the direct participation of entity (no group inheritance) or None"""
        match entity:
            case User():
                return self.participation_for_user(entity)
            case Group():
                return self.participation_for_group(entity)
        return None

    def most_privileged_participation_for(self, entity):
        """the participation with the highest access for entity, including its groups"""
        return PermissionResolver().most_privileged_participation_for(entity, self)

    def add(self, entity, access=AccessLevel.VIEW):
        """
        Add a user or group to this page or change its access level.
        This is the only way users and groups should get added to pages.

        :param entity: user, group or a list of them
        :returns: the participation (or a list of them)
        """
        if _is_many(entity):
            return [self.add(e, access) for e in entity]
        part = self.participation_for(entity)
        if part is None:
            part = make_participation(entity.kind, self.id, entity.id, access, entity_name=entity_name(entity))
            self._participations_of_kind(entity.kind)[entity.id] = part
            self.removed_participations.pop(part.key, None)
        else:
            part.set_access(access)
        return part

    def remove(self, entity):
        """
        Remove a user or group from this page.
        This is the only way users and groups should get removed from pages.
        """
        if _is_many(entity):
            for e in entity:
                self.remove(e)
            return entity
        part = self._participations_of_kind(entity.kind).pop(entity.id, None)
        if part is not None and part.saved:
            self.removed_participations[part.key] = part
        return entity

    # ownership

    def set_owner(self, entity, ensure_page_owner=True, users=None, groups=None):
        """
        Make entity (a user or group, or the name of one) the owner of this page.

        If the new owner has no admin participation yet, one is added.

        :param ensure_page_owner: if True, a page must always have an owner
        :raises PageOwnerError: if the owner would be cleared, but ensure_page_owner is True
        """
        if isinstance(entity, str):
            name = entity.strip()
            entity = None
            if name:
                if users is not None:
                    entity = users.find_user_by_login(name)
                if entity is None and groups is not None:
                    entity = groups.find_group_by_name(name)
        if entity is None:
            if ensure_page_owner:
                raise PageOwnerError(_("A page must have an owner."))
            self.owner_kind = self.owner_id = self.owner_name = None
            return None
        if not self.is_owner(entity):
            self.owner_kind = entity.kind
            self.owner_id = entity.id
            part = self.most_privileged_participation_for(entity)
            if part is None or part.access != AccessLevel.ADMIN:
                self.add(entity, AccessLevel.ADMIN)
        self.owner_name = entity_name(entity)
        return entity

    def is_owner(self, entity):
        return entity is not None and entity.kind == self.owner_kind and entity.id == self.owner_id

    def to_dict(self):
        return dict(
            id=self.id,
            name=self.name,
            title=self.title,
            owner=self.owner_name,
            owner_kind=self.owner_kind,
            created_by=self.created_by,
            flow=self.flow,
            public=self.public,
            created_at=self.created_at,
            updated_at=self.updated_at,
            uri=self.uri(),
        )

    @classmethod
    def find_by_param(cls, storage, param):
        """
        Find a page by its id, an id attached to a string (a friendly url
        like "a-fine-page+5234") or its name.

        :raises NoSuchPageError: if there is no such page
        """
        param = str(param)
        if re.match(r"^\d+$", param):
            return storage.get_page(int(param))
        m = re.search(r"[ +](\d+)$", param)
        if m:
            return storage.get_page(int(m.group(1)))
        pages = storage.find_pages(name=param)
        if not pages:
            raise NoSuchPageError(param)
        return pages[0]
