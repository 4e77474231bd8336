# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - recipients of a share or notify request

Recipient names typed by a user are resolved to users (by login), groups
(by name) or, if neither exists, email addresses. A lot can go wrong: the
name might not exist, the actor may not contact the recipient, the
recipient might already have access, etc. Each problem is a RecipientError
with a stable reason code; it only drops that one recipient, never the
whole request.
"""


import re

from pageshare.constants.keys import ALREADY_EXISTS, LEVEL_ERROR, LEVEL_NOTICE, MESSAGE, NAME, NOT_FOUND, LEVEL
from pageshare.constants.keys import NO_ACCESS_ERROR, PESTER_ERROR, REASON
from pageshare.constants.misc import EMAIL, MODES, NOTIFY, SHARE
from pageshare.error import Error, InvalidMode
from pageshare.forms import is_email
from pageshare.i18n import _
from pageshare.security import AccessLevel, magiclink
from pageshare.user import normalizeName

from pageshare import log

logging = log.getLogger(__name__)


def split_recipient_names(text):
    """
    Split recipient input into names, commas and whitespace separate them.

    :param text: a string or a list of strings
    :returns: list of non-empty names
    """
    if text is None:
        return []
    if not isinstance(text, str):
        text = ",".join(text)
    return [name for name in re.split(r"[,\s]+", text.strip()) if name]


class EmailRecipient:
    """An email address without an account, reached through a magic link"""

    kind = EMAIL

    def __init__(self, email):
        self.email = magiclink.normalize_email(email)
        self.id = self.email
        self.name = self.email

    def __repr__(self):
        return f"<EmailRecipient {self.email!r}>"

    def __eq__(self, other):
        return isinstance(other, EmailRecipient) and self.email == other.email

    def __hash__(self):
        return hash((self.kind, self.email))


class RecipientError(Error):
    """A recipient can't be used, the other recipients of the request are still processed."""

    reason = None
    level = LEVEL_ERROR

    def __init__(self, name, message=None):
        self.name = name
        Error.__init__(self, message if message is not None else self.default_message())

    def default_message(self):
        raise NotImplementedError

    def to_dict(self):
        return {NAME: self.name, REASON: self.reason, MESSAGE: self.message, LEVEL: self.level}


class RecipientNotFound(RecipientError):
    reason = NOT_FOUND

    def default_message(self):
        return _('"{name}" is neither a user, a group nor an email address.').format(name=self.name)


class PesterDenied(RecipientError):
    reason = PESTER_ERROR

    def default_message(self):
        return _("You are not allowed to share with {name}.").format(name=self.name)


class AlreadyShared(RecipientError):
    reason = ALREADY_EXISTS
    level = LEVEL_NOTICE

    def default_message(self):
        return _("{name} already has access to this page.").format(name=self.name)


class NotifyAccessDenied(RecipientError):
    reason = NO_ACCESS_ERROR

    def default_message(self):
        return _("{name} can't view this page and only page admins may give them access.").format(name=self.name)


class RecipientResolver:
    """
    Resolves recipient names for one actor and one page.

    The page is None for pages that are just getting created; then only
    the pester rules apply.
    """

    def __init__(self, actor, page, users, groups, resolver, policy, pester_policy, storage=None):
        self.actor = actor
        self.page = page
        self.users = users
        self.groups = groups
        self.resolver = resolver
        self.policy = policy
        self.pester_policy = pester_policy
        self.storage = storage

    def lookup(self, name):
        """find a user, a group or an email recipient called name, or None"""
        recipient = self.users.find_user_by_login(name)
        if recipient is None:
            recipient = self.groups.find_group_by_name(name)
        if recipient is None and is_email(name):
            recipient = EmailRecipient(name)
        return recipient

    def resolve(self, name, mode=SHARE, access=None):
        """
        Resolve a recipient name.

        :param mode: SHARE (granting access) or NOTIFY (sending a notice only)
        :param access: the access level that is going to be granted, if known
        :returns: a User, Group or EmailRecipient, None for blank names
        :raises RecipientError: if the recipient can't be used
        """
        if mode not in MODES:
            raise InvalidMode(mode)
        name = normalizeName(name) if name else ""
        if not name:
            return None
        recipient = self.lookup(name)
        if recipient is None:
            raise RecipientNotFound(name)
        if access is not None:
            access = AccessLevel.parse(access)
        match recipient:
            case EmailRecipient():
                self._check_email(recipient, mode)
            case _:
                self._check_entity(name, recipient, mode, access)
        return recipient

    def resolve_all(self, names, mode=SHARE, access=None):
        """
        Resolve many recipient names, see split_recipient_names.

        :returns: (recipients, failures), failures being RecipientErrors
        """
        recipients, failures = [], []
        for name in split_recipient_names(names):
            try:
                recipient = self.resolve(name, mode, access)
            except RecipientError as err:
                logging.debug(f"recipient {name!r} dropped: {err.reason}")
                failures.append(err)
                continue
            if recipient is not None and recipient not in recipients:
                recipients.append(recipient)
        return recipients, failures

    def _has_private_access(self, recipient):
        # private pages may be shared with anybody already having access
        page = self.page
        return page is not None and not page.public and self.resolver.may(recipient, page, AccessLevel.VIEW)

    def _check_entity(self, name, recipient, mode, access):
        page = self.page
        if not self.pester_policy.may_pester(self.actor, recipient) and not self._has_private_access(recipient):
            raise PesterDenied(name)
        if page is None:
            return
        part = page.participation_for(recipient)
        has_access = part is not None and part.access != AccessLevel.NONE
        if mode == SHARE:
            if has_access and (access is None or part.access == access):
                raise AlreadyShared(name)
        elif not has_access:
            if not (self.policy.can_view(recipient, page) or self.policy.can_admin(self.actor, page)):
                raise NotifyAccessDenied(name)

    def _check_email(self, recipient, mode):
        page = self.page
        if page is None:
            return
        has_grant = self.storage is not None and magiclink.has_grant(self.storage, page, recipient.email)
        if mode == SHARE:
            if has_grant:
                raise AlreadyShared(recipient.email)
        elif not (page.public or has_grant or self.policy.can_admin(self.actor, page)):
            raise NotifyAccessDenied(recipient.email)
