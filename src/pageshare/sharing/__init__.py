# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - sharing and notifying

Share a page with a notice message to any number of recipients.

If the recipient is a user, the page shows up in the user's inbox and
optionally they are alerted via email.

If the recipient is an email address, an email is sent to the address with
a magic link that lets the recipient view the page.

The recipient may be an entire group, in which case access is granted to
the group and an email is sent to each user in the group.

There are two modes:

 * share: grant access (admins only), maybe notify
 * notify: send a notice (editors), access is used, not granted

A workflow run walks through the states collecting, applying, notifying and
done. Problems with single recipients drop that recipient only, a failing
permission check or storage aborts the whole run.
"""


from pageshare.constants.keys import EMAIL_RECIPIENTS, FAILURES, NOTIFY_SUCCESS, SHARED_PAGE_SUCCESS
from pageshare.constants.keys import UPDATED_GROUP_PARTICIPATIONS, UPDATED_USER_PARTICIPATIONS
from pageshare.constants.keys import UPDATE_GROUP_ACCESS, UPDATE_USER_ACCESS, ACCESS, PAGE_NOTIFY, PAGE_SHARED
from pageshare.constants.misc import MODES, NOTIFY, SHARE, USER
from pageshare.datastructures.backends import Group
from pageshare.error import InvalidMode, PersistenceFailure
from pageshare.i18n import _
from pageshare.items import PageValidationError
from pageshare.security import AccessLevel, magiclink
from pageshare.sharing.recipients import EmailRecipient, RecipientError, RecipientResolver, split_recipient_names
from pageshare.signalling import access_updated, page_shared
from pageshare.storage.error import NoSuchPageError, StorageError
from pageshare.user import User
from pageshare.utils.notifications import TEMPLATE_MAGIC_LINK, TEMPLATE_NOTIFY, TEMPLATE_SHARED

from pageshare import log

logging = log.getLogger(__name__)

# workflow states
COLLECTING = "collecting"
APPLYING = "applying"
NOTIFYING = "notifying"
DONE = "done"

SUCCESS_MESSAGES = {SHARE: SHARED_PAGE_SUCCESS, NOTIFY: NOTIFY_SUCCESS}


def msgs():
    """the translatable texts of the success message keys"""
    _ = lambda x: x  # noqa
    return {
        SHARED_PAGE_SUCCESS: _("The page has been shared."),
        NOTIFY_SUCCESS: _("The notification has been sent."),
    }


MESSAGES = msgs()


def _parse_recipients(recipients):
    """
    Normalize recipients to {name: AccessLevel or None}.

    Accepts {"aaron": {"access": "admin"}}, {"aaron": "admin"} or names as
    taken by split_recipient_names.
    """
    if recipients is None:
        return {}
    if not isinstance(recipients, dict):
        return {name: None for name in split_recipient_names(recipients)}
    parsed = {}
    for name, options in recipients.items():
        if isinstance(options, dict):
            options = options.get(ACCESS)
        parsed[name] = AccessLevel.parse(options) if options not in (None, "") else None
    return parsed


class ShareRequest:
    """One share or notify request, only living for one workflow run."""

    def __init__(
        self, actor, page, mode, recipients=None, send_email=False, send_message=False, send_notice=None, message=None
    ):
        """
        :param actor: the requesting user
        :param mode: SHARE or NOTIFY
        :param recipients: {name: {"access": level}}, see _parse_recipients
        :param send_email: send emails to users and group members
        :param send_message: put the message into the inbox of users and groups
        :param send_notice: inbox notice even without message, defaults to True for NOTIFY
        :param message: text from the actor to the recipients
        """
        if mode not in MODES:
            raise InvalidMode(mode)
        self.actor = actor
        self.page = page
        self.mode = mode
        self.recipients = _parse_recipients(recipients)
        self.send_email = bool(send_email)
        self.send_message = bool(send_message)
        if send_notice is None:
            send_notice = mode == NOTIFY
        self.send_notice = bool(send_notice) or self.send_message
        self.message = message


class ShareResult:
    """What a workflow run did."""

    def __init__(self, mode, page=None):
        self.mode = mode
        self.page = page
        self.updated_user_participations = []
        self.updated_group_participations = []
        self.email_recipients = []
        self.failures = []

    @property
    def success_message(self):
        return SUCCESS_MESSAGES[self.mode]

    @property
    def changed_participations(self):
        return [
            part
            for part in self.updated_user_participations + self.updated_group_participations
            if part.previous_changes is not None
        ]

    def to_dict(self):
        def part_dict(part):
            return dict(part.to_dict(), changed=part.previous_changes is not None)

        return {
            UPDATED_USER_PARTICIPATIONS: [part_dict(part) for part in self.updated_user_participations],
            UPDATED_GROUP_PARTICIPATIONS: [part_dict(part) for part in self.updated_group_participations],
            EMAIL_RECIPIENTS: list(self.email_recipients),
            FAILURES: [failure.to_dict() for failure in self.failures],
            "success_message": self.success_message,
            "message": _(MESSAGES[self.success_message]),
        }


class Tracker:
    """Audit events of the sharing workflow, sent as blinker signals."""

    def __init__(self, sender=None):
        self.sender = sender

    def record_event(self, kind, participation):
        access_updated.send(self.sender, kind=kind, participation=participation)

    def record_share(self, page, user, mode, result):
        page_shared.send(self.sender, page=page, user=user, mode=mode, result=result)


class ShareWorkflow:
    """
    Runs share and notify requests.

    :param storage: storage backend
    :param users: users backend (identity lookups)
    :param groups: groups backend (identity lookups, group members)
    :param resolver: PermissionResolver
    :param policy: PagePolicy
    :param pester_policy: social contact check, see pageshare.user.PesterPolicy
    :param notifier: notification dispatch, None to not notify
    :param tracker: audit event collaborator
    """

    def __init__(self, storage, users, groups, resolver, policy, pester_policy, notifier=None, tracker=None):
        self.storage = storage
        self.users = users
        self.groups = groups
        self.resolver = resolver
        self.policy = policy
        self.pester_policy = pester_policy
        self.notifier = notifier
        self.tracker = tracker if tracker is not None else Tracker()
        self.state = None

    def recipient_resolver(self, actor, page):
        return RecipientResolver(
            actor, page, self.users, self.groups, self.resolver, self.policy, self.pester_policy, self.storage
        )

    def authorize(self, actor, page, mode):
        """
        The entry gate: sharing needs admin, notifying needs edit access.

        :raises PermissionDenied: otherwise
        """
        if mode == SHARE:
            self.resolver.require(actor, page, AccessLevel.ADMIN)
        elif mode == NOTIFY:
            self.resolver.require(actor, page, AccessLevel.EDIT)
        else:
            raise InvalidMode(mode)

    def share(self, actor, page, recipients, **options):
        """grant access to recipients ({name: {"access": level}}), maybe notify them"""
        return self.run(ShareRequest(actor, page, SHARE, recipients, **options))

    def notify(self, actor, page, recipients, message=None, **options):
        """send a notice to recipients, without changing their access"""
        return self.run(ShareRequest(actor, page, NOTIFY, recipients, message=message, **options))

    def add_group_recipient(self, page, group, access):
        """
        Grant access to a group. Members inherit it when permissions get
        checked, no participations of the members are created.
        """
        return page.add(group, access)

    def run(self, request):
        """
        The page is reloaded under its lock before anything is checked, so
        the recipient checks and the changes see the same, current page.

        :raises PermissionDenied: if the actor may not share / notify
        :raises NoSuchPageError: if the page does not exist (any more)
        :raises PersistenceFailure: if the changes could not be stored
        :returns: ShareResult
        """
        self.state = None
        result = ShareResult(request.mode, request.page)
        with self.storage.lock_page(request.page.id):
            page = self.load_page(request)
            self.authorize(request.actor, page, request.mode)
            result.page = page

            self.state = COLLECTING
            recipients = self.collect(request, page, result)

            self.state = APPLYING
            grants = self.apply(request, page, recipients, result)
        for part in result.changed_participations:
            kind = UPDATE_USER_ACCESS if part.entity_kind == USER else UPDATE_GROUP_ACCESS
            self.tracker.record_event(kind, part)

        self.state = NOTIFYING
        if self.notifier is not None:
            self.send_notifications(request, recipients, grants, result)

        self.state = DONE
        self.tracker.record_share(result.page, request.actor, request.mode, result)
        return result

    def load_page(self, request):
        """the current stored version of the requested page"""
        page_id = request.page.id
        try:
            return self.storage.get_page(page_id)
        except NoSuchPageError:
            raise
        except StorageError as err:
            logging.error(f"loading page {page_id!r} failed: {err}")
            raise PersistenceFailure(_("The page could not be loaded."))

    def collect(self, request, page, result):
        """resolve the recipients against page, failures go into result"""
        resolver = self.recipient_resolver(request.actor, page)
        recipients = []
        seen = set()
        for name, access in request.recipients.items():
            try:
                recipient = resolver.resolve(name, request.mode, access)
            except RecipientError as err:
                logging.debug(f"recipient {name!r} dropped: {err.reason}")
                result.failures.append(err)
                continue
            if recipient is None or recipient in seen:
                continue
            seen.add(recipient)
            recipients.append((recipient, access))
        return recipients

    def apply(self, request, page, recipients, result):
        """
        Store the access changes, the caller holds the lock of page.

        :returns: {email: EmailAccess} of the email recipients
        """
        grants = {}
        try:
            for recipient, access in recipients:
                if access is None:
                    access = AccessLevel.VIEW
                match recipient:
                    case User() if request.mode == SHARE:
                        part = page.add(recipient, access)
                        self.storage.save_participation(part)
                        result.updated_user_participations.append(part)
                    case Group() if request.mode == SHARE:
                        part = self.add_group_recipient(page, recipient, access)
                        self.storage.save_participation(part)
                        result.updated_group_participations.append(part)
                    case EmailRecipient():
                        record = self.storage.get_email_access(page.id, recipient.email)
                        if record is None and (request.mode == SHARE or not page.public):
                            record = magiclink.grant(self.storage, page, recipient.email, access)
                        grants[recipient.email] = record
                        result.email_recipients.append(recipient.email)
            if request.mode == SHARE:
                page.touch()
                self.storage.save_page(page)
        except (StorageError, PageValidationError) as err:
            logging.error(f"{request.mode} of page {page.id!r} failed: {err}")
            raise PersistenceFailure(_("The changes to the page could not be saved."))
        return grants

    def send_notifications(self, request, recipients, grants, result):
        page = result.page
        actor = request.actor
        notifier = self.notifier
        kind = PAGE_SHARED if request.mode == SHARE else PAGE_NOTIFY
        template = TEMPLATE_SHARED if request.mode == SHARE else TEMPLATE_NOTIFY
        payload = dict(page=page, sender=actor, message=request.message, link=notifier.page_link(page))
        for recipient, access in recipients:
            match recipient:
                case User():
                    if request.send_notice:
                        notifier.send_notice(recipient, kind, payload)
                    if request.send_email:
                        notifier.send_email(recipient, template, payload)
                case Group():
                    if request.send_notice:
                        notifier.send_notice(recipient, kind, payload)
                    if request.send_email:
                        for login in recipient:
                            if login == actor.login:
                                continue
                            member = self.users.find_user_by_login(login)
                            if member is not None:
                                notifier.send_email(member, template, payload)
                case EmailRecipient():
                    record = grants.get(recipient.email)
                    if page.public or record is None:
                        link = notifier.page_link(page)
                    else:
                        link = notifier.magic_link(page, record)
                    notifier.send_email(recipient.email, TEMPLATE_MAGIC_LINK, dict(payload, link=link))
