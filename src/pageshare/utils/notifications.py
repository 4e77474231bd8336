# Copyright: 2013 MoinMoin:AnaBalica
# Copyright: 2024 MoinMoin:UlrichB
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - Notifications

    Inbox notices and emails about shared pages. Sending is fire-and-forget:
    delivery problems are logged, but never abort a share.
"""

import time

from urllib.parse import urlencode, urljoin

from flask import render_template, url_for

from pageshare.constants.keys import PAGE_NOTIFY, PAGE_SHARED
from pageshare.i18n import _, force_locale
from pageshare.mail.sendmail import sendmail
from pageshare.security import magiclink
from pageshare.storage.error import StorageError
from pageshare.storage.types import Notice

from pageshare import log

logging = log.getLogger(__name__)

# email template names
TEMPLATE_SHARED = PAGE_SHARED
TEMPLATE_NOTIFY = PAGE_NOTIFY
TEMPLATE_MAGIC_LINK = "magic_link"


def msgs():
    """Encapsulates the email subjects

    :return: a dictionary of subjects
    """
    _ = lambda x: x  # noqa
    messages = {
        TEMPLATE_SHARED: _('[{sitename}] {sender} shared "{title}" with you'),
        TEMPLATE_NOTIFY: _('[{sitename}] {sender} sent you a notice about "{title}"'),
        TEMPLATE_MAGIC_LINK: _('[{sitename}] {sender} shared "{title}" with you'),
    }
    return messages


SUBJECTS = msgs()


class Notifier:
    """
    Notification dispatch for the sharing workflow.
    """

    def __init__(self, app, storage):
        self.app = app
        self.storage = storage

    @property
    def cfg(self):
        return self.app.cfg

    def page_link(self, page):
        """absolute url of page"""
        return urljoin(self.cfg.site_url, url_for("frontend.show_page", page_id=page.id))

    def magic_link(self, page, record):
        """absolute url of page for an email recipient, carrying address and token"""
        query = urlencode(dict(email=record.email, token=magiclink.make_token(record)))
        return urljoin(self.cfg.site_url, url_for("frontend.magic_page", page_id=page.id)) + "?" + query

    def send_notice(self, recipient, kind, payload):
        """
        Put a notice into the inbox of recipient (a user or a group).

        :param payload: dict with page, sender (a user) and message
        :returns: the stored Notice, None if it could not be stored
        """
        page = payload["page"]
        notice = Notice(
            recipient_kind=recipient.kind,
            recipient_id=recipient.id,
            kind=kind,
            page_id=page.id,
            sender=payload["sender"].login,
            message=payload.get("message"),
            created_at=int(time.time()),
        )
        try:
            notice = self.storage.add_notice(notice)
        except StorageError as err:
            logging.error(f"storing notice {kind} for {recipient.kind} {recipient.id!r} failed: {err}")
            return None
        logging.debug(f"notice {kind} for {recipient.kind} {recipient.id!r} about page {page.id!r}")
        return notice

    def render(self, template, payload, recipient_name):
        sender = payload["sender"]
        page = payload["page"]
        kw = dict(sitename=self.cfg.sitename, sender=sender.display_name, title=page.title)
        subject = _(SUBJECTS[template]).format(**kw)
        text = render_template(
            f"mail/{template}.txt",
            sitename=self.cfg.sitename,
            sender_name=sender.display_name,
            recipient_name=recipient_name,
            page=page,
            message=payload.get("message"),
            link=payload["link"],
        )
        return subject, text

    def send_email(self, recipient, template, payload):
        """
        Send an email to recipient, rendered in the recipient's locale.

        :param recipient: a user or an email address
        :param template: one of the TEMPLATE_* names
        :param payload: dict with page, sender, link and message
        :returns: (is_ok, message) as returned by sendmail
        """
        if isinstance(recipient, str):
            address, name, locale = recipient, recipient, None
        else:
            address, name, locale = recipient.email, recipient.display_name, recipient.locale
        if not address:
            logging.debug(f"no email address for {name!r}, not sending {template}")
            return 0, _("No email address.")
        with force_locale(locale or self.cfg.locale_default):
            subject, text = self.render(template, payload, name)
            is_ok, msg = sendmail(subject, text, to=[address])
        if not is_ok:
            logging.warning(f"sending {template} email to {address!r} failed: {msg}")
        return is_ok, msg
