# Copyright: 2010 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - logging signal handlers
"""


from .signals import ANY, page_displayed, page_created, page_shared, access_updated
from flask import got_request_exception

from .. import log

logging = log.getLogger(__name__)


@page_displayed.connect_via(ANY)
def log_page_displayed(sender, page, user=None):
    logging.info(f"page {page.id!r} displayed to {getattr(user, 'login', None)!r}")


@page_created.connect_via(ANY)
def log_page_created(sender, page, user=None):
    logging.info(f"page {page.id!r} {page.title!r} created by {getattr(user, 'login', None)!r}")


@page_shared.connect_via(ANY)
def log_page_shared(sender, page, user, mode, result):
    logging.info(
        f"page {page.id!r} {mode}: {len(result.updated_user_participations)} users, "
        f"{len(result.updated_group_participations)} groups, {len(result.email_recipients)} emails, "
        f"{len(result.failures)} failures, by {user.login!r}"
    )


@access_updated.connect_via(ANY)
def log_access_updated(sender, kind, participation):
    old, new = participation.previous_changes
    logging.info(
        f"{kind}: page {participation.page_id!r} {participation.entity_kind} {participation.entity_id!r} {old} -> {new}"
    )


@got_request_exception.connect_via(ANY)
def log_exception(sender, exception, **extra):
    logging.exception(exception)
