# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - magic links

People without an account can get a page shared to their email address.
They receive a link carrying the address and a token; knowing both lets them
view the page. This is an authentication path of its own: grants are kept
apart from participations and never influence PermissionResolver or
PagePolicy.

Magic links only ever grant view access.
"""


from pageshare.security import AccessLevel
from pageshare.storage.types import EmailAccess
from pageshare.utils.crypto import generate_token, make_key, valid_token

from pageshare import log

logging = log.getLogger(__name__)

# highest access level a magic link can grant
MAX_ACCESS = AccessLevel.VIEW


def normalize_email(email):
    return email.strip().lower()


def grant(storage, page, email, access=MAX_ACCESS):
    """
    Give email access to page, unless it already has it.

    :returns: the EmailAccess record (the existing one, if any)
    """
    email = normalize_email(email)
    existing = storage.get_email_access(page.id, email)
    if existing is not None:
        return existing
    access = min(AccessLevel.parse(access), MAX_ACCESS)
    record = EmailAccess(page.id, email, make_key(), access)
    storage.save_email_access(record)
    logging.info(f"granted {access} access on page {page.id!r} to email {email!r}")
    return record


def has_grant(storage, page, email):
    return page.id is not None and storage.get_email_access(page.id, normalize_email(email)) is not None


def make_token(record):
    """a fresh token for the link sent to record.email"""
    return generate_token(record.key)[1]


def validate(storage, page, email, token, timeout=None):
    """
    Check a magic link.

    :param timeout: max. token age in seconds, None for no limit
    :returns: the EmailAccess record if email and token are valid for page, else None
    """
    if not email or not token:
        return None
    record = storage.get_email_access(page.id, normalize_email(email))
    if record is None or not record.access.satisfies(AccessLevel.VIEW):
        return None
    if not valid_token(record.key, token, timeout=timeout):
        logging.debug(f"invalid magic link token for page {page.id!r}, email {email!r}")
        return None
    return record
