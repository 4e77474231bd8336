# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.sharing.recipients Tests
"""


import pytest

from flask import g as flaskg

from pageshare.constants.keys import ALREADY_EXISTS, LEVEL_ERROR, LEVEL_NOTICE, NO_ACCESS_ERROR, NOT_FOUND
from pageshare.constants.keys import PESTER_ERROR
from pageshare.constants.misc import NOTIFY, SHARE
from pageshare.error import InvalidMode
from pageshare.security import AccessLevel, magiclink
from pageshare.sharing.recipients import AlreadyShared, EmailRecipient, NotifyAccessDenied, PesterDenied
from pageshare.sharing.recipients import RecipientNotFound, RecipientResolver, split_recipient_names

from pageshare._tests import create_page, get_group, get_user


def make_resolver(actor, page):
    return RecipientResolver(
        get_user(actor),
        page,
        flaskg.users,
        flaskg.groups,
        flaskg.resolver,
        flaskg.policy,
        flaskg.pester_policy,
        flaskg.storage,
    )


@pytest.mark.parametrize(
    "text,expected",
    [
        ("aaron", ["aaron"]),
        ("aaron, blue  carol,,", ["aaron", "blue", "carol"]),
        (" \n", []),
        (None, []),
        (["aaron", "blue,carol"], ["aaron", "blue", "carol"]),
    ],
)
def test_split_recipient_names(text, expected):
    assert split_recipient_names(text) == expected


def test_email_recipient():
    recipient = EmailRecipient(" Bob@Example.COM")
    assert recipient.email == "bob@example.com"
    assert recipient == EmailRecipient("bob@example.com")
    assert len({recipient, EmailRecipient("BOB@example.com")}) == 1


class TestLookup:

    def setup_method(self, method):
        self.resolver = make_resolver("aaron", None)

    def test_user_group_email(self):
        assert self.resolver.lookup("blue") == get_user("blue")
        assert self.resolver.lookup("rainbow") == get_group("rainbow")
        assert self.resolver.lookup("bob@example.com") == EmailRecipient("bob@example.com")

    def test_unknown(self):
        assert self.resolver.lookup("nobody") is None
        with pytest.raises(RecipientNotFound) as excinfo:
            self.resolver.resolve("nobody")
        assert excinfo.value.to_dict() == dict(
            name="nobody", reason=NOT_FOUND, message=excinfo.value.message, level=LEVEL_ERROR
        )

    def test_blank(self):
        assert self.resolver.resolve("  ") is None
        assert self.resolver.resolve(None) is None

    def test_name_is_normalized(self):
        # invisible characters must not make up a different recipient
        assert self.resolver.resolve(" blue\u200b ") == get_user("blue")
        assert self.resolver.resolve("\u200b") is None

    def test_invalid_mode(self):
        with pytest.raises(InvalidMode):
            self.resolver.resolve("blue", "shout")


class TestPester:
    """aaron may contact blue, carol (all in rainbow), eve (has aaron as contact) and dolphin (public)"""

    @pytest.mark.parametrize("name", ["aaron", "blue", "carol", "eve", "dolphin", "rainbow", "animals"])
    def test_may_pester(self, name):
        assert make_resolver("aaron", None).resolve(name) is not None

    @pytest.mark.parametrize("name", ["frank", "gina", "hermits", "committee"])
    def test_may_not_pester(self, name):
        with pytest.raises(PesterDenied) as excinfo:
            make_resolver("aaron", None).resolve(name)
        assert excinfo.value.reason == PESTER_ERROR

    def test_private_page_access_allows_sharing(self):
        page = create_page("Private", participants=dict(frank="view"))
        recipient = make_resolver("aaron", page).resolve("frank", SHARE, AccessLevel.EDIT)
        assert recipient == get_user("frank")

    def test_public_page_has_no_exception(self):
        page = create_page("Public", public=True, participants=dict(frank="view"))
        with pytest.raises(PesterDenied):
            make_resolver("aaron", page).resolve("frank", SHARE, AccessLevel.EDIT)

    def test_anonymous_may_pester_nobody(self):
        assert not flaskg.pester_policy.may_pester(flaskg.user, get_user("dolphin"))


class TestShareMode:

    def test_already_shared(self):
        page = create_page("Shared", participants=dict(blue="view"))
        resolver = make_resolver("aaron", page)
        for access in (None, AccessLevel.VIEW, "view"):
            with pytest.raises(AlreadyShared) as excinfo:
                resolver.resolve("blue", SHARE, access)
            assert excinfo.value.reason == ALREADY_EXISTS
            assert excinfo.value.level == LEVEL_NOTICE

    def test_changed_access_is_no_failure(self):
        page = create_page("Shared", participants=dict(blue="view"))
        assert make_resolver("aaron", page).resolve("blue", SHARE, "edit") == get_user("blue")

    def test_explicit_none_is_no_access(self):
        page = create_page("Revoked", participants=dict(blue="none"))
        assert make_resolver("aaron", page).resolve("blue", SHARE) == get_user("blue")

    def test_email_already_shared(self):
        page = create_page("Mailed")
        resolver = make_resolver("aaron", page)
        assert resolver.resolve("bob@example.com") == EmailRecipient("bob@example.com")
        magiclink.grant(flaskg.storage, page, "bob@example.com")
        with pytest.raises(AlreadyShared):
            resolver.resolve("bob@example.com")


class TestNotifyMode:

    def test_editor_needs_recipient_access(self):
        page = create_page("Notify", participants=dict(blue="edit"))
        with pytest.raises(NotifyAccessDenied) as excinfo:
            make_resolver("blue", page).resolve("carol", NOTIFY)
        assert excinfo.value.reason == NO_ACCESS_ERROR

    def test_editor_notifies_viewer(self):
        page = create_page("Notify", participants=dict(blue="edit", carol="view"))
        assert make_resolver("blue", page).resolve("carol", NOTIFY) == get_user("carol")

    def test_group_access_counts(self):
        page = create_page("Notify", participants=dict(blue="edit", committee="view"))
        assert make_resolver("blue", page).resolve("carol", NOTIFY) == get_user("carol")

    def test_admin_notifies_anybody(self):
        page = create_page("Notify")
        assert make_resolver("aaron", page).resolve("carol", NOTIFY) == get_user("carol")

    def test_public_page(self):
        page = create_page("Notify", public=True, participants=dict(blue="edit"))
        assert make_resolver("blue", page).resolve("carol", NOTIFY) == get_user("carol")
        assert make_resolver("blue", page).resolve("bob@example.com", NOTIFY) == EmailRecipient("bob@example.com")

    def test_email_needs_grant(self):
        page = create_page("Notify", participants=dict(blue="edit"))
        with pytest.raises(NotifyAccessDenied):
            make_resolver("blue", page).resolve("bob@example.com", NOTIFY)
        magiclink.grant(flaskg.storage, page, "bob@example.com")
        assert make_resolver("blue", page).resolve("bob@example.com", NOTIFY) == EmailRecipient("bob@example.com")

    def test_existing_access_is_no_failure(self):
        page = create_page("Notify", participants=dict(blue="view"))
        assert make_resolver("aaron", page).resolve("blue", NOTIFY) == get_user("blue")


def test_resolve_all():
    page = create_page("Many", participants=dict(blue="view"))
    recipients, failures = make_resolver("aaron", page).resolve_all("carol, blue, nobody, frank, carol", SHARE)
    assert recipients == [get_user("carol")]
    assert [(failure.name, failure.reason) for failure in failures] == [
        ("blue", ALREADY_EXISTS),
        ("nobody", NOT_FOUND),
        ("frank", PESTER_ERROR),
    ]
