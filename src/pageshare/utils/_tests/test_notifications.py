# Copyright: 2013 MoinMoin:AnaBalica
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.utils.notifications Tests
"""


import pytest

from flask import g as flaskg

from pageshare.constants.keys import PAGE_SHARED
from pageshare.constants.misc import GROUP, USER
from pageshare.security import magiclink
from pageshare.storage.error import StorageError
from pageshare.utils.notifications import TEMPLATE_MAGIC_LINK, TEMPLATE_NOTIFY, TEMPLATE_SHARED

from pageshare._tests import create_page, get_group, get_user


@pytest.fixture
def mails(monkeypatch):
    sent = []

    def sendmail(subject, text, to=None, **kw):
        sent.append((subject, text, to))
        return 1, "Mail sent successfully"

    monkeypatch.setattr("pageshare.utils.notifications.sendmail", sendmail)
    return sent


class TestNotifier:

    def setup_method(self, method):
        self.notifier = flaskg.notifier
        self.page = create_page("Notify me")
        self.payload = dict(page=self.page, sender=get_user("aaron"), message="Have a look!")

    def test_page_link(self):
        assert self.notifier.page_link(self.page) == f"http://localhost:8080/+page/{self.page.id}"

    def test_magic_link(self):
        record = magiclink.grant(flaskg.storage, self.page, "bob@example.com")
        link = self.notifier.magic_link(self.page, record)
        assert link.startswith(f"http://localhost:8080/+magic/{self.page.id}?email=bob%40example.com&token=")

    def test_send_notice(self):
        notice = self.notifier.send_notice(get_user("blue"), PAGE_SHARED, self.payload)
        assert notice.id is not None
        assert (notice.recipient_kind, notice.recipient_id, notice.page_id) == (USER, "blue", self.page.id)
        assert notice.sender == "aaron"
        assert notice.message == "Have a look!"
        assert flaskg.storage.notices_for(USER, "blue") == [notice]

    def test_send_group_notice(self):
        self.notifier.send_notice(get_group("rainbow"), PAGE_SHARED, self.payload)
        assert len(flaskg.storage.notices_for(GROUP, "g-rainbow")) == 1
        assert flaskg.storage.notices_for(USER, "blue") == []

    def test_send_notice_failure(self, monkeypatch):
        def broken(notice):
            raise StorageError("inbox full")

        monkeypatch.setattr(flaskg.storage, "add_notice", broken)
        assert self.notifier.send_notice(get_user("blue"), PAGE_SHARED, self.payload) is None

    @pytest.mark.parametrize("template", [TEMPLATE_SHARED, TEMPLATE_NOTIFY, TEMPLATE_MAGIC_LINK])
    def test_render(self, template):
        payload = dict(self.payload, link="http://localhost:8080/+page/1")
        subject, text = self.notifier.render(template, payload, "Blue")
        assert subject.startswith("[PageShare Test] Aaron ")
        assert '"Notify me"' in subject
        assert "Have a look!" in text
        assert "http://localhost:8080/+page/1" in text

    def test_render_without_message(self):
        payload = dict(self.payload, message=None, link="http://localhost:8080/+page/1")
        subject, text = self.notifier.render(TEMPLATE_SHARED, payload, "Blue")
        assert "Message from" not in text

    def test_send_email_to_user(self, mails):
        payload = dict(self.payload, link="http://localhost:8080/+page/1")
        is_ok, msg = self.notifier.send_email(get_user("blue"), TEMPLATE_SHARED, payload)
        assert is_ok
        subject, text, to = mails[0]
        assert to == ["blue@example.org"]
        assert "Hello Blue," in text

    def test_send_email_to_address(self, mails):
        payload = dict(self.payload, link="http://localhost:8080/+magic/1")
        self.notifier.send_email("bob@example.com", TEMPLATE_MAGIC_LINK, payload)
        subject, text, to = mails[0]
        assert to == ["bob@example.com"]
        assert "bob@example.com" in text

    def test_send_email_without_address(self, mails):
        payload = dict(self.payload, link="http://localhost:8080/+page/1")
        is_ok, msg = self.notifier.send_email(get_user("gina"), TEMPLATE_SHARED, payload)
        assert not is_ok
        assert mails == []

    def test_send_email_failure_is_reported(self):
        # the test configuration has no smarthost, so sending fails
        payload = dict(self.payload, link="http://localhost:8080/+page/1")
        is_ok, msg = self.notifier.send_email(get_user("blue"), TEMPLATE_SHARED, payload)
        assert not is_ok
