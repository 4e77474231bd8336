# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.log Tests
"""


import logging
import os

import pytest

import pageshare
from pageshare import log

from pageshare._tests.testconfig import Config

test_config_file = os.path.join(os.path.dirname(pageshare.__file__), "_tests", "test_logging.conf")


class TracebackConfig(Config):
    email_tracebacks = True
    admin_emails = ["root@example.org"]


@pytest.fixture
def mails(monkeypatch):
    sent = []

    def sendmail(subject, text, to=None):
        sent.append((subject, text, to))
        return 1, "Mail sent successfully"

    monkeypatch.setattr("pageshare.mail.sendmail.sendmail", sendmail)
    return sent


def error_record(msg="it broke"):
    return logging.makeLogRecord(dict(name="pageshare.sharing", levelno=logging.ERROR, levelname="ERROR", msg=msg))


class TestEmailHandler:

    @pytest.fixture
    def cfg(self):
        return TracebackConfig

    def test_mails_admins(self, mails):
        log.EmailHandler().handle(error_record())
        assert len(mails) == 1
        subject, text, to = mails[0]
        assert subject == "[PageShare Test][ERROR] pageshare.sharing"
        assert "it broke" in text
        assert to == ["root@example.org"]

    def test_no_admins(self, mails, app, monkeypatch):
        monkeypatch.setattr(app.cfg, "admin_emails", [])
        log.EmailHandler().handle(error_record())
        assert mails == []


class TestEmailHandlerDisabled:

    def test_tracebacks_disabled(self, mails):
        log.EmailHandler().handle(error_record())
        assert mails == []


class TestLoadConfig:

    @pytest.fixture(autouse=True)
    def restore_config(self, monkeypatch):
        monkeypatch.delenv(log.ENV_LOGGING_CONF, raising=False)
        yield
        log.load_config(test_config_file)

    def test_builtin_config(self):
        log.load_config()
        logger = logging.getLogger("pageshare")
        assert logger.level == logging.INFO
        assert [type(handler) for handler in logger.handlers] == [log.EmailHandler]
        assert logging.getLogger("werkzeug").level == logging.WARNING

    def test_broken_file_falls_back(self, tmpdir):
        conf = tmpdir.join("logging.conf")
        conf.write("[loggers]\nkeys=nothing\n")
        log.load_config(str(conf))
        assert log.configured
        assert logging.getLogger("pageshare").level == logging.INFO

    def test_environment_wins(self, monkeypatch):
        monkeypatch.setenv(log.ENV_LOGGING_CONF, test_config_file)
        log.load_config()
        assert logging.getLogger().level == logging.DEBUG

    def test_existing_loggers_keep_working(self):
        logger = log.getLogger("pageshare.sharing")
        log.load_config()
        assert not logger.disabled
