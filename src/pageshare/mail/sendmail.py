# Copyright: 2003 Juergen Hermann <jh@web.de>
# Copyright: 2008-2009 MoinMoin:ThomasWaldmann
# Copyright: 2024-2025 MoinMoin:UlrichB
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - sending plain text notification emails.

Mails go out through cfg.mail_smarthost ("host" or "host:port"). Port 465
gets an SSL connection, on other ports STARTTLS is used if the server offers
it. Nothing here raises on delivery problems, callers get (is_ok, message).
"""


import smtplib
import ssl

from email.message import EmailMessage
from email.utils import formatdate, make_msgid

from flask import current_app as app

from pageshare.i18n import _

from pageshare import log

logging = log.getLogger(__name__)

SMTP_TIMEOUT = 20.0
SMTP_PORT = 25
SMTP_SSL_PORT = 465


def parse_smarthost(smarthost):
    """split "host:port" into (host, port), the port defaults to 25"""
    host, _sep, port = smarthost.partition(":")
    return host, int(port) if port else SMTP_PORT


def make_message(subject, text, to, mail_from):
    msg = EmailMessage()
    msg.set_content(text)
    msg["From"] = mail_from
    msg["To"] = to
    msg["Subject"] = subject
    msg["Date"] = formatdate()
    msg["Message-ID"] = make_msgid()
    msg["Auto-Submitted"] = "auto-generated"  # RFC 3834 section 5
    return msg


def connect(cfg):
    """an smtp connection to the smarthost, logged in if an account is configured"""
    host, port = parse_smarthost(cfg.mail_smarthost)
    logging.debug(f"connecting to smtp server {host}:{port}")
    if port == SMTP_SSL_PORT:
        server = smtplib.SMTP_SSL(host=host, port=port, timeout=SMTP_TIMEOUT, context=ssl.create_default_context())
        server.ehlo()
    else:
        server = smtplib.SMTP(host=host, port=port, timeout=SMTP_TIMEOUT)
        server.ehlo()
        if server.has_extn("starttls"):
            try:
                server.starttls()
                server.ehlo()
            except (smtplib.SMTPException, OSError):
                logging.debug("starttls failed, continuing without tls")
    if cfg.mail_username and cfg.mail_password:
        logging.debug(f"logging in to smtp server as {cfg.mail_username!r}")
        server.login(cfg.mail_username, cfg.mail_password)
    return server


def sendmail(subject, text, to=None):
    """Send a text/plain email from cfg.mail_from.

    :param subject: subject of email
    :param text: email body text
    :param to: list of recipient addresses
    :returns: (is_ok, description of the error or OK message)
    """
    cfg = app.cfg
    if not cfg.mail_enabled:
        return 0, _("Contact administrator: cannot send e-mail because mail configuration is incomplete.")
    if not to:
        return 1, _("No recipients, nothing to do")

    logging.debug(f"send mail {subject!r} to {to!r}")
    msg = make_message(subject, text, to, cfg.mail_from)
    server = None
    try:
        server = connect(cfg)
        server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logging.exception(f"sending mail through '{cfg.mail_smarthost}' failed: {e}")
        return 0, _("Connection to mailserver failed: {reason}").format(reason=str(e))
    finally:
        if server is not None:
            try:
                server.quit()
            except smtplib.SMTPServerDisconnected:
                pass

    logging.debug("Mail sent successfully")
    return 1, _("Mail sent successfully")
