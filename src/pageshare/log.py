# Copyright: 2008 MoinMoin:ThomasWaldmann
# Copyright: 2007 MoinMoin:JohannesBerg
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.
"""
    PageShare - logging setup

    Every module gets its logger like this::

       from pageshare import log
       logging = log.getLogger(__name__)

    The first getLogger call configures logging, unless load_config() was
    called before. The configuration is a logging.config.fileConfig file,
    taken from (first match wins):

    a) the file named by the environment variable PAGESHARELOGGINGCONF
    b) the file given to load_config()
    c) the built-in configuration below

    If a file can't be used, the built-in configuration is used and a
    warning about the broken file is logged.

    The built-in configuration logs to stderr: pageshare messages from
    INFO on, the sharing audit trail (pageshare.signalling.log) included,
    libraries only from WARNING on. Errors of pageshare code are also mailed
    to cfg.admin_emails if cfg.email_tracebacks is enabled.
"""

from io import StringIO
import os
import logging
import logging.config
import logging.handlers  # handlers defined there may be used in logging conf files
import warnings

ENV_LOGGING_CONF = "PAGESHARELOGGINGCONF"

logging_config = """\
[DEFAULT]
loglevel=INFO

[loggers]
keys=root,pageshare,sqlalchemy,werkzeug

[handlers]
keys=stderr,email

[formatters]
keys=default

[logger_root]
level=WARNING
handlers=stderr

[logger_pageshare]
qualname=pageshare
level=%(loglevel)s
handlers=email
propagate=1

[logger_sqlalchemy]
qualname=sqlalchemy.engine
level=WARNING
handlers=
propagate=1

[logger_werkzeug]
qualname=werkzeug
level=WARNING
handlers=
propagate=1

[handler_stderr]
class=StreamHandler
level=NOTSET
formatter=default
args=(sys.stderr, )

[handler_email]
class=pageshare.log.EmailHandler
level=ERROR
formatter=default
args=()

[formatter_default]
format=%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s
datefmt=
class=logging.Formatter
"""

configured = False


def _log_warning(message, category, filename, lineno, file=None, line=None):
    # warnings go to the log, msg tells where they really come from
    getLogger(__name__).warning(f"{filename}:{lineno}: {category.__name__}: {message}")


def _file_config(f):
    logging.config.fileConfig(f, disable_existing_loggers=False)


def load_config(conf_fname=None):
    """
    Configure logging, see the module docstring.

    :param conf_fname: path of a logging configuration file
    """
    global configured
    conf_fname = os.environ.get(ENV_LOGGING_CONF, conf_fname)
    err_msg = None
    if conf_fname:
        conf_fname = os.path.abspath(conf_fname)
        try:
            # fileConfig() silently ignores unreadable files, so open it here
            with open(conf_fname) as f:
                _file_config(f)
        except Exception as err:  # fileConfig raises all kinds of errors
            err_msg = str(err)
            conf_fname = None
    if not conf_fname:
        with StringIO(logging_config) as f:
            _file_config(f)
    configured = True
    warnings.showwarning = _log_warning

    logger = getLogger(__name__)
    if err_msg:
        logger.warning(f"logging configuration could not be loaded, using the built-in one: {err_msg}")
    logger.debug(f'using logging configuration {conf_fname or "built into pageshare.log"}')
    import pageshare

    logger.debug(f"Running {pageshare.project} {pageshare.version} code from {os.path.dirname(pageshare.__file__)}")


def getLogger(name):
    """logging.getLogger, configuring logging first if nobody did yet"""
    if not configured:
        load_config()
    return logging.getLogger(name)


class EmailHandler(logging.Handler):
    """
    Mails log records to the site admins (cfg.admin_emails).

    Only sends if cfg.email_tracebacks is enabled. Outside of an application
    context there is no configuration, so nothing is sent.
    """

    def __init__(self):
        logging.Handler.__init__(self)
        self.in_email_handler = False

    def emit(self, record):
        from flask import current_app as app

        try:
            cfg = app.cfg
        except RuntimeError:
            # working outside of application context
            return
        if not cfg.email_tracebacks or not cfg.admin_emails:
            return
        # sendmail logs itself, do not mail about problems mailing
        if self.in_email_handler:
            return
        self.in_email_handler = True
        try:
            from pageshare.mail.sendmail import sendmail

            subject = f"[{cfg.sitename}][{record.levelname}] {record.name}"
            sendmail(subject, self.format(record), to=list(cfg.admin_emails))
        except Exception:
            self.handleError(record)
        finally:
            self.in_email_handler = False
