# Copyright: 2000-2006 by Juergen Hermann <jh@web.de>
# Copyright: 2002-2011 MoinMoin:ThomasWaldmann
# Copyright: 2008 MoinMoin:FlorianKrupicka
# Copyright: 2023-2025 MoinMoin:UlrichB
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - WSGI application setup and related code.

Use create_app(config) to create the WSGI application (using Flask).
"""

from __future__ import annotations

from os import path, PathLike
from flask import Flask, jsonify, session
from flask import current_app as app
from flask import g as flaskg

from jinja2 import ChoiceLoader, FileSystemLoader

from pageshare import user
from pageshare.constants.keys import MESSAGE, SESSION_LOGIN
from pageshare.error import InvalidMode, PermissionDenied, PersistenceFailure
from pageshare.i18n import _, i18n_init
from pageshare.security import PermissionResolver
from pageshare.security.policy import PagePolicy
from pageshare.storage import backend_from_uri
from pageshare.storage.error import NoSuchPageError
from pageshare.utils.notifications import Notifier

from pageshare import log

from typing import Any

logging = log.getLogger(__name__)


def create_app(config: str | PathLike[str] | None = None) -> Flask:
    """
    Simple wrapper around create_app_ext().
    """
    return create_app_ext(flask_config_file=config)


def create_app_ext(
    flask_config_file: str | PathLike[str] | None = None,
    flask_config_dict: dict[str, Any] | None = None,
    pageshare_config_class: type | None = None,
    warn_default: bool = True,
    **kwargs,
) -> Flask:
    """
    Factory for PageShare WSGI apps.

    :param flask_config_file: A Flask config file name (may define a PAGESHARECFG class).
                              If not given, a config pointed to by the PAGESHARECFG env var
                              will be loaded (if possible).
    :param flask_config_dict: A dict used to update the Flask config (applied after
                              flask_config_file was loaded, if given).
    :param pageshare_config_class: If given, this class is instantiated as app.cfg;
                              otherwise, PAGESHARECFG from the Flask config is used. If that
                              is also not present, the built-in DefaultConfig will be used.
    :param warn_default: Emit a warning if PageShare falls back to its built-in default
                         config (perhaps the user forgot to specify PAGESHARECFG?).
    :param kwargs: Additional keyword args will be patched into the PageShare configuration
                   class (before its instance is created).
    """
    logging.debug("running create_app_ext")
    app = Flask("pageshare")
    app.url_map.strict_slashes = False

    if flask_config_file:
        app.config.from_pyfile(path.abspath(flask_config_file))
    else:
        app.config.from_envvar("PAGESHARECFG", silent=True)
    if flask_config_dict:
        app.config.update(flask_config_dict)
    Config = pageshare_config_class
    if not Config:
        Config = app.config.get("PAGESHARECFG")
    if not Config:
        if warn_default:
            logging.warning("using builtin default configuration")
        from pageshare.config.default import DefaultConfig as Config
    for key, value in kwargs.items():
        setattr(Config, key, value)
    if Config.secrets is None:
        # reuse the secret configured for flask (which is required for sessions)
        Config.secrets = app.config.get("SECRET_KEY")
    app.cfg = Config()
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = app.cfg.secrets["security/session"]

    # register before/after request functions
    app.before_request(before_wiki)
    app.teardown_request(teardown_wiki)
    from pageshare.apps.frontend import frontend

    app.register_blueprint(frontend)

    app.register_error_handler(PermissionDenied, permission_denied)
    app.register_error_handler(NoSuchPageError, page_not_found)
    app.register_error_handler(InvalidMode, invalid_mode)
    app.register_error_handler(PersistenceFailure, persistence_failure)

    init_backends(app)
    i18n_init(app)
    if app.cfg.template_dirs:
        app.jinja_env.loader = ChoiceLoader([FileSystemLoader(app.cfg.template_dirs), app.jinja_env.loader])
    # signal handlers log what happens
    import pageshare.signalling  # noqa
    return app


def destroy_app(app):
    deinit_backends(app)


def init_backends(app, create_backend=False):
    """
    initialize the storage backend
    """
    logging.debug("running init_backends")
    app.storage = backend_from_uri(app.cfg.storage_uri)
    # a memory backend has nothing to persist, it always needs creating
    if create_backend or app.cfg.create_storage or app.cfg.storage_uri.startswith("memory:"):
        app.storage.create()
    app.storage.open()


def deinit_backends(app):
    app.storage.close()
    if app.cfg.destroy_storage:
        app.storage.destroy()


def setup_user() -> user.User:
    """
    Retrieve the user of the request from the session, the anonymous
    user if nobody is logged in or the account is gone.
    """
    login = session.get(SESSION_LOGIN)
    userobj = None
    if login:
        userobj = flaskg.users.find_user_by_login(login)
        if userobj is None:
            logging.debug(f"user {login!r} from session does not exist (any more)")
            session.pop(SESSION_LOGIN, None)
    return userobj or user.AnonymousUser()


def before_wiki():
    """
    Setup environment for requests.
    """
    logging.debug("running before_wiki")
    cfg = app.cfg
    flaskg.storage = app.storage
    flaskg.groups = cfg.groups()
    flaskg.users = cfg.users()
    try:
        flaskg.user = setup_user()
    except RuntimeError:  # no valid request context, e.g. in tests
        flaskg.user = user.AnonymousUser()
    flaskg.resolver = PermissionResolver(flaskg.groups)
    flaskg.policy = PagePolicy(flaskg.resolver, cfg.cache.acl_functions, flaskg.groups)
    flaskg.pester_policy = cfg.pester_policy(flaskg.groups)
    flaskg.notifier = Notifier(app, flaskg.storage)


def teardown_wiki(response):
    """
    Teardown environment of requests.
    """
    logging.debug("running teardown_wiki")
    for name in ("notifier", "pester_policy", "policy", "resolver"):
        flaskg.pop(name, None)
    return response


def _error_response(err, status):
    return jsonify({MESSAGE: str(err)}), status


def permission_denied(err):
    return _error_response(_("You are not allowed to do this."), 403)


def page_not_found(err):
    return _error_response(_("Not Found"), 404)


def invalid_mode(err):
    return _error_response(err, 400)


def persistence_failure(err):
    return _error_response(err, 500)
