# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - i18n (internationalization) and l10n (localization) support

To use this, please use exactly this line (no less, no more)::

    from pageshare.i18n import _, L_, N_

    # _ == gettext
    # N_ == ngettext
    # L_ == lazy_gettext
"""


from flask import current_app, request
from flask import g as flaskg
from flask_babel import Babel, gettext, ngettext, lazy_gettext
from flask_babel import force_locale  # noqa

from pageshare import log

logging = log.getLogger(__name__)


_ = gettext
N_ = ngettext
L_ = lazy_gettext


def i18n_init(app):
    """initialize Flask-Babel"""
    Babel(app, locale_selector=get_locale, timezone_selector=get_timezone)


def get_locale():
    """return the locale for the current user"""
    locale = None
    # this might be called at a time when flaskg.user is not setup yet:
    u = getattr(flaskg, "user", None)
    if u and u.locale is not None:
        locale = u.locale
        logging.debug(f"user locale = {locale!r}")
    else:
        try:
            locale = request.accept_languages.best_match(current_app.cfg.supported_locales)
            logging.debug(f"best match locale = {locale!r}")
        except RuntimeError:  # no valid request context
            pass
    if not locale:
        locale = current_app.cfg.locale_default
        logging.debug(f"default locale = {locale!r}")
    return locale


def get_timezone():
    """return the timezone for the current user"""
    u = getattr(flaskg, "user", None)
    if u and getattr(u, "timezone", None) is not None:
        return u.timezone
    return current_app.cfg.timezone_default
