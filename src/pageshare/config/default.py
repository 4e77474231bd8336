# Copyright: 2000-2004 Juergen Hermann <jh@web.de>
# Copyright: 2005-2013 MoinMoin:ThomasWaldmann
# Copyright: 2024      MoinMoin:UlrichB
# Copyright: 2026      PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - Configuration defaults class
"""


import re

from babel import Locale, UnknownLocaleError, parse_locale

from pageshare import error
from pageshare import datastructures
from pageshare.constants.rights import ACL_RIGHTS_FUNCTIONS
from pageshare.security import AccessControlList
from pageshare.user import PesterPolicy

from pageshare import log

logging = log.getLogger(__name__)


class CacheClass:
    """just a container for stuff we cache"""

    pass


class ConfigFunctionality:
    """Configuration base class with config class behaviour.

    This class contains the functionality for the DefaultConfig class,
    the settings are added to DefaultConfig from the options below.
    """

    # attributes of this class that are computed, not configured
    cache = None
    mail_enabled = None
    language_default = None

    def __init__(self):
        """Init Config instance"""
        self.cache = CacheClass()

        if self.config_check_enabled:
            self._config_check()

        # compiled functions ACL
        self.cache.acl_functions = AccessControlList([self.acl_functions], valid=ACL_RIGHTS_FUNCTIONS)

        try:
            self.language_default = parse_locale(self.locale_default)[0]
            Locale(self.language_default)
        except (ValueError, UnknownLocaleError):
            raise error.ConfigurationError("Invalid locale_default value (give something like 'en_US').")

        # check if mail is possible and set flag:
        self.mail_enabled = bool(self.mail_smarthost is not None and self.mail_from)

        if not self.storage_uri or ":" not in self.storage_uri:
            raise error.ConfigurationError(
                "No storage configuration specified! You need to define storage_uri, e.g. 'memory:'."
            )

        if not self.site_url:
            raise error.ConfigurationError(
                "No site_url configured! Links in emails need it, set site_url = 'https://pages.example.org/'."
            )

        if self.magic_link_timeout is not None and self.magic_link_timeout <= 0:
            raise error.ConfigurationError("magic_link_timeout must be a positive number of seconds or None.")

        if self.secrets is None:  # admin did not setup a real secret
            raise error.ConfigurationError(
                "No secret configured! You need to set secrets = 'somelongsecretstring' in your config."
            )

        secret_key_names = ["security/session"]

        secret_min_length = 10
        if isinstance(self.secrets, str):
            if len(self.secrets) < secret_min_length:
                raise error.ConfigurationError(
                    "The secrets = '...' config setting is a way too short string "
                    "(minimum length is {} chars)!".format(secret_min_length)
                )
            # for lazy people: set all required secrets to same value
            secrets = {}
            for key in secret_key_names:
                secrets[key] = self.secrets
            self.secrets = secrets

        # we check if we have all secrets we need and that they have minimum length
        for secret_key_name in secret_key_names:
            try:
                secret = self.secrets[secret_key_name]
                if len(secret) < secret_min_length:
                    raise ValueError
            except (KeyError, ValueError):
                raise error.ConfigurationError(
                    "You must set a (at least {} chars long) secret string for secrets['{}']!".format(
                        secret_min_length, secret_key_name
                    )
                )

    def _config_check(self):
        """Check namespace and warn about unknown names

        Warn about names which are not used by DefaultConfig, except
        modules, classes, _private or __magic__ names.

        This check is disabled by default, when enabled, it will show an
        error message with unknown names.
        """
        unknown = [
            f'"{name}"'
            for name in dir(self)
            if not name.startswith("_")
            and name not in DefaultConfig.__dict__
            and name not in ConfigFunctionality.__dict__
            and not isinstance(getattr(self, name), (type(re), type(DefaultConfig)))
        ]
        if unknown:
            msg = """
Unknown configuration options: {}.

Please check your configuration for typos.
""".format(
                ", ".join(unknown)
            )
            raise error.ConfigurationError(msg)

    def __getitem__(self, item):
        """Make it possible to access a config object like a dict"""
        return getattr(self, item)


class DefaultConfig(ConfigFunctionality):
    """Configuration base class with default config values
    (added below)
    """

    # Do not add anything into this class. Functionality must
    # be added above. Settings must be added below to
    # the options dictionary.


#
# Options that are not prefixed automatically with their
# group name, see below (at the options dict) for more
# information on the layout of this structure.
#
options_no_group_name = {
    # ==========================================================================
    "datastructures": (
        "Datastruct",
        None,
        (
            (
                "groups",
                lambda cfg: datastructures.ConfigGroups({}),
                "function f(cfg) that returns a backend which is used to access groups definitions.",
            ),
            (
                "users",
                lambda cfg: datastructures.ConfigUsers({}, groups=cfg.groups()),
                "function f(cfg) that returns a backend which is used to look up user accounts.",
            ),
        ),
    ),
    # ==========================================================================
    "storage": (
        "Storage",
        None,
        (
            ("storage_uri", "memory:", "backend uri, 'memory:' or 'sqla:<sqlalchemy db uri>[::<table prefix>]'"),
            ("create_storage", False, "if True, create the storage (tables) at startup"),
            ("destroy_storage", False, "if True, destroy the storage (all data!) when the app gets destroyed"),
        ),
    ),
    # ==========================================================================
    "auth": (
        "Authorization / Security",
        None,
        (
            (
                "secrets",
                None,
                """Either a long shared secret string used for multiple purposes or a dict {"purpose": "longsecretstring", ...} for setting up different shared secrets for different purposes.""",
            ),
            (
                "acl_functions",
                "Known:create",
                "Access Control List for platform level functions, rights: superuser, create.",
            ),
            (
                "pester_policy",
                PesterPolicy,
                "Class object hook deciding who may contact (share with, notify) whom",
            ),
            (
                "ensure_page_owner",
                True,
                "if True, every page must have an owner (a user or a group)",
            ),
            (
                "magic_link_timeout",
                None,
                "max. age of magic link tokens in seconds, None for no limit",
            ),
        ),
    ),
    # ==========================================================================
    "style": (
        "Style / UI",
        None,
        (
            ("sitename", "Untitled Site", "Short name of your site, used in emails [Unicode]"),
            ("site_url", "http://localhost:8080/", "absolute base url of the site, used for links in emails"),
            ("template_dirs", [], "list of directories with templates that will override the builtin ones."),
        ),
    ),
    # ==========================================================================
    "various": (
        "Various",
        None,
        (
            ("admin_emails", [], "List of admin email addresses."),
            ("email_tracebacks", False, "if True, send tracebacks via email to the admins."),
            ("config_check_enabled", False, "if True, check configuration for unknown settings."),
            ("timezone_default", "UTC", "Default time zone."),
            ("locale_default", "en_US", "Default locale for user interface and notification emails."),
            ("supported_locales", ["en"], "Locales offered to the language negotiation of requests."),
        ),
    ),
}

#
# The 'options' dict carries default settings that are prefixed with
# the group name when added to the DefaultConfig class (e.g. mail_from).
#
options = {
    "mail": (
        "Mail",
        "These settings control outgoing email.",
        (
            ("from", None, "Used as From: address for generated mail. [Unicode]"),
            ("username", None, "Username for SMTP server authentication (None = don't use auth)."),
            ("password", None, "Password for SMTP server authentication (None = don't use auth)."),
            ("smarthost", None, "Address of SMTP server to use for sending mail (None = don't send mail)."),
        ),
    ),
}


def _add_options_to_defconfig(opts, addgroup=True):
    for groupname in opts:
        group_short, group_doc, group_opts = opts[groupname]
        for name, default, doc in group_opts:
            if addgroup:
                name = groupname + "_" + name
            setattr(DefaultConfig, name, default)


_add_options_to_defconfig(options)
_add_options_to_defconfig(options_no_group_name, False)
