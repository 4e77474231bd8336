# Copyright: 2011-2013 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

from __future__ import annotations

from typing import Any, Callable, Protocol


class PageShareConfigProtocol(Protocol):
    sitename: str
    site_url: str
    secrets: dict[str, str]
    storage_uri: str
    create_storage: bool
    destroy_storage: bool
    ensure_page_owner: bool
    acl_functions: str
    users: Callable[[], Any]
    groups: Callable[[], Any]
    pester_policy: type
    magic_link_timeout: int | None
    template_dirs: list[str]
    admin_emails: list[str]
    email_tracebacks: bool
    mail_from: str | None
    mail_username: str | None
    mail_password: str | None
    mail_smarthost: str | None
    mail_enabled: bool
    locale_default: str
    supported_locales: list[str]
    timezone_default: str
    config_check_enabled: bool
