# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - simple record types kept by the storage
"""

from __future__ import annotations

from collections import namedtuple
from typing import Any, TypeAlias

Row: TypeAlias = dict[str, Any]
"""A stored row: page, participation, email access or notice"""

EmailAccess = namedtuple("EmailAccess", "page_id email key access")
"""Access of an email address (no account) to a page, see pageshare.security.magiclink"""

Notice = namedtuple("Notice", "recipient_kind recipient_id kind page_id sender message created_at id", defaults=(None,))
"""A message in the inbox of a user or group"""
