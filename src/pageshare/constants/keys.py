# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - key name constants (request fields, reason codes, event kinds)
"""

# share / notify request fields
MODE = "mode"
RECIPIENTS = "recipients"
RECIPIENT = "recipient"
RECIPIENT_NAME = "recipient_name"
ACCESS = "access"
NOTIFICATION = "notification"
MESSAGE = "message"
SEND_EMAIL = "send_email"
SEND_MESSAGE = "send_message"
SEND_NOTICE = "send_notice"

# share / notify response fields
UPDATED_USER_PARTICIPATIONS = "updated_user_participations"
UPDATED_GROUP_PARTICIPATIONS = "updated_group_participations"
EMAIL_RECIPIENTS = "email_recipients"
FAILURES = "failures"
NAME = "name"
REASON = "reason"
LEVEL = "level"

# per-recipient failure reasons, stable codes for localization
NOT_FOUND = "not_found"
PESTER_ERROR = "pester_error"
ALREADY_EXISTS = "already_exists"
NO_ACCESS_ERROR = "no_access_error"

# failure levels
LEVEL_ERROR = "error"
LEVEL_NOTICE = "notice"

# success message keys
SHARED_PAGE_SUCCESS = "shared_page_success"
NOTIFY_SUCCESS = "notify_success"

# tracking event kinds
UPDATE_USER_ACCESS = "update_user_access"
UPDATE_GROUP_ACCESS = "update_group_access"

# notice kinds
PAGE_SHARED = "page_shared"
PAGE_NOTIFY = "page_notify"

# session key holding the login of the current user
SESSION_LOGIN = "user.login"
