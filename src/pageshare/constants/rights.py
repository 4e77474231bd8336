# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - access right related constants
"""

# access levels a participation can hold, lowest first.
# each level implies the capabilities of all lower levels.

# none means an explicit participation that grants nothing
NONE = "none"

# view means to be able to see the page
VIEW = "view"

# edit means to be able to change the page content and comment on it
EDIT = "edit"

# admin means to be able to change access (share), destroy the page
ADMIN = "admin"

ACCESS_LEVELS = [NONE, VIEW, EDIT, ADMIN]

# the permissions that can be asked for on a page
PAGE_PERMISSIONS = [VIEW, EDIT, ADMIN]

# social permission to contact another user or group
PESTER = "pester"

# rights for platform level functionality (see cfg.acl_functions),
# not related to page access.
SUPERUSER = "superuser"
CREATE = "create"

ACL_RIGHTS_FUNCTIONS = [SUPERUSER, CREATE]

# special user groups - order is important
SPECIAL_USERS = ["All", "Known"]
