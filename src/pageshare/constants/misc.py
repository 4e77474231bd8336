# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - Miscellaneous constants not fitting elsewhere.
"""

ANON = "anonymous"

# page lifecycle (flow) states
FLOW_NORMAL = "normal"
FLOW_DELETED = "deleted"
FLOWS = [FLOW_NORMAL, FLOW_DELETED]

# entity kinds
USER = "user"
GROUP = "group"

# sharing modes
SHARE = "share"
NOTIFY = "notify"
MODES = [SHARE, NOTIFY]

# friendly urls get cut at a word boundary when longer than this
FRIENDLY_URL_MAX = 42

# recipient kind for email addresses without an account
EMAIL = "email"
