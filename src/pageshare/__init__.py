# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - page access control and sharing for a collaborative content platform.
"""


import sys
import platform

from ._version import version  # noqa

project = "PageShare"


if sys.hexversion < 0x30A0000:
    sys.exit("Error: %s requires Python 3.10+, current version is %s\n" % (project, platform.python_version()))
