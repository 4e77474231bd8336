# Copyright: 2010 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - signals

    We define all signals here to avoid typos/conflicts in the signal name.
"""


from blinker import Namespace, ANY  # noqa

_signals = Namespace()

page_displayed = _signals.signal("page_displayed")
page_created = _signals.signal("page_created")
page_shared = _signals.signal("page_shared")
# sent once per participation whose access level changed
access_updated = _signals.signal("access_updated")
