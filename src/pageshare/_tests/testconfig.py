# Copyright: 2000-2004 by Juergen Hermann <jh@web.de>
# Copyright: 2011-2013 by MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - Test configuration.

Do not change any values without good reason, lots of tests depend on the
users and groups defined here.
"""


from pageshare import datastructures
from pageshare.config.default import DefaultConfig

# "committee" is a group inside of "rainbow", so carol is a rainbow member too.
# "animals" can be contacted and viewed by anybody.
GROUPS = {
    "rainbow": dict(id="g-rainbow", members=["aaron", "blue", "committee"]),
    "committee": dict(id="g-committee", members=["carol"]),
    "animals": dict(id="g-animals", members=["frank"], public_access=dict(pester=True, view=True)),
    "hermits": dict(id="g-hermits", members=["gina"]),
}

USERS = {
    "aaron": dict(name="Aaron", email="aaron@example.org"),
    "blue": dict(name="Blue", email="blue@example.org", locale="de"),
    "carol": dict(name="Carol", email="carol@example.org"),
    "dolphin": dict(name="Dolphin", email="dolphin@example.org", public_pester=True),
    "eve": dict(name="Eve", email="eve@example.org", contacts=["aaron"]),
    "frank": dict(name="Frank", email="frank@example.org"),
    "gina": dict(name="Gina"),
    "root": dict(name="Root", email="root@example.org"),
}


class Config(DefaultConfig):
    """
    Default configuration for unit tests.
    """

    sitename = "PageShare Test"
    site_url = "http://localhost:8080/"
    secrets = "testsecret-testsecret"
    storage_uri = "memory:"
    acl_functions = "root:superuser Known:create"
    email_tracebacks = False
    mail_from = "pages@example.org"

    def groups(self):
        return datastructures.ConfigGroups(GROUPS)

    def users(self):
        return datastructures.ConfigUsers(USERS, groups=self.groups())
