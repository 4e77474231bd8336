# Copyright: 2007 MoinMoin:KarolNowak
# Copyright: 2008 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - some common code for testing
"""


from flask import g as flaskg

from pageshare.constants.keys import SESSION_LOGIN
from pageshare.items import Page
from pageshare.security import AccessLevel


# Switching the acting user -----------------------------------------
# Usually the tests run as anonymous user, become() makes a user of
# the test configuration act.


def become(login):
    """make flaskg.user the user with login <login>"""
    flaskg.user = flaskg.users[login]
    return flaskg.user


def get_user(login):
    return flaskg.users[login]


def get_group(name):
    return flaskg.groups[name]


def set_user_in_client_session(client, login):
    with client.session_transaction() as session:
        session[SESSION_LOGIN] = login


# Creating test pages -----------------------------------------------


def create_page(title="A fine page", owner="aaron", name=None, public=False, participants=None, storage=None):
    """
    creates and saves a page owned by <owner> (a user login or group name)

    :param participants: {login or group name: access level}
    """
    storage = storage or flaskg.storage
    page = Page(title, name=name, created_by=owner, public=public)
    page.set_owner(owner, users=flaskg.users, groups=flaskg.groups)
    for entity_name, access in (participants or {}).items():
        entity = flaskg.users.get(entity_name) or flaskg.groups.get(entity_name)
        page.add(entity, AccessLevel.parse(access))
    storage.save_page(page)
    return page
