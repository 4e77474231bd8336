# Copyright: 2009 MoinMoin:DmitrijsMilajevs
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - datastructures (groups and users) support.
"""


from pageshare.datastructures.backends import Group, BaseGroupsBackend, BaseUsersBackend  # noqa
from pageshare.datastructures.backends.config_groups import ConfigGroups  # noqa
from pageshare.datastructures.backends.composite_groups import CompositeGroups  # noqa
from pageshare.datastructures.backends.config_users import ConfigUsers  # noqa

from pageshare.datastructures.backends import GroupDoesNotExistError  # noqa
from pageshare.datastructures.backends import UserDoesNotExistError  # noqa
