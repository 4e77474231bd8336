# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - Flask application modules

This package contains the following Flask blueprints:

- frontend: pages, sharing and magic links
"""
