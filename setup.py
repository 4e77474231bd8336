#!/usr/bin/env python
# Copyright: 2001 by Juergen Hermann <jh@web.de>
# Copyright: 2001-2024 MoinMoin:ThomasWaldmann
# Copyright: 2023-2024 MoinMoin:UlrichB
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

from setuptools import setup


setup_args = dict(
    # stuff for babel:
    message_extractors={
        'src': [
            ('pageshare/templates/**.txt', 'jinja2', None),
            ('pageshare/**/_tests/**', 'ignore', None),
            ('pageshare/**.py', 'python', None),
        ],
    },
)


if __name__ == '__main__':
    setup(**setup_args)
