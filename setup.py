#!/usr/bin/env python
# coding: utf-8

from setuptools import setup

version = '0.1.0'

# Prepare install requires and extra requires
install_requires = [
    'python_dateutil',
    ]
extras_require = {
    'tests': ['pytest'],
    }
extras_require['all'] = [
    dependency
    for extra in extras_require.values()
    for dependency in extra]

# Prepare the long description from readme
with open('README.rst', encoding='utf-8') as readme:
    description = readme.read()

setup(
    name='worklog',
    description='worklog - What did you spend your time on last month?',
    long_description=description,
    long_description_content_type='text/x-rst',

    version=version,
    provides=['worklog'],
    packages=['worklog'],
    scripts=['bin/worklog'],
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires='>=3.9',

    license='GPLv2+',

    keywords=['worklog', 'report', 'tags', 'statistics'],
    classifiers=[
        'License :: OSI Approved :: '
            'GNU General Public License v2 or later (GPLv2+)',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Topic :: Office/Business',
        'Topic :: Utilities',
        ],

    data_files=[],
    zip_safe=False,
    )
