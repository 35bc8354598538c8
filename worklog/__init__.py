"""
What did you spend your time on last month?

Read daily work log reports, count tags used in their entries and
show how the work was distributed across them for the last month or
any selected date range.

The `report`_ module contains the header and entry parsing and the
loading of a single day report. Tag counts across a date range are
summed up in the `stats`_ module. Exceptions, config, date handling
and report file layout are placed in the `base`_ module. Logging and
generic utilities can be found in the `utils`_ module. Option parsing
and other command line stuff resides in the `cli`_ module.
"""
