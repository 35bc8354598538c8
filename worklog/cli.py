# coding: utf-8

"""
Command line interface for worklog

This module takes care of processing command line options, loading
the config and printing tag statistics for the selected date range.
"""

import argparse
import sys

import worklog.base
from worklog import utils
from worklog.stats import ReportStatistics
from worklog.utils import log

USAGE = """
worklog [this|last] [week|month|year] [options]

Summarize tags used in daily work log reports.

Count tags used in report entries for given week, month, year or
selected date range and show their percentage share. By default
reports from the last month until today are included.
""".strip()

KEYWORDS = ["today", "yesterday", "this", "last", "week", "month", "year"]


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Options
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class Options(object):
    """ Command line options parser """

    def __init__(self, arguments=None):
        """ Prepare the parser. """
        self.parser = argparse.ArgumentParser(usage=USAGE)
        self._prepare_arguments(arguments)
        self.opt = self.arg = None

        # Enable debugging output (even before options are parsed)
        if "--debug" in self.arguments:
            log.setLevel(utils.LOG_DEBUG)

        # Time selection
        group = self.parser.add_argument_group("Select")
        group.add_argument(
            "--since",
            help="Start date in the YYYY-MM-DD format")
        group.add_argument(
            "--until",
            help="End date in the YYYY-MM-DD format")
        group.add_argument(
            "--root", metavar="DIR",
            help="Report root directory (default: taken from config)")

        # Formating options
        group = self.parser.add_argument_group("Format")
        group.add_argument(
            "--width", type=int, default=None,
            help="Maximum width of the to-do listing")
        group.add_argument(
            "--todo", action="store_true",
            help="List outstanding to-do items as well")

        # Other options
        group = self.parser.add_argument_group("Utils")
        group.add_argument(
            "--config",
            metavar="FILE",
            help="Use alternate configuration file (default: 'config')")
        group.add_argument(
            "--debug", action="store_true",
            help="Turn on debugging output, do not catch exceptions")

    def _prepare_arguments(self, arguments):
        """ Prepare arguments (both direct and from command line) """
        if arguments is not None:
            if isinstance(arguments, str):
                self.arguments = arguments.split()
            else:
                self.arguments = arguments
        else:
            self.arguments = sys.argv[1:]

    def parse(self):
        """ Parse the options. """
        opt, arg = self.parser.parse_known_args(self.arguments)
        self.opt = opt
        self.arg = arg
        self.check()

        # Time period handling
        if opt.since is None and opt.until is None:
            opt.since, opt.until = worklog.base.Date.period(arg)
        else:
            since, until = worklog.base.Date.default()
            opt.since = worklog.base.Date(opt.since) if opt.since else since
            opt.until = worklog.base.Date(opt.until) if opt.until else until

        log.debug("Gathered options:")
        log.debug('options = {0}'.format(opt))
        return opt

    def check(self):
        """ Perform additional check for given options """
        for argument in self.arg:
            if argument not in KEYWORDS:
                raise worklog.base.OptionError(
                    "Invalid argument: '{0}'".format(argument))


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Main
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

def main(arguments=None):
    """
    Parse options, gather statistics and show the results

    Takes optional parameter ``arguments`` which can be either
    command line string or list of options. This is very useful
    for testing purposes. Returns the gathered statistics object.
    """
    options = Options(arguments).parse()

    # Missing config file is fine, defaults are used then
    try:
        config = worklog.base.Config(path=options.config)
        layout = config.layout
        width = options.width or config.width
    except worklog.base.ConfigFileError as error:
        log.debug(error)
        log.debug("Using the default report layout.")
        layout = worklog.base.Layout()
        width = options.width or utils.MAX_WIDTH
    if options.root:
        layout = worklog.base.Layout(options.root, layout.pattern)
    log.debug("Report layout: {0}".format(layout))

    # Invalid or misplaced report files abort the whole run
    stats = ReportStatistics(options.since.date, options.until.date, layout)

    print(stats.render())
    if options.todo:
        print(stats.render_todos(width))
    return stats
