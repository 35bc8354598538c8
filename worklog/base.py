# coding: utf-8

""" Config, Date, Layout and Exceptions """

import configparser
import datetime
import io
import os
import re
import sys
from configparser import NoOptionError, NoSectionError

from dateutil.relativedelta import MO as MONDAY
from dateutil.relativedelta import relativedelta as delta

from worklog.utils import MAX_WIDTH, log

# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Constants
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

# Config file location
CONFIG = os.path.expanduser("~/.worklog")

# Default report root directory and file layout below it
ROOT = "~/Documents/Worklog"
FILENAME = "%Y/%m/%Y%m%d.report"

# Today's date
TODAY = datetime.date.today()


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Exceptions
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class GeneralError(Exception):
    """ General worklog error """


class ConfigError(GeneralError):
    """ Configuration problem """


class ConfigFileError(ConfigError):
    """ Problem with the config file """


class OptionError(GeneralError):
    """ Invalid command line """


class ReportError(GeneralError):
    """ Report loading error """


class HeaderParseError(ReportError):
    """ Report header does not match the expected format """


class ReportFileNotFoundError(ReportError):
    """ There is no report file for the requested date """


class ReportDateMismatchError(ReportError):
    """ Report header date differs from the date in the file name """


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Layout
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class Layout(object):
    """
    Location of report files on disk

    Each day has its own report file stored under the root directory.
    The path below the root is produced from the report date using
    the strftime ``pattern``, by default one directory per year and
    month with a date stamped file name::

        ~/Documents/Worklog/2023/05/20230504.report
    """

    def __init__(self, root=None, pattern=None):
        self.root = os.path.expanduser(root or ROOT)
        self.pattern = pattern or FILENAME
        # Each day must get its own file
        for directive in ("%Y", "%m", "%d"):
            if directive not in self.pattern:
                raise ConfigError(
                    "Report filename pattern '{0}' lacks '{1}'.".format(
                        self.pattern, directive))

    def __repr__(self):
        return "Layout({0!r}, {1!r})".format(self.root, self.pattern)

    def filename(self, date):
        """ Report file path for given date """
        return os.path.join(self.root, date.strftime(self.pattern))


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Config
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class Config(object):
    """ User config file """

    parser = None

    def __init__(self, config=None, path=None):
        """
        Read the config file

        Parse config from given string (config) or file (path).
        If no config or path given, default to "~/.worklog/config" which
        can be overrided by the ``WORKLOG_DIR`` environment variable.
        """
        # Read the config only once (unless explicitly provided)
        if self.parser is not None and config is None and path is None:
            return
        Config.parser = configparser.ConfigParser(interpolation=None)
        # If config provided as string, parse it directly
        if config is not None:
            log.info("Inspecting config file from string")
            log.debug(config)
            self.parser.read_file(io.StringIO(config))
            return
        # Check the environment for config file override
        # (unless path is explicitly provided)
        if path is None:
            path = Config.path()
        try:
            log.info("Inspecting config file '{0}'.".format(path))
            with open(path, encoding="utf-8") as config_file:
                self.parser.read_file(config_file)
        except IOError as error:
            log.debug(error)
            Config.parser = None
            raise ConfigFileError(
                "Unable to read the config file '{0}'.".format(path))

    @property
    def root(self):
        """ Report root directory """
        try:
            return self.parser.get("general", "root")
        except (NoOptionError, NoSectionError):
            return ROOT

    @property
    def filename(self):
        """ Report file name pattern relative to the root """
        try:
            return self.parser.get("general", "filename")
        except (NoOptionError, NoSectionError):
            return FILENAME

    @property
    def width(self):
        """ Maximum width of the report """
        try:
            return int(self.parser.get("general", "width"))
        except (NoOptionError, NoSectionError):
            return MAX_WIDTH
        except ValueError:
            raise ConfigError("Invalid width '{0}', should be integer.".format(
                self.parser.get("general", "width")))

    @property
    def layout(self):
        """ Report file layout as configured """
        return Layout(self.root, self.filename)

    @staticmethod
    def path():
        """ Detect config file path """
        try:
            directory = os.environ["WORKLOG_DIR"]
        except KeyError:
            directory = CONFIG
        # Detect config file (even before options are parsed)
        filename = "config"
        matched = re.search(r"--confi?g?[ =](\S+)", " ".join(sys.argv))
        if matched:
            filepath, filename = os.path.split(matched.groups()[0])
            if filepath:
                directory = filepath
        return directory.rstrip("/") + "/" + filename

    @staticmethod
    def example():
        """ Return config example """
        return "[general]\nroot = ~/Documents/Worklog\n"


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
#  Date
# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

class Date(object):
    """ Date parsing for common word formats """

    def __init__(self, date=None):
        """ Parse the date string """
        if isinstance(date, datetime.date):
            self.date = date
        elif date is None or date.lower() == "today":
            self.date = TODAY
        elif date.lower() == "yesterday":
            self.date = TODAY - delta(days=1)
        else:
            try:
                self.date = datetime.date(*[int(i) for i in date.split("-")])
            except (ValueError, TypeError) as error:
                log.debug(error)
                raise OptionError(
                    "Invalid date format: '{0}', use YYYY-MM-DD.".format(date))

    def __str__(self):
        """ String format for printing """
        return str(self.date)

    @staticmethod
    def default():
        """ Default range, one month ago until today """
        return Date(TODAY - delta(months=1)), Date(TODAY)

    @staticmethod
    def this_week():
        """ Return first and last day of the current week """
        since = TODAY + delta(weekday=MONDAY(-1))
        return Date(since), Date(since + delta(days=6))

    @staticmethod
    def last_week():
        """ Return first and last day of the last week """
        since = TODAY + delta(weekday=MONDAY(-2))
        return Date(since), Date(since + delta(days=6))

    @staticmethod
    def this_month():
        """ Return first and last day of this month """
        since = TODAY + delta(day=1)
        return Date(since), Date(since + delta(months=1, days=-1))

    @staticmethod
    def last_month():
        """ Return first and last day of the last month """
        since = TODAY + delta(day=1, months=-1)
        return Date(since), Date(since + delta(months=1, days=-1))

    @staticmethod
    def this_year():
        """ Return first and last day of this year """
        since = TODAY + delta(month=1, day=1)
        return Date(since), Date(since + delta(years=1, days=-1))

    @staticmethod
    def last_year():
        """ Return first and last day of the last year """
        since = TODAY + delta(years=-1, month=1, day=1)
        return Date(since), Date(since + delta(years=1, days=-1))

    @staticmethod
    def period(argument):
        """
        Detect desired time period for the argument

        Both returned dates are inclusive. Without any period keyword
        the last month until today is used.
        """
        if "today" in argument:
            return Date("today"), Date("today")
        if "yesterday" in argument:
            return Date("yesterday"), Date("yesterday")
        last = "last" in argument
        if "year" in argument:
            return Date.last_year() if last else Date.this_year()
        if "month" in argument:
            return Date.last_month() if last else Date.this_month()
        if "week" in argument:
            return Date.last_week() if last else Date.this_week()
        return Date.default()
