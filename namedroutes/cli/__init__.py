"""
namedroutes command line interface.

Usage:
    namedroutes parse <pattern>
    namedroutes build <pattern> -p key=value ...
    namedroutes match <pattern> <url>
    namedroutes routes <config>
    namedroutes url <config> <name> -p key=value ...
    namedroutes resolve <config> <url>
"""

from .. import __version__

__cli_name__ = "namedroutes"
