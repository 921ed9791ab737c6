"""
Formal grammar for named route patterns.

Grammar
=======

<route>       ::= <segment>*
<segment>     ::= <static> | <placeholder> | <optional>
<optional>    ::= "[" <segment>* "]"
<placeholder> ::= "{" <ws>* <name> <ws>* [ ":" <constraint> ] <ws>* "}"
<name>        ::= [a-zA-Z_][a-zA-Z0-9_-]*
<constraint>  ::= regex fragment with balanced "{" "}", default "[^/]+"
<static>      ::= any other character

A leading "/" is implied on the route and trailing slashes are dropped, so
"users/{id}/" and "/users/{id}" describe the same route. A pattern that is
empty after normalization becomes "/".

Placeholder Examples
====================
{id}                  # one path segment, "[^/]+"
{id:\\d+}              # digits only
{code:[A-Z]{2,3}}     # braces inside a constraint are fine
{ slug : [a-z-]+ }    # whitespace around name and constraint is ignored

Complete Pattern Examples
=========================
/users/{id}
/users/{id}[/{action}]
/users[/{id}[/{name}]]
/files/{path:.+}
/archive/{date:\\d{4}-\\d{2}-\\d{2}}

Constraints must not contain plain capturing groups. Use "(?:...)" instead
of "(...)"; lookarounds, named groups and inline flags are accepted.
"""

import re

# Structural characters
PLACEHOLDER_OPEN = "{"
PLACEHOLDER_CLOSE = "}"
OPTIONAL_OPEN = "["
OPTIONAL_CLOSE = "]"
CONSTRAINT_SEPARATOR = ":"

DEFAULT_CONSTRAINT = "[^/]+"

NAME_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_-]*")

# Methods that make a route visible to URL matching
READ_METHODS = frozenset({"GET", "HEAD"})
