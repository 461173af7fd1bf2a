# -*- coding: utf-8 -*-
"""Turn creation statements into an ElastiCache access string.

Each creation statement is a JSON array of access string rules, for example
``["~cache:*", "-@all", "+@read"]``. The rules of every statement are joined in
order. Users are always created enabled so an ``off`` rule is refused and an
``on`` rule is added when none is given.
"""

import json

from .exceptions import MalformedAccessString, ForbiddenAccessString

DEFAULT_ACCESS_STRING = "on ~* +@read"
ENABLED = "on"
DISABLED = "off"


def parse_creation_commands(commands):
    """
    Build the access string for a new user.

    :type commands: list
    :param commands: creation statements, each a JSON encoded array of rules
    :return: the access string
    :raises MalformedAccessString: a statement is not a JSON array of strings
    :raises ForbiddenAccessString: the rules would create a disabled user
    """
    if not commands:
        return DEFAULT_ACCESS_STRING

    rules = []
    for command in commands:
        try:
            parsed = json.loads(command)
        except (TypeError, ValueError) as e:
            raise MalformedAccessString(command, e) from e
        if not isinstance(parsed, list) or not all(isinstance(rule, str) for rule in parsed):
            raise MalformedAccessString(command, "expected an array of strings")
        rules.extend(parsed)

    tokens = " ".join(rules).split()
    if DISABLED in tokens:
        raise ForbiddenAccessString()

    if ENABLED not in tokens:
        rules.insert(0, ENABLED)

    return " ".join(rules).strip()
