# -*- coding: utf-8 -*-
import secrets
import string
import time

USERNAME_PREFIX = "v"
SEPARATOR = "_"
DISPLAY_NAME_LENGTH = 5
ROLE_NAME_LENGTH = 39
RANDOM_LENGTH = 20
MAX_USERNAME_LENGTH = 80


def _random_string(length):
    letters = string.ascii_letters + string.digits
    return "".join(secrets.choice(letters) for _ in range(length))


def generate_username(display_name, role_name, _now=time.time):
    """Generates a unique username of the form v_{display}_{role}_{random}_{epoch}.

    Display and role names are truncated so the random part and the epoch
    always survive, empty names are skipped.
    """
    parts = [USERNAME_PREFIX]
    if display_name:
        parts.append(display_name[:DISPLAY_NAME_LENGTH])
    if role_name:
        parts.append(role_name[:ROLE_NAME_LENGTH])
    parts.append(_random_string(RANDOM_LENGTH))
    parts.append(str(int(_now())))
    return SEPARATOR.join(parts)[:MAX_USERNAME_LENGTH]
