# -*- coding: utf-8 -*-
"""Identifiers accepted by ElastiCache for users, user groups and replication groups.

All ElastiCache ids can have up to 40 characters and must begin with a letter.
They must not end with a hyphen or contain two consecutive hyphens.
Valid characters are A-Z, a-z, 0-9 and - (hyphen).
"""

import re

MAX_ID_LENGTH = 40

NON_ALPHANUMERIC_HYPHEN_RE = re.compile(r"[^a-zA-Z0-9-]+")
DOUBLE_HYPHEN_RE = re.compile(r"-{2,}")
TRAILING_HYPHEN_REPLACEMENT = "x"


def normalise_id(raw):
    """Derive a legal ElastiCache identifier from an arbitrary string.

    Usernames are generated as ``v_{display}_{role}_{random}_{epoch}`` so when
    truncating we keep the tail, which carries the unique part.

    :type raw: str
    :param raw: display name or generated username
    :return: identifier, empty only if raw holds no legal character at all
    """
    stripped = NON_ALPHANUMERIC_HYPHEN_RE.sub("", raw or "")
    if not stripped:
        return stripped
    normalised = DOUBLE_HYPHEN_RE.sub("", stripped)

    if len(normalised) > MAX_ID_LENGTH:
        normalised = normalised[-MAX_ID_LENGTH:]

    # a leading hyphen cannot be made a letter so it is dropped
    normalised = normalised.lstrip("-")
    if not normalised:
        # only hyphens were given
        return TRAILING_HYPHEN_REPLACEMENT

    if normalised[0].isdigit():
        # 1 -> a ... 9 -> i, 0 has no letter before a so it maps to a as well
        digit = int(normalised[0])
        normalised = chr(ord("a") + max(digit, 1) - 1) + normalised[1:]

    if normalised.endswith("-"):
        normalised = normalised[:-1] + TRAILING_HYPHEN_REPLACEMENT

    return normalised


def extract_cluster_id(url):
    """Extract the replication group id from a cluster endpoint.

    ElastiCache endpoints are always of the form ``prefix.cluster-id.dns-suffix:port``
    and neither the prefix nor the cluster id can contain a ".". An url with no
    second label yields an empty id, which every later call rejects.
    """
    labels = (url or "").split(".")
    if len(labels) < 2:
        return ""
    return normalise_id(labels[1])
