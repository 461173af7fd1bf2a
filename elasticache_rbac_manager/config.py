# -*- coding: utf-8 -*-
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigError
from .identifiers import extract_cluster_id

"""
Plugin configuration as supplied by the secrets host on initialize.

{
    "access_key_id": "string",      # optional, AWS access key id
    "secret_access_key": "string",  # optional, AWS secret access key
    "url": "string",                # primary endpoint of the cluster host:port
    "region": "string"              # AWS region of the cluster
}

"username" and "password" are deprecated aliases for "access_key_id" and
"secret_access_key". If no key pair is given the default boto3 credential
chain is used.
"""

DEPRECATED_KEYS = {
    "username": "access_key_id",
    "password": "secret_access_key",
}


def _weak_str(key, value):
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return str(value)
    raise ConfigError(f"Config key {key} expected a string got {type(value).__name__}")


@dataclass(frozen=True)
class ElastiCacheConfig:
    url: str
    region: str
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, Mapping):
            raise ConfigError(f"Config must be a mapping got {type(raw).__name__}")

        values = {}
        for deprecated, key in DEPRECATED_KEYS.items():
            if raw.get(deprecated) is not None:
                values[key] = _weak_str(deprecated, raw[deprecated])
        for key in ["access_key_id", "secret_access_key", "url", "region"]:
            if raw.get(key) is not None:
                values[key] = _weak_str(key, raw[key])

        for required in ["url", "region"]:
            if not values.get(required):
                raise ConfigError(f"Config key {required} is required")

        return cls(**values)

    @property
    def cluster_id(self):
        """Replication group id, the second label of the endpoint url."""
        return extract_cluster_id(self.url)

    @property
    def has_static_credentials(self):
        return bool(self.access_key_id and self.secret_access_key)
