# -*- coding: utf-8 -*-
"""elasticache_rbac_manager

Issues, rotates and revokes short lived ElastiCache for Redis RBAC users on behalf of a
secrets host, waiting out ElastiCache's eventually consistent control plane and keeping every
user of a cluster in the single user group the cluster allows.

"""

from __future__ import absolute_import

from elasticache_rbac_manager.exceptions import ElastiCacheManagerError, \
    ConfigError, \
    AccessStringError, \
    MalformedAccessString, \
    ForbiddenAccessString, \
    ErrorCode, \
    RemoteError, \
    ReconciliationTimeoutError, \
    PollCancelled
from elasticache_rbac_manager.identifiers import normalise_id, extract_cluster_id
from elasticache_rbac_manager.access_string import parse_creation_commands
from elasticache_rbac_manager.polling import wait_for
from elasticache_rbac_manager.usernames import generate_username
from elasticache_rbac_manager.config import ElastiCacheConfig
from elasticache_rbac_manager.client import ElastiCacheClient
from elasticache_rbac_manager.database import Database, \
    InitializeRequest, \
    InitializeResponse, \
    UsernameMetadata, \
    Statements, \
    NewUserRequest, \
    NewUserResponse, \
    UpdateUserRequest, \
    UpdateUserResponse, \
    DeleteUserRequest, \
    DeleteUserResponse
from elasticache_rbac_manager.managers import RedisElastiCacheDB, UserGroupAssociator, new
from ._version import __version__

__all__ = ["__version__",
           "ElastiCacheManagerError",
           "ConfigError",
           "AccessStringError",
           "MalformedAccessString",
           "ForbiddenAccessString",
           "ErrorCode",
           "RemoteError",
           "ReconciliationTimeoutError",
           "PollCancelled",
           "normalise_id",
           "extract_cluster_id",
           "parse_creation_commands",
           "wait_for",
           "generate_username",
           "ElastiCacheConfig",
           "ElastiCacheClient",
           "Database",
           "InitializeRequest",
           "InitializeResponse",
           "UsernameMetadata",
           "Statements",
           "NewUserRequest",
           "NewUserResponse",
           "UpdateUserRequest",
           "UpdateUserResponse",
           "DeleteUserRequest",
           "DeleteUserResponse",
           "RedisElastiCacheDB",
           "UserGroupAssociator",
           "new"]
