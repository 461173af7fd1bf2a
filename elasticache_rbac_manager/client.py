# -*- coding: utf-8 -*-
"""Thin boundary over the boto3 ElastiCache client.

Every botocore failure is converted to a RemoteError with a normalised
ErrorCode here so nothing above this module inspects botocore types.
"""

import threading

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import ErrorCode, RemoteError

ENGINE = "Redis"


class ElastiCacheClient:
    """ElastiCache control plane calls used to manage RBAC users and user groups.

    A boto3 client is built lazily per thread from one immutable config.
    """

    def __init__(self, config, _client_factory=None):
        """
        :type config: elasticache_rbac_manager.config.ElastiCacheConfig
        :param config: credentials and region to connect with

        :type _client_factory: callable
        :param _client_factory: optional no argument callable returning a boto3
            elasticache client, defaults to building one from config
        """
        self._config = config
        self._client_factory = _client_factory
        self.ns = threading.local()

    @property
    def config(self):
        return self._config

    @property
    def _client(self):
        if not hasattr(self.ns, "client"):
            if self._client_factory is not None:
                self.ns.client = self._client_factory()
            else:
                self.ns.client = self._build_client()
        return self.ns.client

    def _build_client(self):
        kwargs = {"region_name": self.config.region}
        if self.config.has_static_credentials:
            kwargs["aws_access_key_id"] = self.config.access_key_id
            kwargs["aws_secret_access_key"] = self.config.secret_access_key
        session = boto3.Session(**kwargs)
        return session.client("elasticache")

    def _call(self, operation, identifier, **kwargs):
        try:
            return getattr(self._client, operation)(**kwargs)
        except ClientError as e:
            code = ErrorCode.from_aws(e.response.get("Error", {}).get("Code"))
            raise RemoteError(operation, identifier, code, e) from e
        except BotoCoreError as e:
            raise RemoteError(operation, identifier, ErrorCode.OTHER, e) from e

    def describe_users(self, user_id=None):
        if user_id is None:
            return self._call("describe_users", "*").get("Users", [])
        return self._call("describe_users", user_id, UserId=user_id).get("Users", [])

    def create_user(self, user_id, user_name, access_string, passwords):
        return self._call(
            "create_user",
            user_id,
            UserId=user_id,
            UserName=user_name,
            Engine=ENGINE,
            Passwords=list(passwords),
            AccessString=access_string,
            NoPasswordRequired=False,
            Tags=[],
        )

    def modify_user(self, user_id, passwords):
        return self._call("modify_user", user_id, UserId=user_id, Passwords=list(passwords))

    def delete_user(self, user_id):
        return self._call("delete_user", user_id, UserId=user_id)

    def describe_user_groups(self, user_group_id):
        return self._call(
            "describe_user_groups", user_group_id, UserGroupId=user_group_id
        ).get("UserGroups", [])

    def create_user_group(self, user_group_id, user_ids):
        return self._call(
            "create_user_group",
            user_group_id,
            UserGroupId=user_group_id,
            Engine=ENGINE,
            UserIds=list(user_ids),
            Tags=[],
        )

    def modify_user_group(self, user_group_id, user_ids_to_add):
        return self._call(
            "modify_user_group",
            user_group_id,
            UserGroupId=user_group_id,
            UserIdsToAdd=list(user_ids_to_add),
        )

    def describe_replication_groups(self, replication_group_id):
        return self._call(
            "describe_replication_groups",
            replication_group_id,
            ReplicationGroupId=replication_group_id,
        ).get("ReplicationGroups", [])

    def modify_replication_group(self, replication_group_id, user_group_ids_to_add):
        return self._call(
            "modify_replication_group",
            replication_group_id,
            ReplicationGroupId=replication_group_id,
            UserGroupIdsToAdd=list(user_group_ids_to_add),
        )
