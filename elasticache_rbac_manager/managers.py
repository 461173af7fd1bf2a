# -*- coding: utf-8 -*-

import logging
import threading

from .access_string import parse_creation_commands
from .client import ElastiCacheClient
from .config import ElastiCacheConfig
from .database import Database, InitializeResponse, NewUserResponse, UpdateUserResponse, \
    DeleteUserResponse
from .exceptions import ConfigError, ElastiCacheManagerError, ErrorCode, RemoteError, \
    ReconciliationTimeoutError
from .identifiers import normalise_id
from .polling import wait_for
from .usernames import generate_username

"""
Manages ElastiCache for Redis RBAC users on behalf of a secrets host.

ElastiCache is eventually consistent. Creating or modifying a user or a user
group returns at once but the resource sits in "creating" or "modifying" for a
while and cannot be used, changed or deleted until it is "active" again. Every
change here therefore waits on the resource before touching it.

A replication group can only have one user group associated with it. All users
created for a cluster are placed into the user group the replication group has.
When it has none, a user group named after the cluster id is bootstrapped with
the mandatory "default" user and attached the first time a user is created.

    creating -> active -> deleting -> (gone)
"""

PLUGIN_TYPE = "redisElastiCache"
ACTIVE = "active"
DELETING = "deleting"
DEFAULT_USER = "default"

# discover or create of a cluster's user group must not interleave in one process
_cluster_locks = {}
_cluster_locks_lock = threading.Lock()


def _cluster_lock(cluster_id):
    with _cluster_locks_lock:
        if cluster_id not in _cluster_locks:
            _cluster_locks[cluster_id] = threading.Lock()
        return _cluster_locks[cluster_id]


def _await_active(poll, predicate, resource, identifier, action, cancel):
    """Polls predicate, raising if the resource is not active afterwards.

    The poller stops early on a remote error, so a failed poll is re-checked
    once: a RemoteError from that check is raised as is, otherwise the wait
    ran out and ReconciliationTimeoutError is raised.
    """
    if poll(predicate, f"{resource} {identifier}", cancel=cancel):
        return
    if predicate():
        return
    raise ReconciliationTimeoutError(resource, identifier, action=action)


class UserGroupAssociator:
    """Places new users into the single user group of a replication group.

    The replication group is asked which user group it has. If it has one the
    new user is added to it. If it has none the user group named after the
    cluster is attached, created first with the "default" user and the new
    user when it does not exist yet, or reused when an earlier attach failed.
    """

    def __init__(self, client, cluster_id, poll=wait_for):
        """
        Args:
            client (ElastiCacheClient): remote calls.
            cluster_id (str): replication group id, also the id of a bootstrapped user group.
            poll (callable): the poller, see polling.wait_for.
        """
        self._client = client
        self._cluster_id = cluster_id
        self._poll = poll

    @property
    def cluster_id(self):
        return self._cluster_id

    def group_is_active(self, user_group_id):
        groups = self._client.describe_user_groups(user_group_id)
        return len(groups) == 1 and groups[0].get("Status") == ACTIVE

    def wait_for_group(self, user_group_id, action, cancel=None, resource="user group"):
        _await_active(self._poll, lambda: self.group_is_active(user_group_id),
                      resource, user_group_id, action, cancel)

    def attached_user_groups(self):
        replication_groups = self._client.describe_replication_groups(self.cluster_id)
        if not replication_groups:
            raise RemoteError("describe_replication_groups", self.cluster_id,
                              ErrorCode.REPLICATION_GROUP_NOT_FOUND,
                              "replication group not found")
        return list(replication_groups[0].get("UserGroupIds") or [])

    def associate(self, user_id, cancel=None):
        """Adds user_id to the cluster's user group, creating and attaching it if needed.

        Raises:
            RemoteError: discovery or a change was rejected by ElastiCache.
            ReconciliationTimeoutError: the user group never turned active.
        """
        with _cluster_lock(self.cluster_id):
            attached = self.attached_user_groups()
            if attached:
                self._add_to_group(attached[0], user_id, cancel)
                return

            try:
                existing = self._client.describe_user_groups(self.cluster_id)
            except RemoteError as e:
                if e.code != ErrorCode.USER_GROUP_NOT_FOUND:
                    raise
                existing = []

            if existing:
                self._attach_existing_group(user_id, cancel)
            else:
                self._bootstrap_group(user_id, cancel)

    def _add_to_group(self, user_group_id, user_id, cancel):
        self.wait_for_group(user_group_id, f"update user group {user_group_id}", cancel)
        self._client.modify_user_group(user_group_id, [user_id])

    def _attach_existing_group(self, user_id, cancel):
        logging.getLogger(__name__).debug(
            f"User group {self.cluster_id} exists but is not attached to its cluster, attaching")
        self._add_to_group(self.cluster_id, user_id, cancel)
        self._attach(cancel)

    def _bootstrap_group(self, user_id, cancel):
        logging.getLogger(__name__).debug(
            f"Bootstrapping user group for cluster {self.cluster_id}")
        # user groups must contain a user named default
        self._client.create_user_group(self.cluster_id, [DEFAULT_USER, user_id])
        self._attach(cancel, resource="newly created user group")

    def _attach(self, cancel, resource="user group"):
        self.wait_for_group(self.cluster_id, f"update replication group {self.cluster_id}",
                            cancel, resource=resource)
        self._client.modify_replication_group(self.cluster_id, [self.cluster_id])


class RedisElastiCacheDB(Database):
    """Creates, rotates and revokes ElastiCache for Redis RBAC users.

    Usernames handed back to the host are generated as
    ``v_{display}_{role}_{random}_{epoch}``; the ElastiCache user id is always
    derived from the username with normalise_id so every later call can find
    the user again from the username alone.
    """

    def __init__(self, _client_factory=None, poll=wait_for):
        """
        Args:
            _client_factory (callable, optional): no argument callable returning a
                boto3 elasticache client. Defaults to building one from config.
            poll (callable, optional): the poller, see polling.wait_for.
        """
        self._client_factory = _client_factory
        self._poll = poll
        self._config = None
        self._client = None

    @property
    def config(self):
        return self._config

    @property
    def client(self):
        if self._client is None:
            raise ConfigError("Plugin has not been initialized")
        return self._client

    @property
    def associator(self):
        return UserGroupAssociator(self.client, self.config.cluster_id, poll=self._poll)

    def type(self):
        return PLUGIN_TYPE

    def initialize(self, req, cancel=None):
        logging.getLogger(__name__).debug("Initializing AWS ElastiCache Redis client")

        config = ElastiCacheConfig.from_dict(req.config)
        client = ElastiCacheClient(config, _client_factory=self._client_factory)

        if req.verify_connection:
            logging.getLogger(__name__).debug(f"Verifying connection to instance {config.url}")
            try:
                client.describe_users()
            except RemoteError as e:
                raise ConfigError(
                    f"unable to connect to ElastiCache Redis endpoint: {e}") from e

        self._config = config
        self._client = client
        return InitializeResponse(config=req.config)

    def user_is_active(self, user_id):
        users = self.client.describe_users(user_id)
        return len(users) == 1 and users[0].get("Status") == ACTIVE

    def wait_for_user(self, user_id, action, cancel=None):
        _await_active(self._poll, lambda: self.user_is_active(user_id),
                      "user", user_id, action, cancel)

    def new_user(self, req, cancel=None):
        logging.getLogger(__name__).debug(
            f"Creating new AWS ElastiCache Redis user for role {req.username_config.role_name}")

        # checked before anything is created
        client = self.client
        access_string = parse_creation_commands(req.statements.commands)

        username = generate_username(req.username_config.display_name,
                                     req.username_config.role_name)
        user_id = normalise_id(username)

        output = client.create_user(user_id, username, access_string, [req.password])

        try:
            self.wait_for_user(user_id, f"add user {user_id} to user group", cancel)
            self.associator.associate(user_id, cancel)
        except ElastiCacheManagerError:
            logging.getLogger(__name__).debug(
                f"Error while configuring newly created user {user_id}, attempting to clean up")
            self._remove_user(user_id)
            raise

        return NewUserResponse(username=output.get("UserName", username))

    def _remove_user(self, user_id):
        # best effort, the caller gets the original error
        try:
            self._delete(user_id, cancel=None)
        except ElastiCacheManagerError:
            logging.getLogger(__name__).warning(
                f"Unable to clean up newly created user {user_id}", exc_info=True)

    def update_user(self, req, cancel=None):
        logging.getLogger(__name__).debug(f"Updating AWS ElastiCache Redis user {req.username}")

        if req.new_password is None:
            return UpdateUserResponse()

        user_id = normalise_id(req.username)
        self.wait_for_user(user_id, f"update user {user_id}", cancel)

        self.client.modify_user(user_id, [req.new_password])
        return UpdateUserResponse()

    def delete_user(self, req, cancel=None):
        logging.getLogger(__name__).debug(f"Deleting AWS ElastiCache Redis user {req.username}")
        self._delete(normalise_id(req.username), cancel)
        return DeleteUserResponse()

    def _delete(self, user_id, cancel):
        try:
            users = self.client.describe_users(user_id)
        except RemoteError as e:
            if e.code != ErrorCode.USER_NOT_FOUND:
                raise
            users = []

        if not users or (len(users) == 1 and users[0].get("Status") == DELETING):
            logging.getLogger(__name__).debug(
                f"User {user_id} does not exist or is being deleted, considering deletion successful")
            return

        self.wait_for_user(user_id, f"delete user {user_id}", cancel)

        self.client.delete_user(user_id)


def new(_client_factory=None):
    """Returns an uninitialized plugin instance."""
    return RedisElastiCacheDB(_client_factory=_client_factory)
