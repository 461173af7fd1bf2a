# -*- coding: utf-8 -*-
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

"""
Lifecycle contract between a secrets host and a database plugin.

The host initializes the plugin once with its configuration and then asks it
to create, rotate and revoke short lived users. Requests and responses are
plain dataclasses so hosts can build them from whatever transport they use.
"""


@dataclass
class InitializeRequest:
    config: dict
    verify_connection: bool = False


@dataclass
class InitializeResponse:
    config: dict


@dataclass
class UsernameMetadata:
    display_name: str = ""
    role_name: str = ""


@dataclass
class Statements:
    commands: List[str] = field(default_factory=list)


@dataclass
class NewUserRequest:
    username_config: UsernameMetadata
    password: str
    statements: Statements = field(default_factory=Statements)


@dataclass
class NewUserResponse:
    username: str


@dataclass
class UpdateUserRequest:
    username: str
    new_password: Optional[str] = None


@dataclass
class UpdateUserResponse:
    pass


@dataclass
class DeleteUserRequest:
    username: str


@dataclass
class DeleteUserResponse:
    pass


class Database(ABC):
    """Interface a secrets host drives to manage users of a database.

    Every lifecycle method takes an optional ``cancel`` threading.Event. Long
    waits on the remote service stop with PollCancelled once it is set.
    """

    @abstractmethod
    def initialize(self, req, cancel=None):
        """Binds configuration and optionally verifies the connection.

        Args:
            req (InitializeRequest): configuration from the host.

        Returns:
            InitializeResponse: the configuration to persist.
        """

    @abstractmethod
    def new_user(self, req, cancel=None):
        """Creates a user and returns its username."""

    @abstractmethod
    def update_user(self, req, cancel=None):
        """Changes the password of an existing user."""

    @abstractmethod
    def delete_user(self, req, cancel=None):
        """Revokes a user, succeeding when it is already gone."""

    @abstractmethod
    def type(self):
        """Name the host registers the plugin under."""

    def close(self):
        return None
