# -*- coding: utf-8 -*-
import enum


class ElastiCacheManagerError(Exception):
    """Base Error class."""


class ConfigError(ElastiCacheManagerError):
    """Plugin configuration is missing, malformed or the endpoint is unreachable."""


class AccessStringError(ElastiCacheManagerError):
    """Base Error class for creation statements that cannot become an access string."""


class MalformedAccessString(AccessStringError):
    CUSTOM_ERROR_MESSAGE = "Creation statement {!r} is not a JSON array of strings: {}"

    def __init__(self, command, error):
        super(MalformedAccessString, self).__init__(self.CUSTOM_ERROR_MESSAGE.format(command,
                                                                                      str(error)))
        self._command = command
        self._error = error

    @property
    def command(self):
        return self._command

    @property
    def error(self):
        return self._error


class ForbiddenAccessString(AccessStringError):
    CUSTOM_ERROR_MESSAGE = "creation of disabled or 'off' users is forbidden"

    def __init__(self):
        super(ForbiddenAccessString, self).__init__(self.CUSTOM_ERROR_MESSAGE)


class ErrorCode(enum.Enum):
    USER_NOT_FOUND = "UserNotFound"
    USER_GROUP_NOT_FOUND = "UserGroupNotFound"
    REPLICATION_GROUP_NOT_FOUND = "ReplicationGroupNotFound"
    USER_GROUP_ALREADY_EXISTS = "UserGroupAlreadyExists"
    OTHER = "Other"

    @classmethod
    def from_aws(cls, code):
        """Maps an AWS error code (with or without the ``Fault`` suffix) onto a member."""
        if not code:
            return cls.OTHER
        if code.endswith("Fault"):
            code = code[:-len("Fault")]
        for member in cls:
            if member.value == code:
                return member
        return cls.OTHER


class RemoteError(ElastiCacheManagerError):
    CUSTOM_ERROR_MESSAGE = "ElastiCache {} failed for {}: {}"

    def __init__(self, operation, identifier, code, error):
        super(RemoteError, self).__init__(self.CUSTOM_ERROR_MESSAGE.format(operation,
                                                                           identifier,
                                                                           str(error)))
        self._operation = operation
        self._identifier = identifier
        self._code = code
        self._error = error

    @property
    def operation(self):
        return self._operation

    @property
    def identifier(self):
        return self._identifier

    @property
    def code(self):
        return self._code

    @property
    def error(self):
        return self._error


class ReconciliationTimeoutError(ElastiCacheManagerError):
    CUSTOM_ERROR_MESSAGE = "{} {} never turned active"

    def __init__(self, resource, identifier, action=None):
        message = self.CUSTOM_ERROR_MESSAGE.format(resource, identifier)
        if action:
            message = f"unable to {action}, {message}"
        super(ReconciliationTimeoutError, self).__init__(message)
        self._resource = resource
        self._identifier = identifier

    @property
    def resource(self):
        return self._resource

    @property
    def identifier(self):
        return self._identifier


class PollCancelled(ElastiCacheManagerError):
    CUSTOM_ERROR_MESSAGE = "Cancelled while waiting for {}"

    def __init__(self, identifier):
        super(PollCancelled, self).__init__(self.CUSTOM_ERROR_MESSAGE.format(identifier))
        self._identifier = identifier

    @property
    def identifier(self):
        return self._identifier
