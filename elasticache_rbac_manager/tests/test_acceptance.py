# -*- coding: utf-8 -*-
"""
Acceptance tests against a real ElastiCache for Redis cluster.

Set ACC_TEST_ENABLED and the TEST_ELASTICACHE_* variables to run these, they create and
delete real users and can take several minutes.

"""
import logging
import os
import unittest
from time import sleep

from elasticache_rbac_manager import *

PASSWORD = "abcdefghijklmnopqrstuvwxyz"


def setup_module():
    logging.basicConfig(level=logging.DEBUG)


def environment_config():
    return {"access_key_id": os.environ.get("TEST_ELASTICACHE_ACCESS_KEY_ID"),
            "secret_access_key": os.environ.get("TEST_ELASTICACHE_SECRET_ACCESS_KEY"),
            "url": os.environ.get("TEST_ELASTICACHE_URL"),
            "region": os.environ.get("TEST_ELASTICACHE_REGION")}


@unittest.skipUnless("ACC_TEST_ENABLED" in os.environ, "ACC_TEST_ENABLED is not set")
class TestAcceptance(unittest.TestCase):
    def setUp(self):
        self.config = environment_config()
        self.db = new()
        self.db.initialize(InitializeRequest(config=self.config, verify_connection=True))
        self.usernames = []

    def tearDown(self):
        # users still creating or modifying cannot be deleted until they are active again
        for username in self.usernames:
            for _ in range(20):
                try:
                    self.db.delete_user(DeleteUserRequest(username=username))
                    break
                except ElastiCacheManagerError as e:
                    logging.getLogger(__name__).info(
                        f"Unable to clean test user {username} due to {e}, retrying")
                sleep(3.0)

    def new_user(self, commands):
        response = self.db.new_user(NewUserRequest(
            username_config=UsernameMetadata(display_name="display", role_name="role"),
            statements=Statements(commands=commands),
            password=PASSWORD))
        self.usernames.append(response.username)
        return response.username

    def test_initialize_with_deprecated_keys(self):
        config = {"username": self.config["access_key_id"],
                  "password": self.config["secret_access_key"],
                  "url": self.config["url"],
                  "region": self.config["region"]}
        response = new().initialize(InitializeRequest(config=config, verify_connection=True))
        self.assertEqual(response.config, config)

    def test_initialize_invalid(self):
        with self.assertRaises(ConfigError):
            new().initialize(InitializeRequest(config={"access_key_id": "wrong",
                                                       "secret_access_key": "wrong",
                                                       "url": "wrong",
                                                       "region": "us-east-1"},
                                               verify_connection=True))

    def test_user_lifecycle(self):
        username = self.new_user(['["~test*", "-@all", "+@read"]'])
        self.assertTrue(username.startswith("v_displ_role_"))

        self.db.update_user(UpdateUserRequest(username=username, new_password=PASSWORD + "1"))
        with self.assertRaises(RemoteError):
            self.db.update_user(UpdateUserRequest(username=username, new_password="too short"))

        self.db.delete_user(DeleteUserRequest(username=username))
        self.db.delete_user(DeleteUserRequest(username=username))

    def test_delete_missing_user(self):
        self.db.delete_user(DeleteUserRequest(username="I do not exist"))

    def test_forbidden_user(self):
        with self.assertRaises(ForbiddenAccessString):
            self.new_user(['["~test*", "off"]', '["+@read"]'])


if __name__ == '__main__':
    unittest.main()
