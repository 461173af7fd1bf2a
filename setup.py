# -*- coding: utf-8 -*-
"""elasticache-rbac-manager a module for managing short lived ElastiCache for Redis RBAC users.

This module creates, rotates and revokes ElastiCache for Redis users on behalf of a secrets
host, waiting out the eventually consistent ElastiCache control plane and keeping every user of
a cluster in the single user group a replication group allows.

"""

import setuptools
import re
from io import open

VERSIONFILE="elasticache_rbac_manager/_version.py"
verstrline = open(VERSIONFILE, "rt").read()
VSRE = r"^__version__ = ['\"]([^'\"]*)['\"]"
mo = re.search(VSRE, verstrline, re.M)
if mo:
    verstr = mo.group(1)
else:
    raise RuntimeError("Unable to find version string in %s." % (VERSIONFILE,))

with open("README.md", "r", encoding='utf-8') as fh:
    long_description = fh.read()

setuptools.setup(
    name='elasticache_rbac_manager',
    version=verstr,
    author="Mike Moore",
    author_email="z_z_zebra@yahoo.com",
    description="Issue, rotate and revoke short lived ElastiCache for Redis RBAC users keeping one user group per replication group",
    long_description_content_type="text/markdown",
    long_description=long_description,
    url="https://github.com/Mikemoore63/elasticache-rbac-manager",
    packages=setuptools.find_packages(exclude=["*.tests", "*.tests.*"]),
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    license="MIT",
    scripts=[],
    python_requires=">=3.7",
    install_requires=[
        "boto3>=1.26,<2.0",
        "botocore>=1.29,<2.0",
    ],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

)
