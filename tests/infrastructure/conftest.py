"""Setup items for the infrastructure tests."""

from pathlib import Path

import pytest
from aws_cdk import App, Environment, Stack, aws_lambda, aws_s3


@pytest.fixture()
def account():
    """Set the account number to test with."""
    return "1234567890"


@pytest.fixture()
def region():
    """Set the region to test with."""
    return "us-east-1"


@pytest.fixture()
def env(account, region):
    """Set the environment to test with."""
    return Environment(account=account, region=region)


@pytest.fixture()
def app():
    """Return the app to test with."""
    return App()


@pytest.fixture()
def stack(app, env):
    """Return the stack to test with."""
    return Stack(app, "TestStack", env=env)


@pytest.fixture()
def code():
    """Return a lambda code object."""
    return aws_lambda.Code.from_inline("def handler(event, context):\n    pass")


@pytest.fixture()
def bucket(stack):
    """Return a bucket holding layer code."""
    return aws_s3.Bucket(stack, "Bucket")


@pytest.fixture()
def bucket_code(bucket):
    """Return layer code stored under a key of the test bucket."""
    return aws_lambda.Code.from_bucket(bucket, "ObjectKey")


@pytest.fixture()
def layer_code_dir():
    """Return the directory holding the test layer contents."""
    return str((Path(__file__).parent / "layer-code").resolve())
