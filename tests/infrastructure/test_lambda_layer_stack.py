"""Test the lambda layer stack."""

import pytest
from aws_cdk.assertions import Template

from layer_manager.stacks.lambda_layer_stack import LambdaLayerStack


@pytest.fixture()
def layer_stack(app, env, layer_code_dir):
    """Return a shared layer stack."""
    return LambdaLayerStack(
        app,
        "SharedLayer",
        layer_code_directory=layer_code_dir,
        shared_accounts=["123456789012"],
        organization_id="o-123456",
        bundle=False,
        env=env,
    )


@pytest.fixture()
def template(layer_stack):
    """Return the template of the shared layer stack."""
    return Template.from_stack(layer_stack)


def test_layer_resource_count(template):
    """Ensure the stack holds one layer and its permissions."""
    template.resource_count_is("AWS::Lambda::LayerVersion", 1)
    template.resource_count_is("AWS::Lambda::LayerVersionPermission", 2)


def test_layer_permissions(layer_stack, template):
    """Ensure the layer is shared with the account and the organization."""
    layer_arn = layer_stack.resolve(layer_stack.layer.layer_version_arn)
    template.has_resource_properties(
        "AWS::Lambda::LayerVersionPermission",
        {"LayerVersionArn": layer_arn, "Principal": "123456789012"},
    )
    template.has_resource_properties(
        "AWS::Lambda::LayerVersionPermission",
        {
            "LayerVersionArn": layer_arn,
            "Principal": "*",
            "OrganizationId": "o-123456",
        },
    )


def test_layer_arn_output(layer_stack, template):
    """Ensure the layer ARN is exported under the stack id."""
    template.has_output(
        "*",
        {
            "Value": layer_stack.resolve(layer_stack.layer.layer_version_arn),
            "Export": {"Name": "SharedLayer"},
        },
    )


def test_unshared_layer(app, env, layer_code_dir):
    """Ensure no permissions are created without sharing configuration."""
    stack = LambdaLayerStack(
        app,
        "PrivateLayer",
        layer_code_directory=layer_code_dir,
        bundle=False,
        env=env,
    )

    template = Template.from_stack(stack)
    template.resource_count_is("AWS::Lambda::LayerVersionPermission", 0)
