"""Test building the configured layer stacks."""

from pathlib import Path

from aws_cdk.assertions import Template

from layer_manager.utils.stackbuilder import build_layers


def test_build_layers(app, env, layer_code_dir):
    """Ensure one stack is created per configured layer."""
    layer_dir = Path(layer_code_dir)
    account_config = {
        "account_name": "dev",
        "layers": {
            "SharedLayer": {
                "code_directory": layer_dir.name,
                "bundle": False,
                "shared_accounts": ["123456789012"],
            },
            "ArmLayer": {
                "code_directory": layer_dir.name,
                "bundle": False,
                "architectures": ["arm64"],
            },
        },
    }

    stacks = build_layers(
        app, env=env, account_config=account_config, base_dir=layer_dir.parent
    )

    assert sorted(stacks) == ["ArmLayer", "SharedLayer"]
    shared = Template.from_stack(stacks["SharedLayer"])
    shared.resource_count_is("AWS::Lambda::LayerVersion", 1)
    shared.resource_count_is("AWS::Lambda::LayerVersionPermission", 1)
    arm = Template.from_stack(stacks["ArmLayer"])
    arm.has_resource_properties(
        "AWS::Lambda::LayerVersion",
        {"CompatibleArchitectures": ["arm64"]},
    )
