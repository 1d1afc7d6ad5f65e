import shutil

import pytest

from conftest import POLICY_ARN_0, POLICY_ARN_1

# aws-cdk-lib runs on a node runtime through jsii
pytestmark = pytest.mark.skipif(shutil.which("node") is None, reason="node runtime not available")


def make_config(**overrides):
    config = {
        "stack_name": "attach-managed-policies-test",
        "macro": {"name": "AttachManagedPoliciesTest", "log_level": "DEBUG"},
        "managed_policy_arns": [POLICY_ARN_0, POLICY_ARN_1],
        "lambda": {"architecture": "ARM_64", "python_runtime": "PYTHON_3_11"},
    }
    config.update(overrides)
    return config


def synth(config):
    import aws_cdk as cdk
    from aws_cdk.assertions import Template

    from infra.attach_managed_policies_stack import AttachManagedPoliciesStack

    app = cdk.App()
    stack = AttachManagedPoliciesStack(scope=app, stack_name=config["stack_name"], config=config)
    return Template.from_stack(stack)


def test_macro_resource():
    template = synth(make_config())

    template.resource_count_is("AWS::CloudFormation::Macro", 1)
    template.has_resource_properties(
        "AWS::CloudFormation::Macro",
        {"Name": "AttachManagedPoliciesTest"},
    )


def test_macro_lambda_environment():
    template = synth(make_config())

    template.has_resource_properties(
        "AWS::Lambda::Function",
        {
            "Handler": "attach_managed_policies.macro.lambda_handler",
            "Runtime": "python3.11",
            "Architectures": ["arm64"],
            "Environment": {
                "Variables": {
                    "MANAGED_POLICY_ARNS": f"{POLICY_ARN_0},{POLICY_ARN_1}",
                    "LOG_LEVEL": "DEBUG",
                }
            },
        },
    )


def test_single_configured_policy_arn():
    template = synth(make_config(managed_policy_arns=POLICY_ARN_0))

    template.has_resource_properties(
        "AWS::Lambda::Function",
        {"Environment": {"Variables": {"MANAGED_POLICY_ARNS": POLICY_ARN_0, "LOG_LEVEL": "DEBUG"}}},
    )


def test_invalid_configured_policy_arn():
    from attach_managed_policies import InvalidPolicyArnError

    with pytest.raises(InvalidPolicyArnError):
        synth(make_config(managed_policy_arns=["not-valid-policy-ARN"]))


def test_unknown_architecture():
    with pytest.raises(RuntimeError, match="ARM_64, X86_64"):
        synth(make_config(**{"lambda": {"architecture": "RISCV", "python_runtime": "PYTHON_3_11"}}))


def test_unknown_runtime():
    with pytest.raises(RuntimeError, match="PYTHON_3_9"):
        synth(make_config(**{"lambda": {"architecture": "X86_64", "python_runtime": "PYTHON_2_7"}}))
