import os
import aws_cdk as cdk
from aws_cdk import Aspects
from cdk_nag import NagSuppressions, AwsSolutionsChecks
from pathlib import Path

from infra.attach_managed_policies_stack import AttachManagedPoliciesStack

import yaml
from yaml.loader import SafeLoader

with open(os.path.join(Path(__file__).parent, "config.yml"), "r") as ymlfile:
    stack_config = yaml.load(ymlfile, Loader=SafeLoader)

app = cdk.App()
env = cdk.Environment(account=os.getenv("CDK_DEFAULT_ACCOUNT"), region=os.getenv("CDK_DEFAULT_REGION"))
stack = AttachManagedPoliciesStack(scope=app, stack_name=stack_config["stack_name"], config=stack_config, env=env)

# Apply CDK-nag (un-comment to view CDK nag outputs and modify accordingly)
# Aspects.of(app).add(AwsSolutionsChecks())

NagSuppressions.add_stack_suppressions(
    stack,
    [
        {
            "id": "AwsSolutions-L1",
            "reason": "Macro runtime is pinned in config.yml",
        },
    ],
)

app.synth()
