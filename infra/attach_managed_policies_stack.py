"""
Attach Managed Policies Stack
"""

from typing import Any, Dict

from aws_cdk import CfnOutput as output
from aws_cdk import Stack, Tags
from constructs import Construct

from infra.constructs.macro import AttachManagedPoliciesMacroConstruct


class AttachManagedPoliciesStack(Stack):
    """
    Deploys the CloudFormation macro that attaches the configured managed
    policies to every IAM role of the templates that use it as a Transform
    """

    def __init__(self, scope: Construct, stack_name: str, config: Dict[str, Any], **kwargs) -> None:
        super().__init__(scope, stack_name, **kwargs)

        macro_config = config.get("macro", {})

        ## ********** Macro Constructs ***********
        self.macro_constructs = AttachManagedPoliciesMacroConstruct(
            self,
            f"{stack_name}-MACRO",
            stack_name=stack_name,
            macro_name=macro_config.get("name", "AttachManagedPolicies"),
            managed_policy_arns=config.get("managed_policy_arns"),
            architecture=config["lambda"]["architecture"],
            python_runtime=config["lambda"]["python_runtime"],
            log_level=macro_config.get("log_level", "INFO"),
        )

        output(
            self,
            id="MacroNameOutput",
            description="Name to use in the Transform section of a template",
            value=self.macro_constructs.macro_name,
        )
        output(
            self,
            id="MacroFunctionArnOutput",
            description="Macro Lambda ARN",
            value=self.macro_constructs.macro_lambda.function_arn,
        )

        ## **************** Tags ****************
        Tags.of(self).add("StackName", stack_name)
