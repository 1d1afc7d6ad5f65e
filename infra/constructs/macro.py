"""
Attach Managed Policies macro constructs
"""

import os
from typing import List

from aws_cdk import Duration
from aws_cdk import aws_cloudformation as cfn
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as _lambda
from cdk_nag import NagSuppressions
from constructs import Construct

from attach_managed_policies.policies import normalize_policy_arns, validate_policy_arn

MACRO_TIMEOUT = 60

DIRNAME = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(DIRNAME, "..", ".."))

# Everything in the repository root that is not the attach_managed_policies package
ASSET_EXCLUDES = [
    "cdk.out",
    "cdk.json",
    ".git",
    ".venv",
    ".pytest_cache",
    "**/__pycache__",
    "infra",
    "tests",
    "app.py",
    "config.yml",
    "*.md",
    "*.txt",
    "*.toml",
    "*.egg-info",
]


class AttachManagedPoliciesMacroConstruct(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        stack_name: str,
        macro_name: str,
        managed_policy_arns,
        architecture: str,
        python_runtime: str,
        log_level: str = "INFO",
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.macro_name = macro_name
        self.log_level = log_level
        # Fail the synth rather than every template the macro transforms
        self.managed_policy_arns: List[str] = [
            validate_policy_arn(arn) for arn in normalize_policy_arns(managed_policy_arns)
        ]

        ## **************** Set Architecture and Python Runtime ****************
        if architecture == "ARM_64":
            self._architecture = _lambda.Architecture.ARM_64
        elif architecture == "X86_64":
            self._architecture = _lambda.Architecture.X86_64
        else:
            raise RuntimeError("Select one option for system architecture among [ARM_64, X86_64]")

        if python_runtime == "PYTHON_3_9":
            self._runtime = _lambda.Runtime.PYTHON_3_9
        elif python_runtime == "PYTHON_3_10":
            self._runtime = _lambda.Runtime.PYTHON_3_10
        elif python_runtime == "PYTHON_3_11":
            self._runtime = _lambda.Runtime.PYTHON_3_11
        elif python_runtime == "PYTHON_3_12":
            self._runtime = _lambda.Runtime.PYTHON_3_12
        else:
            raise RuntimeError("Select a Python version >= PYTHON_3_9")

        ## **************** Create resources ****************

        self.create_roles(stack_name)
        self.create_lambda_functions(stack_name)
        self.create_macro()

    ## **************** Lambda Functions ****************
    def create_lambda_functions(self, stack_name):
        self.macro_lambda = _lambda.Function(
            self,
            f"{stack_name}-macro-lambda",
            runtime=self._runtime,
            code=_lambda.Code.from_asset(PROJECT_ROOT, exclude=ASSET_EXCLUDES),
            handler="attach_managed_policies.macro.lambda_handler",
            architecture=self._architecture,
            function_name=f"{stack_name}-macro",
            memory_size=128,
            timeout=Duration.seconds(MACRO_TIMEOUT),
            environment={
                "MANAGED_POLICY_ARNS": ",".join(self.managed_policy_arns),
                "LOG_LEVEL": self.log_level,
            },
            role=self.macro_role,
        )

    ## **************** IAM Permissions ****************
    def create_roles(self, stack_name: str):
        self.macro_role = iam.Role(
            self,
            f"{stack_name}-macro-role",
            role_name=f"{stack_name}-macro-role",
            assumed_by=iam.CompositePrincipal(
                iam.ServicePrincipal("lambda.amazonaws.com"),
            ),
        )
        self.macro_role.add_managed_policy(
            iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AWSLambdaBasicExecutionRole")
        )

        NagSuppressions.add_resource_suppressions(
            self.macro_role,
            [{"id": "AwsSolutions-IAM4", "reason": "Macro Lambda only needs the basic execution role"}],
        )

    ## **************** Macro ****************
    def create_macro(self):
        self.macro = cfn.CfnMacro(
            self,
            "macro",
            name=self.macro_name,
            function_name=self.macro_lambda.function_arn,
            description="Attaches managed policies to every AWS::IAM::Role of the template",
        )
