"""
Attach managed policy ARNs to the IAM roles of a compiled CloudFormation template
"""

#########################
#   LIBRARIES & LOGGER
#########################

import logging
import re
import sys
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

LOGGER = logging.Logger("Attach-Managed-Policies", level=logging.INFO)
HANDLER = logging.StreamHandler(sys.stdout)
# Operator-facing: the two plugin lines are printed as they are
HANDLER.setFormatter(logging.Formatter("%(message)s"))
LOGGER.addHandler(HANDLER)


#########################
#       CONSTANTS
#########################

ROLE_RESOURCE_TYPE = "AWS::IAM::Role"
MANAGED_POLICY_ARNS_KEY = "ManagedPolicyArns"

POLICY_ARN_PATTERN = re.compile(r"arn:aws:iam::[0-9]+:policy/.+")

BEGIN_MESSAGE = "Begin Attach Managed Policies plugin..."
DONE_MESSAGE = "Attach Managed Policies plugin done."

PolicyArns = Union[str, Sequence[str], None]


class InvalidPolicyArnError(ValueError):
    def __init__(self, policy_arn: Any) -> None:
        super().__init__(f'"{policy_arn}" is not a valid policy ARN.')
        self.policy_arn = policy_arn


#########################
#        HELPER
#########################


def normalize_policy_arns(policy_arns: PolicyArns) -> List[str]:
    """A single ARN is accepted in place of a list of one."""
    if not policy_arns:
        return []
    if isinstance(policy_arns, str):
        return [policy_arns]
    return list(policy_arns)


def validate_policy_arn(policy_arn: Any) -> str:
    if not isinstance(policy_arn, str) or not POLICY_ARN_PATTERN.fullmatch(policy_arn):
        raise InvalidPolicyArnError(policy_arn)
    return policy_arn


def merge_policy_arns(policy_arns: Sequence[str], existing: Sequence[Any]) -> List[Any]:
    """
    Requested ARNs come first in the order given, followed by the existing
    entries that were not requested. Existing entries may be intrinsic
    functions (Fn::Join, Ref, ...) and are carried over as they are.
    """
    merged = []
    for policy_arn in policy_arns:
        if policy_arn not in merged:
            merged.append(policy_arn)
    merged.extend(entry for entry in existing if entry not in merged)
    return merged


#########################
#        ATTACH
#########################


def attach_managed_policies(
    policy_arns: PolicyArns,
    resources: Optional[Dict[str, Dict[str, Any]]],
    log: Optional[Callable[[str], Any]] = None,
) -> None:
    """
    Attach every policy ARN to every AWS::IAM::Role in `resources`, in place.

    Nothing happens (and nothing is logged) when either input is empty. An
    invalid ARN raises InvalidPolicyArnError; roles updated before the error
    keep their update.
    """
    policy_arns = normalize_policy_arns(policy_arns)
    if not policy_arns or not resources:
        return

    log = log or LOGGER.info
    log(BEGIN_MESSAGE)

    for resource in resources.values():
        if resource.get("Type") != ROLE_RESOURCE_TYPE:
            continue

        properties = resource.get("Properties") or {}
        resource["Properties"] = properties
        existing = properties.get(MANAGED_POLICY_ARNS_KEY) or []

        for policy_arn in policy_arns:
            validate_policy_arn(policy_arn)

        properties[MANAGED_POLICY_ARNS_KEY] = merge_policy_arns(policy_arns, existing)

    log(DONE_MESSAGE)
