"""
CloudFormation macro Lambda that attaches managed policies to every IAM role of a template
"""

#########################
#   LIBRARIES & LOGGER
#########################

import logging
import os
import sys

from attach_managed_policies.policies import InvalidPolicyArnError, attach_managed_policies

LOGGER = logging.Logger("Attach-Managed-Policies-Macro", level=os.environ.get("LOG_LEVEL", "INFO"))
HANDLER = logging.StreamHandler(sys.stdout)
HANDLER.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
LOGGER.addHandler(HANDLER)


#########################
#        HELPER
#########################


def default_policy_arns():
    # Comma separated, set by the macro construct from config.yml
    value = os.environ.get("MANAGED_POLICY_ARNS", "")
    return [arn.strip() for arn in value.split(",") if arn.strip()]


#########################
#        HANDLER
#########################


def lambda_handler(event, context):
    request_id = event["requestId"]
    fragment = event["fragment"]

    # Fn::Transform parameters win over the deployment defaults
    params = event.get("params") or {}
    policy_arns = params.get("ManagedPolicyArns") or default_policy_arns()

    LOGGER.debug(f"Request {request_id}: policies {policy_arns}")

    try:
        attach_managed_policies(policy_arns, fragment.get("Resources"), log=LOGGER.info)
    except InvalidPolicyArnError as e:
        LOGGER.error(str(e))
        return {
            "requestId": request_id,
            "status": "failure",
            "fragment": fragment,
            "errorMessage": str(e),
        }

    return {"requestId": request_id, "status": "success", "fragment": fragment}
