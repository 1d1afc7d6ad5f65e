from attach_managed_policies.plugin import BEFORE_DEPLOY_HOOK, AttachManagedPoliciesPlugin
from attach_managed_policies.policies import (
    BEGIN_MESSAGE,
    DONE_MESSAGE,
    MANAGED_POLICY_ARNS_KEY,
    ROLE_RESOURCE_TYPE,
    InvalidPolicyArnError,
    attach_managed_policies,
    merge_policy_arns,
    normalize_policy_arns,
    validate_policy_arn,
)
