"""
Deployment framework plugin that attaches managed policies before deploy
"""

from typing import Any, Callable, Dict, Optional

from attach_managed_policies.policies import attach_managed_policies

BEFORE_DEPLOY_HOOK = "before:deploy:deploy"


class AttachManagedPoliciesPlugin:
    """
    The host builds the plugin with its deployment context and calls the
    handler registered in `hooks` once, right before the stack is deployed.

    `serverless` is read as:

        {"service": {"provider": {
            "managedPolicyArns": <ARN or list of ARNs>,
            "compiledCloudFormationTemplate": {"Resources": {...}},
        }}}

    `options` are the host's command line options. They are accepted so the
    host can build every plugin the same way; this plugin has none.
    """

    def __init__(
        self,
        serverless: Dict[str, Any],
        options: Optional[Dict[str, Any]] = None,
        log: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.serverless = serverless
        self.options = options or {}
        self.log = log

        self.hooks = {
            BEFORE_DEPLOY_HOOK: self.attach_managed_policy,
        }

    @property
    def provider(self) -> Dict[str, Any]:
        service = (self.serverless or {}).get("service") or {}
        return service.get("provider") or {}

    def attach_managed_policy(self) -> None:
        template = self.provider.get("compiledCloudFormationTemplate") or {}
        attach_managed_policies(
            self.provider.get("managedPolicyArns"),
            template.get("Resources"),
            log=self.log,
        )
