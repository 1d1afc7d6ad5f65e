import copy

import pytest

POLICY_ARN_0 = "arn:aws:iam::789763425617:policy/someteam/MyManagedPolicy-3QUG1777293EJ"
POLICY_ARN_1 = "arn:aws:iam::789763425617:policy/someteam/AnotherManagedPolicy-F6NZ1321293EJ"

ONE_ROLE = {
    "MyRole": {
        "Type": "AWS::IAM::Role",
        "Properties": {
            "RoleName": "MyRole",
        },
    },
}

THREE_ROLES = {
    "MyRole0": {"Type": "AWS::IAM::Role", "Properties": {"RoleName": "MyRole0"}},
    "MyRole1": {"Type": "AWS::IAM::Role", "Properties": {"RoleName": "MyRole1"}},
    "MyRole2": {"Type": "AWS::IAM::Role", "Properties": {"RoleName": "MyRole2"}},
}


@pytest.fixture
def one_role():
    return copy.deepcopy(ONE_ROLE)


@pytest.fixture
def three_roles():
    return copy.deepcopy(THREE_ROLES)


@pytest.fixture
def log_lines():
    return []
