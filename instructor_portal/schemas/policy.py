"""Pydantic schemas for API Gateway authorizer responses."""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

POLICY_VERSION = "2012-10-17"


class PolicyStatement(BaseModel):
    """IAM policy statement."""

    model_config = ConfigDict(populate_by_name=True)

    action: Union[str, List[str]] = Field(alias="Action")
    effect: Literal["Allow", "Deny"] = Field(alias="Effect")
    resource: Union[str, List[str]] = Field(alias="Resource")


class PolicyDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(default=POLICY_VERSION, alias="Version")
    statement: List[PolicyStatement] = Field(alias="Statement")


class AuthorizerResponse(BaseModel):
    """Response returned to API Gateway by a REQUEST authorizer."""

    model_config = ConfigDict(populate_by_name=True)

    principal_id: str = Field(alias="principalId")
    policy_document: PolicyDocument = Field(alias="policyDocument")
    context: Optional[Dict[str, str]] = None

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
