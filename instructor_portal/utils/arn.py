"""Helpers for API Gateway ARNs."""

from typing import Any

from botocore.utils import ArnParser, InvalidArnException

STAGE_MARKERS = ("prod", "stage")


def _parse_arn(arn: str) -> dict[str, str]:
    if not isinstance(arn, str) or not arn.startswith("arn:"):
        raise ValueError("Invalid ARN")
    try:
        return ArnParser().parse_arn(arn)
    except InvalidArnException as exc:
        raise ValueError("Invalid ARN") from exc


def extract_arn_path(arn: str) -> dict[str, Any]:
    """Split an execute-api ARN into region, account, api id and stage.

    The stage is the first resource path part that mentions ``prod`` or
    ``stage``; the remaining parts are joined into ``resourceRemainder``.
    """
    parsed = _parse_arn(arn)
    api_id, *resource_path_parts = parsed["resource"].split("/")
    stage = next(
        (
            part
            for part in resource_path_parts
            if any(marker in part.lower() for marker in STAGE_MARKERS)
        ),
        None,
    )
    remainder_parts = (
        [part for part in resource_path_parts if part != stage]
        if stage
        else resource_path_parts
    )
    return {
        "service": parsed["service"],
        "region": parsed["region"],
        "accountId": parsed["account"],
        "apiId": api_id,
        "stage": stage,
        "resourceRemainder": "/".join(remainder_parts),
    }


def api_stage(arn: str) -> str:
    """Return the deployment stage of an execute-api method ARN.

    API Gateway puts the stage directly after the api id, whatever the
    stage is called.
    """
    _, _, path = _parse_arn(arn)["resource"].partition("/")
    stage = path.split("/", 1)[0]
    if not stage or stage == "*":
        raise ValueError(f"No stage in method ARN: {arn}")
    return stage
