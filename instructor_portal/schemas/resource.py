"""Pydantic schemas for JSON:API documents produced by the portal."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel


class JSONAPIResourceObject(BaseModel):
    """Resource object with attributes and inline relationships."""

    type: str
    id: Any
    attributes: Dict[str, Any]
    relationships: Optional[Dict[str, "JSONAPIDocument"]] = None


class JSONAPIDocument(BaseModel):
    """Top-level or relationship JSON:API document."""

    data: Union[JSONAPIResourceObject, List[JSONAPIResourceObject]]
    meta: Optional[Dict[str, Any]] = None


class JSONAPIErrorObject(BaseModel):
    """Error object; every member is optional but at least one is sent."""

    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    errors: List[JSONAPIErrorObject]


JSONAPIResourceObject.model_rebuild()
