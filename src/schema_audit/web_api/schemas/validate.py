"""
Validate Schemas
================
Request and response models for the validate endpoint.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List, Union


class ValidateRequest(BaseModel):
    """Request to validate an inline API document"""

    document: Dict[str, Any] = Field(..., description="Parsed Swagger 2 / OpenAPI 3 document")
    is_oas3: Optional[bool] = Field(
        default=None,
        description="Shape family; detected from the 'openapi' key when omitted",
    )
    config: Optional[Dict[str, Any]] = Field(
        default=None,
        description=".validaterc-shaped rule configuration",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "document": {
                    "swagger": "2.0",
                    "definitions": {
                        "Thing": {
                            "type": "object",
                            "description": "thing",
                            "properties": {"level": {"type": "number", "format": "integer"}},
                        }
                    },
                },
                "config": {"schemas": {"snake_case_only": "warning"}},
            }
        }
    )


class FindingModel(BaseModel):
    """One reported error or warning"""

    path: List[Union[int, str]]
    message: str
    rule: str
    line: Optional[int] = None
    related_path: Optional[List[Union[int, str]]] = None


class ValidateResponse(BaseModel):
    """Response from a validate operation"""

    is_oas3: bool
    error_count: int = Field(default=0)
    warning_count: int = Field(default=0)
    errors: List[FindingModel] = Field(default_factory=list)
    warnings: List[FindingModel] = Field(default_factory=list)
