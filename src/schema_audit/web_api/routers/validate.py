"""
Validate Router
===============
Endpoint for validating an inline API document.
"""
import logging

from fastapi import APIRouter, HTTPException

from schema_audit import api as core_api
from schema_audit.core.config import ConfigurationError
from schema_audit.core.loader import detect_oas3
from schema_audit.web_api.schemas.validate import (
    FindingModel,
    ValidateRequest,
    ValidateResponse,
)

_logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/validate", response_model=ValidateResponse)
async def validate_document(body: ValidateRequest):
    """
    Validate the schema-shaped parts of an API document.

    - **document**: Parsed Swagger 2 / OpenAPI 3 document
    - **is_oas3**: Shape family (default: detected from ``openapi``)
    - **config**: Optional ``.validaterc``-shaped rule configuration
    """
    is_oas3 = body.is_oas3 if body.is_oas3 is not None else detect_oas3(body.document)

    try:
        result = core_api.validate(body.document, body.config, is_oas3=is_oas3)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _logger.debug(
        "validated document: %d error(s), %d warning(s)",
        len(result.errors),
        len(result.warnings),
    )
    return ValidateResponse(
        is_oas3=is_oas3,
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        errors=[FindingModel(**f.to_dict()) for f in result.errors],
        warnings=[FindingModel(**f.to_dict()) for f in result.warnings],
    )
