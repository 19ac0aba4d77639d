"""
Pydantic Schemas
================
Request and response models for the API.
"""
from .validate import FindingModel, ValidateRequest, ValidateResponse

__all__ = ["FindingModel", "ValidateRequest", "ValidateResponse"]
