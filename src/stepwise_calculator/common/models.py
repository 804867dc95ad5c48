"""Pydantic models for calculation requests and results."""
from typing import List

from pydantic import BaseModel, Field, field_validator


class OperationRequest(BaseModel):
    """Represents a single expression submitted to the calculator."""

    expression: str = Field(..., description="Arithmetic expression as a string")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not blank."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class OperationResult(BaseModel):
    """Represents a fully reduced expression and the steps that led to it."""

    expression: str = Field(..., description="Original arithmetic expression")
    tree: str = Field(..., description="Parsed expression tree, fully parenthesized")
    steps: List[str] = Field(default_factory=list, description="Rendered tree after each reduction step")
    result: str = Field(..., description="Final literal as printed")
    value: float = Field(..., description="Numeric value of the final literal")
