from pathlib import Path
from typing import Annotated

from pydantic import (
    BaseModel,
    DirectoryPath,
    Field,
    FiniteFloat,
    ValidationError,
    field_validator,
)

from ...common.exceptions import TimeLapseFusionValidationException


class FusionInputValidation(BaseModel):
    """Input validation model for fuse_sequence function."""

    def __init__(self, **data):
        """Initialize with custom validation error handling."""
        try:
            super().__init__(**data)
        except (ValidationError, ValueError) as e:
            # Convert Pydantic validation errors to custom exceptions
            if isinstance(e, ValidationError) and hasattr(e, "errors"):
                errors = e.errors()
            else:
                errors = [{"msg": str(e), "type": "value_error", "loc": ["unknown"]}]
            raise TimeLapseFusionValidationException(
                self._format_validation_errors(errors)
            ) from e

    source_directory: Annotated[
        DirectoryPath,
        Field(
            description="Directory holding the source .ppm frames",
            examples=["./src/"],
        ),
    ]
    destination_directory: Annotated[
        Path,
        Field(
            description="Directory the fused images are written to, created if missing",
            examples=["./output/"],
        ),
    ]
    alpha_c: Annotated[
        float,
        Field(ge=0, le=10, description="Exponent of the contrast measure (0-10)."),
    ]
    alpha_s: Annotated[
        float,
        Field(ge=0, le=10, description="Exponent of the saturation measure (0-10)."),
    ]
    alpha_e: Annotated[
        float,
        Field(
            ge=0, le=10, description="Exponent of the well-exposedness measure (0-10)."
        ),
    ]
    tau: Annotated[
        FiniteFloat,
        Field(
            description="Frames blended into each output; negative fuses the whole sequence.",
        ),
    ]
    levels: Annotated[
        int,
        Field(ge=1, le=10, description="Number of pyramid levels (1-10)."),
    ]

    @field_validator("destination_directory")
    @classmethod
    def validate_destination_directory(cls, v):
        """Validate that the destination is not an existing file."""
        if v.exists() and not v.is_dir():
            raise ValueError(f"Destination '{v}' exists and is not a directory")
        return v

    @staticmethod
    def _format_validation_errors(errors: list) -> str:
        """Format Pydantic validation errors into user-friendly messages."""
        formatted_errors = []

        for error in errors:
            field = error.get("loc", ["unknown"])[-1]
            error_type = error.get("type", "unknown")
            message = error.get("msg", "Validation error")
            input_value = error.get("input", "unknown")

            if error_type == "path_not_directory":
                formatted_errors.append(f"Path '{input_value}' is not a directory.")
            else:
                formatted_errors.append(f"{field}: {message}")

        return "; ".join(formatted_errors)
