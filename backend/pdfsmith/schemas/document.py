"""Document Schemas: lenient request decoding and the success response shape.

Invariants:
    - DocumentRequest.from_body NEVER raises: malformed input yields text=None
    - text must be a JSON string; numbers, lists, objects and null decode to None
    - Unknown fields are ignored

Design Decisions:
    - StrictStr: pydantic must not coerce 123 into "123"
    - Raw body decoded here, not by a typed FastAPI body parameter (which answers 422
      for malformed JSON)
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, StrictStr


class DocumentRequest(BaseModel):
    """Body of POST /api/v1/documents."""
    model_config = ConfigDict(extra="ignore")

    text: StrictStr | None = None

    @classmethod
    def from_body(cls, raw: bytes) -> "DocumentRequest":
        """Decode a raw body, falling back to an empty request on any error."""
        try:
            return cls.model_validate_json(raw)
        except ValueError:
            return cls()


class DocumentCreated(BaseModel):
    """Success response: status marker plus the artifact's file name."""
    status: Literal["pdf_created"]
    file: str
