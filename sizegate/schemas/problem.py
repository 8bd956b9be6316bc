"""Problem-details payload returned when a request is refused for its size."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

REQUEST_TOO_LARGE_TITLE = "Request too large"
REQUEST_TOO_LARGE_TYPE = "https://tools.ietf.org/html/rfc7231#section-6.5.11"


class RejectionBody(BaseModel):
    """Body of a 413 response. All three fields are fixed."""

    model_config = ConfigDict(frozen=True)

    title: Literal["Request too large"] = Field(
        REQUEST_TOO_LARGE_TITLE, description="Short human-readable summary"
    )
    status: Literal[413] = Field(413, description="HTTP status code")
    type: Literal["https://tools.ietf.org/html/rfc7231#section-6.5.11"] = Field(
        REQUEST_TOO_LARGE_TYPE, description="Reference to the status semantics"
    )
