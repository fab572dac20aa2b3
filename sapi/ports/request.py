"""Request port definition (validated input model)."""

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["RequestSpec"]


class RequestSpec(BaseModel):
    """One HTTP request described in the input document.

    Attributes:
        target: Hostname or IP address of the server.
        port: TCP port of the server.
        endpoint: URL path appended verbatim after ``host:port``.
        method: HTTP verb; unsupported verbs are skipped at dispatch time.
        headers: Optional headers set verbatim on the outgoing request.
        data: Optional body fields, used only with a recognized Content-Type.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    target: str = Field(..., min_length=1, description="Hostname or IP address.")
    port: int = Field(..., ge=0, le=65535, description="TCP port.")
    endpoint: str = Field(..., description="URL path, normally starting with '/'.")
    method: str = Field(..., description="HTTP verb.")
    headers: dict[str, str] | None = Field(default=None, description="Request headers.")
    data: dict[str, str] | None = Field(default=None, description="Request body fields.")
