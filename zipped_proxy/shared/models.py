"""Data models for the ZIPPED proxy."""

import base64
import codecs
from typing import Annotated, Literal

from pydantic import AnyUrl, BaseModel, Field

HTML_CONTENT_TYPE = "text/html"


class ProxyResponse(BaseModel):
    """Outgoing response, in the shape serverless function hosts expect."""

    status_code: Annotated[
        int, Field(ge=100, le=599, serialization_alias="statusCode", description="HTTP status code")
    ]
    headers: Annotated[dict[str, str] | None, Field(description="Response headers")] = None
    body: Annotated[str, Field(description="Response body, base64 text when flagged")] = ""
    is_base64_encoded: Annotated[
        bool | None,
        Field(serialization_alias="isBase64Encoded", description="Body is base64 of raw bytes"),
    ] = None

    def to_event(self) -> dict:
        """Serialize with host field names, leaving out unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Target(BaseModel):
    """Validated absolute http(s) URL to fetch."""

    url: AnyUrl

    @property
    def href(self) -> str:
        return str(self.url)


class UpstreamResponse(BaseModel):
    """Resource fetched from the target."""

    content_type: Annotated[str, Field(description="Upstream Content-Type, empty if absent")] = ""
    content: Annotated[bytes, Field(description="Raw response body")] = b""
    charset: Annotated[str | None, Field(description="Charset declared by the upstream")] = None

    @property
    def is_html(self) -> bool:
        return HTML_CONTENT_TYPE in self.content_type

    def text(self) -> str:
        """Decode the body with the declared charset, UTF-8 otherwise."""
        return self.content.decode(self._encoding(), errors="replace")

    def _encoding(self) -> str:
        # Unknown charsets fall back to UTF-8; a leading UTF-8 BOM is dropped.
        try:
            name = codecs.lookup(self.charset or "utf-8").name
        except LookupError:
            return "utf-8-sig"
        return "utf-8-sig" if name == "utf-8" else name


class ClientError(BaseModel):
    """The caller sent unusable input; nothing was fetched."""

    kind: Literal["client_error"] = "client_error"
    message: str

    def to_response(self) -> ProxyResponse:
        return ProxyResponse(status_code=400, body=self.message)


class UpstreamError(BaseModel):
    """Fetching or transforming the target failed."""

    kind: Literal["upstream_error"] = "upstream_error"
    message: str

    def to_response(self) -> ProxyResponse:
        return ProxyResponse(status_code=500, body=f"Proxy error: {self.message}")


class HtmlPage(BaseModel):
    """Rewritten HTML document."""

    kind: Literal["html"] = "html"
    html: str

    def to_response(self) -> ProxyResponse:
        return ProxyResponse(
            status_code=200,
            headers={"Content-Type": HTML_CONTENT_TYPE},
            body=self.html,
        )


class BinaryPayload(BaseModel):
    """Any non-HTML resource, relayed byte for byte."""

    kind: Literal["binary"] = "binary"
    content_type: str = ""
    content: bytes = b""

    def to_response(self) -> ProxyResponse:
        return ProxyResponse(
            status_code=200,
            headers={"Content-Type": self.content_type},
            body=base64.b64encode(self.content).decode("ascii"),
            is_base64_encoded=True,
        )


ProxyResult = Annotated[
    ClientError | UpstreamError | HtmlPage | BinaryPayload,
    Field(discriminator="kind"),
]
