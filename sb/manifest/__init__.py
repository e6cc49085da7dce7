"""Mirror listing access: HTTP client, tokenizer, listers."""

from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .index import ReleaseLister, list_minor_versions, minor_manifest_url
from .listing import LineTokenizer, extract_between

__all__ = [
    "HttpClient",
    "HttpError",
    "LineTokenizer",
    "MockHttpClient",
    "RealHttpClient",
    "ReleaseLister",
    "extract_between",
    "list_minor_versions",
    "minor_manifest_url",
]
