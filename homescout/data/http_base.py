from typing import Any, Optional
import httpx

ADDRESS_NOT_FOUND = "ADDRESS_NOT_FOUND"

class HttpAdapter:
    """
    Shared plumbing for the JSON services behind the factors and trends
    clients. A client may be injected (tests pass one with a MockTransport);
    otherwise a short-lived client is opened per call.
    """
    def __init__(self, base_url: str, timeout: float = 10.0, client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _get(self, path: str, params: dict[str, Any]) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if self._client is not None:
            return self._client.get(url, params=params)
        with httpx.Client(timeout=self.timeout) as client:
            return client.get(url, params=params)

def is_not_found(response: httpx.Response) -> bool:
    """404, or an ADDRESS_NOT_FOUND error body under any status."""
    if response.status_code == 404:
        return True
    try:
        body = response.json()
    except ValueError:
        return False
    if not isinstance(body, dict):
        return False
    error = body.get("error")
    code = error.get("code") if isinstance(error, dict) else error
    return code == ADDRESS_NOT_FOUND
