"""HTTP GET transport for the Namecheap XML API."""

import http.client
import urllib.error
import urllib.request

from .exceptions import ResponseParseError, TransportError


def http_get(url: str, timeout: int = 30) -> str:
    """Issue a GET request and return the full response body as text.

    Args:
        url: Fully-formed request URL
        timeout: Socket timeout in seconds

    Returns:
        Response body decoded as UTF-8

    Raises:
        TransportError: On connection errors, HTTP errors, dropped or truncated
            responses, or timeouts
        ResponseParseError: If the body is not valid UTF-8
    """
    req = urllib.request.Request(url, method="GET")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            body = response.read()
    except urllib.error.HTTPError as e:
        raise TransportError(f"HTTP {e.code} from Namecheap API: {e.reason}") from e
    except urllib.error.URLError as e:
        raise TransportError(f"Connection to Namecheap API failed: {e.reason}") from e
    except TimeoutError as e:
        raise TransportError(f"Namecheap API request timed out after {timeout}s") from e
    # Errors from getresponse()/read() are not wrapped in URLError
    except (OSError, http.client.HTTPException) as e:
        raise TransportError(f"Namecheap API response failed: {e!r}") from e

    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ResponseParseError(f"response body is not valid UTF-8: {e}") from e
