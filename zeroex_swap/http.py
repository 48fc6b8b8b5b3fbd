from typing import Dict, Optional
from httpx import Client, Headers, Response

class AggregatorHttpClient:
    """HTTP client for making requests to the swap aggregator API.

    Requests are blocking; the aggregator authenticates with a static API key
    header supplied by the caller.
    """

    def __init__(self, base_url: str, client: Optional[Client] = None):
        """Initialize a new AggregatorHttpClient.

        Args:
            base_url: The base URL of the aggregator API
            client: An optional preconfigured httpx client, e.g. with a mock transport
        """
        self.sync_client = client or Client()
        self.base_url = base_url

    def get_with_headers(
        self,
        path: str,
        params: Optional[Dict[str, str]],
        custom_headers: Headers,
    ) -> Response:
        """Make a GET request with custom headers.

        Args:
            path: The API endpoint path
            params: Query parameters to URL-encode onto the request
            custom_headers: Additional headers to include

        Returns:
            The API response
        """
        url = f"{self.base_url}{path}"
        response = self.sync_client.get(url, params=params, headers=custom_headers)
        return response

    def build_url(self, path: str, params: Optional[Dict[str, str]] = None) -> str:
        """Render the full URL a GET request would hit, for reporting"""
        request = self.sync_client.build_request("GET", f"{self.base_url}{path}", params=params)
        return str(request.url)

    def close(self) -> None:
        self.sync_client.close()
