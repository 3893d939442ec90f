"""Current rate limit status for the authenticated caller."""

from ..client import get_client


def get_rate_limit(client=None) -> dict:
    """Rate limit status; reading it does not count against the limit."""
    client = client or get_client()
    return client.invoke("rate_limit")["resources"]
