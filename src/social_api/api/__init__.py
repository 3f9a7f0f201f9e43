"""HTTP transport for the social API."""
