"""Infrastructure — GraphQL documents, HTTP transport, and session handling."""
