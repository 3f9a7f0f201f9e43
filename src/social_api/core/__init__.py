"""Cross-cutting concerns: settings, credentials, policy and errors."""
