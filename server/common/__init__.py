"""Cross-app helpers: error taxonomy, JSON envelopes, middleware."""
