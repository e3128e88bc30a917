"""Connection graph engine: queries, reachability, request lifecycle."""
