"""Runtime layer: REST transport, request queue and pagination."""
