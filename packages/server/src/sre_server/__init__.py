"""SRE Status Dashboard API server."""
