"""log-sender: parse a structured application log and forward it as NDJSON over HTTP."""
