"""Statement ingestion: file reading, row adapters and in-run deduplication."""
