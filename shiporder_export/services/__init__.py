"""Pipeline services: contact parsing, aggregation, run orchestration, summary, progress."""
