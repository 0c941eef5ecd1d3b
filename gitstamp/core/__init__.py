"""gitstamp core — subprocess runner, git queries, provenance sources and baking."""
