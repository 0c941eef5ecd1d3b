"""gitstamp CLI subcommands."""
