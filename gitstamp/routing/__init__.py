"""gitstamp routing — publishes provenance records to all configured sinks.

Sinks are pluggable destination trees: the package data that the baked
path reads at runtime, loose files next to the build output, or any
custom sink implementing the BaseSink protocol.
"""
