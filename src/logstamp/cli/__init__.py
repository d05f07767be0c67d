"""Command-line interface for logstamp."""
