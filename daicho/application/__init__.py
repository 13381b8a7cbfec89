"""Application workflows orchestrating parsing, config and output."""
