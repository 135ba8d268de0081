"""Parsing and batching core, free of docker and AWS dependencies."""
