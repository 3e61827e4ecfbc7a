"""
Test suite for fauxchart.

- Unit tests for sampling, indexing, datasets and configuration
- Integration tests for the command line
"""
