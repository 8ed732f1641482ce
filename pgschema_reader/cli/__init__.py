"""Command line interface for pgschema-reader."""
