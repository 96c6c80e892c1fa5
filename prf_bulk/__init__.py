"""PRF bulk import builder: validate payment CSVs and package import files."""

__version__ = "0.1.0"
