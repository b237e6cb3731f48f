"""featurespec: generate executable browser tests from feature files."""

__version__ = "0.1.0"
