"""Command-line interface for ruleforge."""
