"""Command-line host for ScamVigil."""
