"""Command line interface for pagescore."""
