"""Command implementations behind the CLI subcommands."""
