"""Command line front-end for querying host facts."""
