"""hydrapin CLI, Typer-based command-line interface.

Provides the ``hydrapin`` command with the ``pin`` and ``unpin``
subcommands. Output uses Rich.
"""
