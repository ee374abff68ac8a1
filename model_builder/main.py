"""Entry point for the Doctrine model builder."""

from model_builder.cli.commands import doctrine


def main() -> None:
    """Launch the CLI."""
    doctrine(obj={})


if __name__ == "__main__":
    main()
