"""quantsim CLI main entry point."""

import click

from quantsim import __version__
from quantsim.cli.commands import fill_command, statistics_command


@click.group()
@click.version_option(version=__version__)
def main():
    """quantsim - Order Fill Simulation and Performance Statistics"""
    pass


# Register commands
main.add_command(statistics_command)
main.add_command(fill_command)


if __name__ == "__main__":
    main()
