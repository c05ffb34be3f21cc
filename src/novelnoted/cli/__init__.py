# ABOUTME: CLI package for novelnoted, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from novelnoted.cli.commands import (
    account_cmd,
    book_cmd,
    library_cmd,
    search_cmd,
    watch_cmd,
    wishlist_cmd,
)


@click.group()
@click.version_option(package_name="novelnoted")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """novelnoted - track what you read, what you are reading, and what you want next."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(account_cmd.signup)
cli.add_command(account_cmd.login)
cli.add_command(account_cmd.google_login)
cli.add_command(account_cmd.logout)
cli.add_command(account_cmd.whoami)
cli.add_command(account_cmd.reset_password)
cli.add_command(book_cmd.add)
cli.add_command(book_cmd.info)
cli.add_command(book_cmd.status)
cli.add_command(book_cmd.rate)
cli.add_command(book_cmd.progress)
cli.add_command(book_cmd.note)
cli.add_command(book_cmd.journal)
cli.add_command(book_cmd.rm)
cli.add_command(library_cmd.ls)
cli.add_command(library_cmd.stats)
cli.add_command(search_cmd.search)
cli.add_command(search_cmd.scan)
cli.add_command(search_cmd.series)
cli.add_command(wishlist_cmd.wishlist)
cli.add_command(watch_cmd.watch)
