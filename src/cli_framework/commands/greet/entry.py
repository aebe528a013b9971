import click


@click.command()
@click.option("--name", default=None, help="Who to greet (defaults to $GREET_NAME).")
@click.pass_obj
def cli(env, name: str | None) -> None:
    """Greet someone."""
    name = name or env.variables().get("GREET_NAME", "world")
    click.echo(f"Hello {name}", file=env.output())
