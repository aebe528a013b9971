import click


@click.command()
@click.argument("key")
@click.pass_obj
def cli(env, key: str) -> None:
    """Print the value of a variable."""
    variables = env.variables()
    if key not in variables:
        click.echo(f"Variable '{key}' is not defined.", file=env.error())
        raise SystemExit(1)
    click.echo(variables[key], file=env.output())
