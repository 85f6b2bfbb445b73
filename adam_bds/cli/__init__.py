import click

from .commands.build import build_command
from .commands.params import params_command


@click.group()
def app() -> None:
    """Build BDS Finding analysis datasets (ADLB, ADVS) from SDTM."""


app.add_command(build_command, name="build")
app.add_command(params_command, name="params")
__all__ = ["app"]
