# kuhn_cfr/cli.py

"""
Command line interface for the Kuhn poker CFR trainer.
"""

import logging
import time

import click

from kuhn_cfr import __version__
from kuhn_cfr.engine.backend import available_precisions
from kuhn_cfr.solvers.vanilla import KuhnCFR, TrainerConfig

# Equilibrium value for player 1
NASH_GAME_VALUE = -1.0 / 18.0

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Log debug output')
def cli(verbose: bool):
    """Kuhn poker solver using Counterfactual Regret Minimization"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command()
@click.option('--iterations', '-i', default=100_000, show_default=True, type=int,
              help='Number of CFR iterations')
@click.option('--precision', '-p', default='float64', show_default=True,
              type=click.Choice(available_precisions()),
              help='Floating point width of the accumulators')
@click.option('--seed', '-s', default=None, type=int,
              help='Seed for the deal generator')
@click.option('--log-every', default=0, type=int,
              help='Log progress every N iterations (0 disables)')
@click.option('--dump', is_flag=True,
              help='Also print the raw regret and strategy sums')
def train(iterations: int, precision: str, seed: int, log_every: int, dump: bool):
    """Train a Kuhn poker strategy and report the game value"""
    config = TrainerConfig(
        iterations=iterations,
        precision=precision,
        seed=seed,
        log_every=log_every,
    )
    try:
        solver = KuhnCFR.from_config(config)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo("=" * 60)
    click.echo("Kuhn Poker CFR")
    click.echo("=" * 60)
    click.echo(f"Iterations: {config.iterations}")
    click.echo(f"Precision:  {config.precision}")

    start = time.time()
    value = solver.train()
    elapsed = time.time() - start
    rate = solver.iterations_done / elapsed if elapsed > 0 else 0.0
    click.echo(f"Done in {elapsed:.2f}s ({rate:.1f} iter/s)")

    click.echo(f"\nAverage game value (P1): {float(value):.6f}")
    click.echo(f"Expected Nash value:     {NASH_GAME_VALUE:.6f}")
    if solver.num_infosets:
        click.echo(f"Exploitability:          {solver.exploitability():.6f}")

    solver.print_strategy()

    if dump:
        click.echo()
        click.echo(solver.dump())


def main():
    cli()


if __name__ == '__main__':
    main()
