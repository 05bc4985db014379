"""
Command line interface: fit a power law to a column of numbers.

Prints one Key,Value line per estimated quantity to stdout.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .bootstrap import NUM_RUNS, bootstrap_fit
from .fit import single_fit
from .get_sample import InputError, get_sample
from .xmin import START_XMIN, INCREMENT_XMIN, END_XMIN


def _echo_values(pairs):
    for key, value in pairs:
        click.echo("%s,%g" % (key, value))


def _report_progress(iteration, num_runs, res):
    if res is None:
        click.echo("Bootstrap %d/%d: failed" % (iteration, num_runs), err=True)
    else:
        click.echo("Bootstrap %d/%d: alpha = %g, xmin = %g" % (iteration, num_runs, res.alpha, res.xmin), err=True)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": "PLFIT"},
    help="Fits a power-law distributional model to data.",
)
@click.option(
    "--input",
    "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input file with distribution values in column format.",
)
@click.option("--finite", "-f", is_flag=True, help="Use the finite-size correction.")
@click.option("--verbose", "-v", is_flag=True, help="Print bootstrap status.")
@click.option(
    "--nosmall",
    "-s",
    is_flag=True,
    help="Truncate the search over xmin values before the finite-size bias becomes significant.",
)
@click.option("--bootstrap", "-b", is_flag=True, help="Run non-parametric bootstrap instead of single estimation.")
@click.option("--discrete", "-d", is_flag=True, help="Fit the discrete (integer valued) power law.")
@click.option("--start-xmin", "-x", type=float, default=START_XMIN, show_default=True,
              help="Start value for the xmin search.")
@click.option("--increment-xmin", "-y", type=float, default=INCREMENT_XMIN, show_default=True,
              help="Increment value for the xmin search.")
@click.option("--end-xmin", "-z", type=float, default=END_XMIN, show_default=True,
              help="End value for the xmin search.")
@click.option("--bootstrap-iterations", "-n", type=click.IntRange(min=0), default=NUM_RUNS, show_default=True,
              help="Bootstrap iterations.")
@click.option("--seed", type=int, default=None, help="Seed for the bootstrap resampling.")
def main(
    input_file: Path,
    finite: bool,
    verbose: bool,
    nosmall: bool,
    bootstrap: bool,
    discrete: bool,
    start_xmin: float,
    increment_xmin: float,
    end_xmin: float,
    bootstrap_iterations: int,
    seed: Optional[int],
) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    try:
        x = get_sample(input_file)
    except InputError as exc:
        raise click.ClickException(str(exc)) from exc

    if bootstrap:
        res = bootstrap_fit(
            x,
            nosmall=nosmall,
            finite=finite,
            start_xmin=start_xmin,
            increment_xmin=increment_xmin,
            end_xmin=end_xmin,
            num_runs=bootstrap_iterations,
            reporter=_report_progress if verbose else None,
            rng=seed,
            discrete=discrete,
        )
        if res is None:
            raise click.ClickException("maximum likelihood bootstrap estimation failed! -> check input ...")
        _echo_values([
            ("Alpha", res.alpha),
            ("Xmin", res.xmin),
            ("Log-likelihood", res.loglikelihood),
            ("Alpha_sd", res.alpha_sd),
            ("Xmin_sd", res.xmin_sd),
            ("Log-likelihood_sd", res.loglikelihood_sd),
        ])
    else:
        res = single_fit(
            x,
            nosmall=nosmall,
            finite=finite,
            start_xmin=start_xmin,
            increment_xmin=increment_xmin,
            end_xmin=end_xmin,
            discrete=discrete,
        )
        if res is None:
            raise click.ClickException("maximum likelihood single estimation failed! -> check input ...")
        _echo_values([
            ("Alpha", res.alpha),
            ("Xmin", res.xmin),
            ("Log-likelihood", res.loglikelihood),
        ])


if __name__ == "__main__":
    main()
