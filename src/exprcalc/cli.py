"""exprcalc command-line interface."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path

import click

from exprcalc import __version__
from exprcalc.calculator import evaluate, format_number, parse, render, tokenize
from exprcalc.config import CalcConfig, LimitsConfig, find_config, load_config
from exprcalc.errors import CalcError, Diagnostic
from exprcalc.source import normalize


def _load(config_path: str | None) -> CalcConfig:
    try:
        if config_path is not None:
            return load_config(Path(config_path))
        return load_config(find_config())
    except FileNotFoundError:
        return CalcConfig()
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)


def _echo_diagnostic(diagnostic: Diagnostic, config: CalcConfig) -> None:
    color = config.display.color
    click.echo(render(diagnostic, color=color), err=True, color=color)


def _nesting_depth(text: str) -> int:
    depth = deepest = 0
    for ch in text:
        if ch == "(":
            depth += 1
            deepest = max(deepest, depth)
        elif ch == ")":
            depth = max(0, depth - 1)
    return deepest


def _check_limits(text: str, limits: LimitsConfig) -> None:
    """Reject input the recursive parser should not be handed."""
    source = normalize(text)
    if len(source) > limits.max_length:
        click.echo(
            f"error: expression is longer than {limits.max_length} characters",
            err=True,
        )
        raise SystemExit(1)
    if _nesting_depth(source) > limits.max_depth:
        click.echo(
            f"error: expression nests deeper than {limits.max_depth} levels",
            err=True,
        )
        raise SystemExit(1)


@click.group()
@click.version_option(__version__, prog_name="exprcalc")
@click.option(
    "--config", "config_path", default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to an exprcalc.toml file.",
)
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
@click.option("--verbose", is_flag=True, help="Log pipeline stages to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, color: bool | None, verbose: bool) -> None:
    """Evaluate arithmetic expressions."""
    if verbose:
        logging.basicConfig(format="%(name)s: %(message)s")
        logging.getLogger("exprcalc").setLevel(logging.DEBUG)
    config = _load(config_path)
    if color is not None:
        config.display.color = color
    ctx.obj = config


@main.command(name="eval", context_settings={"ignore_unknown_options": True})
@click.argument("expression", required=False)
@click.pass_obj
def eval_cmd(config: CalcConfig, expression: str | None) -> None:
    """Evaluate EXPRESSION, or one line read from stdin."""
    if expression is None:
        expression = sys.stdin.readline().rstrip("\r\n")
    _check_limits(expression, config.limits)

    result = evaluate(expression)
    if result.error is not None:
        _echo_diagnostic(result.error, config)
        raise SystemExit(1)
    click.echo(f"Answer is {format_number(result.unwrap())}")


@main.command()
@click.argument("expression")
@click.pass_obj
def tokens(config: CalcConfig, expression: str) -> None:
    """List the tokens of EXPRESSION."""
    _check_limits(expression, config.limits)
    try:
        toks = tokenize(expression)
    except CalcError as e:
        _echo_diagnostic(e.diagnostic, config)
        raise SystemExit(1)
    for tok in toks:
        click.echo(f"{tok.kind.name} {tok.value!r} {tok.span}")


@main.command()
@click.argument("expression")
@click.pass_obj
def tree(config: CalcConfig, expression: str) -> None:
    """View the expression tree of EXPRESSION."""
    _check_limits(expression, config.limits)
    try:
        root = parse(expression)
    except CalcError as e:
        _echo_diagnostic(e.diagnostic, config)
        raise SystemExit(1)
    _dump_ast(root, 0)


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    name = type(node).__name__

    if hasattr(node, "__dataclass_fields__"):
        fields = node.__dataclass_fields__  # type: ignore[union-attr]
        click.echo(f"{indent}{name}")
        for field_name in fields:
            if field_name == "token":
                continue
            value = getattr(node, field_name)
            if hasattr(value, "__dataclass_fields__"):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            elif isinstance(value, Enum):
                click.echo(f"{indent}  {field_name}: {value.value}")
            else:
                click.echo(f"{indent}  {field_name}: {format_number(value)}")
    else:
        click.echo(f"{indent}{name}: {node!r}")
