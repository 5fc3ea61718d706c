import functools
from collections.abc import Callable, Sequence
from typing import Any, TextIO

import click
import yaml

from kapply._cogs.configs import configuration
from kapply._cogs.helpers import versions
from kapply._cogs.structs import errors
from kapply._core.actions import loggers
from kapply.applyconfigurations import base, events


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


class KeyValueParamType(click.ParamType):
    name = 'key=value'

    def convert(self, value: Any, param: Any, ctx: Any) -> tuple[str, str]:
        if isinstance(value, tuple):
            return value
        key, eq, val = str(value).partition('=')
        if not eq or not key:
            self.fail(f"{value!r} is not in the KEY=VALUE form.", param, ctx)
        return key, val


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @click.option('--log-refkey', type=str)
    @click.option('--log-prefix/--no-log-prefix', default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                log_prefix: bool | None = False,
                log_refkey: str | None = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey, log_prefix=log_prefix)
        return fn(*args, **kwargs)

    return wrapper


def output_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to render the resulting configurations in all commands the same way."""
    @click.option('-o', '--output', 'output_format', type=click.Choice(['yaml', 'json']),
                  default='yaml')
    @click.option('--sort-keys/--no-sort-keys', default=False)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(output_format: str, sort_keys: bool, *args: Any, **kwargs: Any) -> Any:
        settings = configuration.Settings()
        settings.serialization.sort_keys = sort_keys
        config: base.ApplyConfiguration = fn(*args, settings=settings, **kwargs)
        if output_format == 'json':
            click.echo(config.to_json(settings=settings))
        else:
            click.echo(config.to_yaml(settings=settings), nl=False)

    return wrapper


@click.version_option(version=versions.version, prog_name='kapply')
@click.group(name='kapply', context_settings=dict(
    auto_envvar_prefix='KAPPLY',
))
def main() -> None:
    pass


@main.command()
@logging_options
@output_options
@click.option('-m', '--manager', 'field_manager', required=True)
@click.option('-s', '--subresource', type=click.Choice(['status']), default=None)
@click.argument('source', type=click.File('r'), default='-')
def extract(
        source: TextIO,
        field_manager: str,
        subresource: str | None,
        settings: configuration.Settings,
) -> base.ApplyConfiguration:
    """ Extract the fields applied by a field manager from a live event. """
    try:
        obj = yaml.safe_load(source)  # JSON is YAML too.
    except yaml.YAMLError as e:
        raise click.ClickException(f"Cannot parse the object: {e}") from e
    if not isinstance(obj, dict):
        raise click.ClickException("The input must be a single object.")
    try:
        if subresource == 'status':
            return events.extract_event_status(obj, field_manager, settings=settings)
        else:
            return events.extract_event(obj, field_manager, settings=settings)
    except errors.ExtractionError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@logging_options
@output_options
@click.option('-n', '--namespace', default='default')
@click.option('--reason')
@click.option('--type', 'event_type')
@click.option('--note')
@click.option('--action')
@click.option('--reporting-controller')
@click.option('--reporting-instance')
@click.option('-l', '--label', 'labels', type=KeyValueParamType(), multiple=True)
@click.option('-a', '--annotation', 'annotations', type=KeyValueParamType(), multiple=True)
@click.option('-f', '--finalizer', 'finalizers', multiple=True)
@click.argument('name')
def event(
        name: str,
        namespace: str,
        reason: str | None,
        event_type: str | None,
        note: str | None,
        action: str | None,
        reporting_controller: str | None,
        reporting_instance: str | None,
        labels: Sequence[tuple[str, str]],
        annotations: Sequence[tuple[str, str]],
        finalizers: Sequence[str],
        settings: configuration.Settings,
) -> base.ApplyConfiguration:
    """ Build a declarative configuration of an event. """
    config = events.event(name, namespace)
    if reason is not None:
        config.with_reason(reason)
    if event_type is not None:
        config.with_type(event_type)
    if note is not None:
        config.with_note(note)
    if action is not None:
        config.with_action(action)
    if reporting_controller is not None:
        config.with_reporting_controller(reporting_controller)
    if reporting_instance is not None:
        config.with_reporting_instance(reporting_instance)
    config.with_labels(dict(labels))
    config.with_annotations(dict(annotations))
    config.with_finalizers(*finalizers)
    return config
