import functools
import json

import click.testing
import pytest

from kapply.cli import main


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main)


@pytest.fixture()
def event_file(tmp_path, event_body):
    path = tmp_path / 'event.json'
    path.write_text(json.dumps(event_body))
    return path


@pytest.fixture()
def configure(mocker):
    return mocker.patch('kapply._core.actions.loggers.configure')
