import logging.handlers

import pytest

from kapply._cogs.structs.bodies import Body
from kapply._core.actions.loggers import ObjectLogger


@pytest.fixture(autouse=True)
def _caplog_all_levels(caplog):
    caplog.set_level(0)


@pytest.fixture()
def ns_body():
    return Body({
        'kind': 'kind1',
        'apiVersion': 'api1/v1',
        'metadata': {'uid': 'uid1', 'name': 'name1', 'namespace': 'namespace1'},
    })


@pytest.fixture()
def cluster_body():
    return Body({
        'kind': 'kind1',
        'apiVersion': 'api1/v1',
        'metadata': {'uid': 'uid1', 'name': 'name1'},
    })


def _record(body):
    handler = logging.handlers.BufferingHandler(capacity=100)
    logger = ObjectLogger(body=body)
    logger.logger.addHandler(handler)
    try:
        logger.info("hello")
    finally:
        logger.logger.removeHandler(handler)
    return handler.buffer[0]


@pytest.fixture()
def ns_record(ns_body):
    return _record(ns_body)


@pytest.fixture()
def cluster_record(cluster_body):
    return _record(cluster_body)
