import copy
import logging

import pytest

from kapply._cogs.configs.configuration import Settings
from kapply._cogs.structs.schemas import Registry, get_default_registry, set_default_registry


@pytest.fixture()
def settings():
    return Settings()


@pytest.fixture()
def registry():
    """ A fresh default registry (with only the built-in types), restored after the test. """
    original = get_default_registry()
    registry = Registry()
    set_default_registry(registry)
    try:
        yield registry
    finally:
        set_default_registry(original)


@pytest.fixture()
def kubernetes():
    return pytest.importorskip('kubernetes')


@pytest.fixture(autouse=True)
def _kapply_logging_isolated():
    """ Remove the handlers & levels set by the CLI invocations in the tests. """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


MANAGED_FIELDS = [
    {
        'manager': 'my-controller',
        'operation': 'Apply',
        'apiVersion': 'events.k8s.io/v1beta1',
        'time': '2024-05-01T12:00:00Z',
        'fieldsType': 'FieldsV1',
        'fieldsV1': {
            'f:metadata': {'f:labels': {'f:app': {}}},
            'f:reason': {},
            'f:type': {},
        },
    },
    {
        'manager': 'other-controller',
        'operation': 'Apply',
        'apiVersion': 'events.k8s.io/v1beta1',
        'time': '2024-05-01T12:01:00Z',
        'fieldsType': 'FieldsV1',
        'fieldsV1': {
            'f:metadata': {
                'f:labels': {'f:tier': {}},
                'f:annotations': {'.': {}, 'f:example.com/note': {}},
                'f:finalizers': {'.': {}, 'v:"example.com/cleanup"': {}},
                'f:ownerReferences': {
                    '.': {},
                    'k:{"uid":"owner-1"}': {
                        '.': {},
                        'f:apiVersion': {},
                        'f:kind': {},
                        'f:name': {},
                        'f:uid': {},
                        'f:controller': {},
                    },
                },
            },
            'f:note': {},
            'f:regarding': {'f:kind': {}, 'f:name': {}},
            'f:series': {'.': {}, 'f:count': {}, 'f:lastObservedTime': {}},
        },
    },
    {
        'manager': 'my-controller',
        'operation': 'Update',
        'apiVersion': 'events.k8s.io/v1beta1',
        'time': '2024-05-01T12:02:00Z',
        'fieldsType': 'FieldsV1',
        'fieldsV1': {'f:action': {}},
    },
    {
        'manager': 'my-controller',
        'operation': 'Apply',
        'apiVersion': 'events.k8s.io/v1beta1',
        'time': '2024-05-01T12:03:00Z',
        'subresource': 'status',
        'fieldsType': 'FieldsV1',
        'fieldsV1': {'f:deprecatedCount': {}},
    },
    {
        'manager': 'kubectl-edit',
        'operation': 'Update',
        'apiVersion': 'events.k8s.io/v1beta1',
        'time': '2024-05-01T12:04:00Z',
        'fieldsType': 'FieldsV1',
        'fieldsV1': {'f:reportingInstance': {}},
    },
]

EVENT_BODY = {
    'apiVersion': 'events.k8s.io/v1beta1',
    'kind': 'Event',
    'metadata': {
        'name': 'my-event',
        'namespace': 'default',
        'uid': 'uid-123',
        'resourceVersion': '1234',
        'creationTimestamp': '2024-05-01T12:00:00Z',
        'labels': {'app': 'demo', 'tier': 'backend'},
        'annotations': {'example.com/note': 'hello'},
        'finalizers': ['example.com/cleanup', 'example.com/other'],
        'ownerReferences': [
            {'apiVersion': 'v1', 'kind': 'Pod', 'name': 'pod-1', 'uid': 'owner-2'},
            {'apiVersion': 'apps/v1', 'kind': 'ReplicaSet', 'name': 'rs-1', 'uid': 'owner-1',
             'controller': True},
        ],
        'managedFields': MANAGED_FIELDS,
    },
    'eventTime': '2024-05-01T12:00:00.123456Z',
    'reportingController': 'example.com/controller',
    'reportingInstance': 'controller-0',
    'action': 'Scaling',
    'reason': 'ScalingReplicaSet',
    'type': 'Normal',
    'note': 'Scaled up',
    'regarding': {'kind': 'Deployment', 'name': 'web', 'namespace': 'default', 'uid': 'dep-1'},
    'series': {'count': 3, 'lastObservedTime': '2024-05-01T12:05:00.000000Z'},
    'deprecatedCount': 5,
}


@pytest.fixture()
def event_body():
    """ A live event as retrieved from the API, with several field managers. """
    return copy.deepcopy(EVENT_BODY)
