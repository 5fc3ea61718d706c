import datetime
import types

import pytest

from kapply._cogs.helpers.thirdparty import KubernetesModel, serialize_kubernetes_model
from kapply._cogs.structs.bodies import as_body
from kapply.applyconfigurations.events import extract_event


@pytest.mark.parametrize('name', ['V1Pod', 'V1ObjectMeta', 'V1ManagedFieldsEntry', 'EventsV1Event'])
def test_kubernetes_model_classes_detection(kubernetes, name):
    cls = getattr(kubernetes.client, name)
    assert issubclass(cls, KubernetesModel)


@pytest.mark.parametrize('name', ['CoreV1Api', 'ApiClient', 'Configuration'])
def test_kubernetes_other_classes_detection(kubernetes, name):
    cls = getattr(kubernetes.client, name)
    assert not issubclass(cls, KubernetesModel)


@pytest.mark.parametrize('cls', [object, dict, types.SimpleNamespace])
def test_non_kubernetes_classes_detection(cls):
    assert not issubclass(cls, KubernetesModel)


def test_models_are_serialized_with_api_names(kubernetes):
    meta = kubernetes.client.V1ObjectMeta(name='name1', resource_version='123')
    serialized = serialize_kubernetes_model(meta)
    assert serialized == {'name': 'name1', 'resourceVersion': '123'}


def test_models_are_accepted_as_bodies(kubernetes):
    pod = kubernetes.client.V1Pod(metadata=kubernetes.client.V1ObjectMeta(name='pod1', namespace='ns1'))
    body = as_body(pod)
    assert body.meta.name == 'pod1'
    assert body.meta.namespace == 'ns1'


def test_extracting_from_models(kubernetes):
    event = kubernetes.client.EventsV1Event(
        event_time=datetime.datetime(2024, 5, 1, 12, 0, 0, tzinfo=datetime.timezone.utc),
        metadata=kubernetes.client.V1ObjectMeta(
            name='my-event',
            namespace='default',
            managed_fields=[kubernetes.client.V1ManagedFieldsEntry(
                manager='my-controller',
                operation='Apply',
                fields_type='FieldsV1',
                fields_v1={'f:reason': {}},
            )],
        ),
        reason='ScalingReplicaSet',
        type='Normal',
    )
    config = extract_event(event, 'my-controller')
    assert config.to_dict() == {
        'kind': 'Event',
        'apiVersion': 'events.k8s.io/v1beta1',
        'metadata': {'name': 'my-event', 'namespace': 'default'},
        'reason': 'ScalingReplicaSet',
    }
