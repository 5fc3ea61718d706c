import datetime

import pytest

from kapply.applyconfigurations.core import EventSourceApplyConfiguration, \
                                            ObjectReferenceApplyConfiguration, \
                                            event_source, object_reference
from kapply.applyconfigurations.events import EventApplyConfiguration, \
                                              EventSeriesApplyConfiguration, event, event_series

UTC = datetime.timezone.utc


def test_event_constructor_sets_the_identity():
    config = event('my-event', 'default')
    assert isinstance(config, EventApplyConfiguration)
    assert config.kind == 'Event'
    assert config.api_version == 'events.k8s.io/v1beta1'
    assert config.get_name() == 'my-event'
    assert config.get_namespace() == 'default'
    assert config.to_dict() == {
        'kind': 'Event',
        'apiVersion': 'events.k8s.io/v1beta1',
        'metadata': {'name': 'my-event', 'namespace': 'default'},
    }


def test_scaling_event_is_rendered_with_only_the_declared_fields():
    config = (event('my-event', 'default')
              .with_reason('ScalingReplicaSet')
              .with_type('Normal'))
    assert config.to_dict() == {
        'kind': 'Event',
        'apiVersion': 'events.k8s.io/v1beta1',
        'metadata': {'name': 'my-event', 'namespace': 'default'},
        'reason': 'ScalingReplicaSet',
        'type': 'Normal',
    }


def test_empty_configuration_renders_as_empty():
    config = EventApplyConfiguration()
    assert config.to_dict() == {}
    assert config.metadata is None


def test_mutators_return_the_same_object():
    config = EventApplyConfiguration()
    assert config.with_reason('x') is config
    assert config.with_note('x') is config
    assert config.with_name('x') is config
    assert config.with_labels({'a': 'b'}) is config
    assert config.with_finalizers('x') is config


def test_scalars_are_replaced_by_the_last_call():
    config = EventApplyConfiguration()
    config.with_reason('First').with_reason('Second')
    config.with_name('first').with_name('second')
    assert config.reason == 'Second'
    assert config.get_name() == 'second'


def test_empty_values_are_declared_unlike_none():
    config = EventApplyConfiguration().with_note('').with_deprecated_count(0)
    assert config.to_dict() == {'note': '', 'deprecatedCount': 0}


def test_all_scalar_fields():
    config = (EventApplyConfiguration()
              .with_reporting_controller('example.com/controller')
              .with_reporting_instance('controller-0')
              .with_action('Scaling')
              .with_reason('ScalingReplicaSet')
              .with_note('Scaled up')
              .with_type('Normal')
              .with_deprecated_count(5))
    assert config.to_dict() == {
        'reportingController': 'example.com/controller',
        'reportingInstance': 'controller-0',
        'action': 'Scaling',
        'reason': 'ScalingReplicaSet',
        'note': 'Scaled up',
        'type': 'Normal',
        'deprecatedCount': 5,
    }


def test_timestamps_from_datetimes_and_strings():
    config = (EventApplyConfiguration()
              .with_event_time(datetime.datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=UTC))
              .with_deprecated_first_timestamp('2024-05-01T12:00:00Z')
              .with_deprecated_last_timestamp(datetime.datetime(2024, 5, 1, 12, 30)))
    assert config.event_time == datetime.datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=UTC)
    assert config.to_dict() == {
        'eventTime': '2024-05-01T12:00:00.123456Z',
        'deprecatedFirstTimestamp': '2024-05-01T12:00:00Z',
        'deprecatedLastTimestamp': '2024-05-01T12:30:00Z',
    }


def test_invalid_timestamps():
    config = EventApplyConfiguration()
    with pytest.raises(ValueError):
        config.with_event_time('yesterday')
    with pytest.raises(TypeError):
        config.with_event_time(12345)
    assert config.event_time is None


@pytest.mark.parametrize('value', [2**31, -2**31 - 1])
def test_int32_out_of_range(value):
    config = EventApplyConfiguration()
    with pytest.raises(ValueError):
        config.with_deprecated_count(value)
    assert config.deprecated_count is None


@pytest.mark.parametrize('value', [2**31 - 1, -2**31, 0])
def test_int32_in_range(value):
    config = EventApplyConfiguration().with_deprecated_count(value)
    assert config.deprecated_count == value


@pytest.mark.parametrize('value', [True, '5', 5.0])
def test_int32_of_wrong_types(value):
    with pytest.raises(TypeError):
        EventApplyConfiguration().with_deprecated_count(value)


def test_series():
    series = event_series().with_count(3).with_last_observed_time('2024-05-01T12:05:00Z')
    config = EventApplyConfiguration().with_series(series)
    assert isinstance(series, EventSeriesApplyConfiguration)
    assert config.series is series
    assert config.to_dict() == {
        'series': {'count': 3, 'lastObservedTime': '2024-05-01T12:05:00.000000Z'},
    }


def test_nested_objects_are_replaced_not_merged():
    config = EventApplyConfiguration()
    config.with_regarding(object_reference().with_kind('Deployment').with_name('web'))
    config.with_regarding(object_reference().with_name('api'))
    assert config.to_dict() == {'regarding': {'name': 'api'}}


def test_nested_objects_can_be_unset():
    config = EventApplyConfiguration()
    config.with_regarding(object_reference().with_name('web'))
    config.with_regarding(None)
    assert config.to_dict() == {}


def test_references():
    regarding = (object_reference()
                 .with_api_version('apps/v1')
                 .with_kind('Deployment')
                 .with_namespace('default')
                 .with_name('web')
                 .with_uid('dep-1')
                 .with_resource_version('42')
                 .with_field_path('spec.replicas'))
    related = object_reference().with_kind('ReplicaSet').with_name('web-123')
    config = EventApplyConfiguration().with_regarding(regarding).with_related(related)
    assert isinstance(regarding, ObjectReferenceApplyConfiguration)
    assert config.to_dict() == {
        'regarding': {
            'kind': 'Deployment',
            'namespace': 'default',
            'name': 'web',
            'uid': 'dep-1',
            'apiVersion': 'apps/v1',
            'resourceVersion': '42',
            'fieldPath': 'spec.replicas',
        },
        'related': {'kind': 'ReplicaSet', 'name': 'web-123'},
    }


def test_deprecated_source():
    source = event_source().with_component('kubelet').with_host('node-1')
    config = EventApplyConfiguration().with_deprecated_source(source)
    assert isinstance(source, EventSourceApplyConfiguration)
    assert config.to_dict() == {'deprecatedSource': {'component': 'kubelet', 'host': 'node-1'}}


def test_type_meta_getters():
    config = EventApplyConfiguration().with_kind('Event').with_api_version('v1')
    assert config.get_kind() == 'Event'
    assert config.get_api_version() == 'v1'
