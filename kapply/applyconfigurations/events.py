"""
The apply configurations of the ``events.k8s.io/v1beta1`` events.

Build a new event from scratch::

    config = event('my-event', 'default').with_reason('ScalingReplicaSet').with_type('Normal')

Or extract what a field manager has applied before, modify, and re-apply::

    config = extract_event(live_event, 'my-controller')
    config.with_note('Scaled up to 3 replicas')
"""
import dataclasses
import datetime
from collections.abc import Mapping
from typing import Any, ClassVar

from typing_extensions import Self

from kapply._cogs.configs import configuration
from kapply._cogs.helpers import thirdparty, timestamps
from kapply._cogs.structs import bodies, schemas
from kapply._core.engines import managedfields
from kapply.applyconfigurations import base, core, meta


@schemas.register
@dataclasses.dataclass
class EventSeriesApplyConfiguration(base.ApplyConfiguration):
    SCHEMA: ClassVar[str] = 'io.k8s.api.events.v1beta1.EventSeries'

    count: int | None = base.optional('count', format=schemas.Format.INT32)
    last_observed_time: datetime.datetime | None = base.optional(
        'lastObservedTime', format=schemas.Format.MICRO_TIME)

    def with_count(self, value: int) -> Self:
        self.count = base.int32(value)
        return self

    def with_last_observed_time(self, value: datetime.datetime | str) -> Self:
        self.last_observed_time = timestamps.parse(value)
        return self


def event_series() -> EventSeriesApplyConfiguration:
    return EventSeriesApplyConfiguration()


@schemas.register
@dataclasses.dataclass
class EventApplyConfiguration(meta.ResourceApplyConfiguration):
    """
    A declarative configuration of an event for the server-side apply.

    All fields are optional. The mutators of scalars and nested objects
    replace the previous values (the last call wins). The timestamps accept
    both datetimes and RFC 3339 strings; the naive datetimes are in UTC.
    """
    SCHEMA: ClassVar[str] = 'io.k8s.api.events.v1beta1.Event'
    API_VERSION: ClassVar[str] = 'events.k8s.io/v1beta1'
    KIND: ClassVar[str] = 'Event'
    NAMESPACED: ClassVar[bool] = True

    event_time: datetime.datetime | None = base.optional(
        'eventTime', format=schemas.Format.MICRO_TIME)
    series: EventSeriesApplyConfiguration | None = base.optional(
        'series', schemas.FieldKind.STRUCT, nested=EventSeriesApplyConfiguration)
    reporting_controller: str | None = base.optional('reportingController')
    reporting_instance: str | None = base.optional('reportingInstance')
    action: str | None = base.optional('action')
    reason: str | None = base.optional('reason')
    regarding: core.ObjectReferenceApplyConfiguration | None = base.optional(
        'regarding', schemas.FieldKind.STRUCT, nested=core.ObjectReferenceApplyConfiguration)
    related: core.ObjectReferenceApplyConfiguration | None = base.optional(
        'related', schemas.FieldKind.STRUCT, nested=core.ObjectReferenceApplyConfiguration)
    note: str | None = base.optional('note')
    type: str | None = base.optional('type')
    deprecated_source: core.EventSourceApplyConfiguration | None = base.optional(
        'deprecatedSource', schemas.FieldKind.STRUCT, nested=core.EventSourceApplyConfiguration)
    deprecated_first_timestamp: datetime.datetime | None = base.optional(
        'deprecatedFirstTimestamp', format=schemas.Format.TIME)
    deprecated_last_timestamp: datetime.datetime | None = base.optional(
        'deprecatedLastTimestamp', format=schemas.Format.TIME)
    deprecated_count: int | None = base.optional('deprecatedCount', format=schemas.Format.INT32)

    def with_event_time(self, value: datetime.datetime | str) -> Self:
        self.event_time = timestamps.parse(value)
        return self

    def with_series(self, value: EventSeriesApplyConfiguration | None) -> Self:
        self.series = value
        return self

    def with_reporting_controller(self, value: str) -> Self:
        self.reporting_controller = value
        return self

    def with_reporting_instance(self, value: str) -> Self:
        self.reporting_instance = value
        return self

    def with_action(self, value: str) -> Self:
        self.action = value
        return self

    def with_reason(self, value: str) -> Self:
        self.reason = value
        return self

    def with_regarding(self, value: core.ObjectReferenceApplyConfiguration | None) -> Self:
        self.regarding = value
        return self

    def with_related(self, value: core.ObjectReferenceApplyConfiguration | None) -> Self:
        self.related = value
        return self

    def with_note(self, value: str) -> Self:
        self.note = value
        return self

    def with_type(self, value: str) -> Self:
        self.type = value
        return self

    def with_deprecated_source(self, value: core.EventSourceApplyConfiguration | None) -> Self:
        self.deprecated_source = value
        return self

    def with_deprecated_first_timestamp(self, value: datetime.datetime | str) -> Self:
        self.deprecated_first_timestamp = timestamps.parse(value)
        return self

    def with_deprecated_last_timestamp(self, value: datetime.datetime | str) -> Self:
        self.deprecated_last_timestamp = timestamps.parse(value)
        return self

    def with_deprecated_count(self, value: int) -> Self:
        self.deprecated_count = base.int32(value)
        return self


def event(name: str, namespace: str) -> EventApplyConfiguration:
    """
    Construct a declarative configuration of an event with its identity set.
    """
    config = EventApplyConfiguration()
    config.with_name(name)
    config.with_namespace(namespace)
    config.with_kind(EventApplyConfiguration.KIND)
    config.with_api_version(EventApplyConfiguration.API_VERSION)
    return config


def extract_event(
        event: Mapping[str, Any] | bodies.Body | thirdparty.KubernetesModel,
        field_manager: str,
        *,
        settings: configuration.Settings | None = None,
) -> EventApplyConfiguration:
    """
    Extract the configuration applied by the field manager to the event.

    If nothing is owned by the field manager, the result has only the kind,
    the API version, the name, and the namespace set: either because the manager
    has never applied anything, or because other managers have taken over
    all of its fields. For the same reason, the result can contain fewer fields
    than what the manager has applied before.

    The event must be an unmodified object as retrieved from the API: the owned
    fields refer to the stored state, so any local changes make them inaccurate.

    This allows the extract / modify-in-place / apply workflow.
    """
    return _extract_event(event, field_manager, '', settings=settings)


def extract_event_status(
        event: Mapping[str, Any] | bodies.Body | thirdparty.KubernetesModel,
        field_manager: str,
        *,
        settings: configuration.Settings | None = None,
) -> EventApplyConfiguration:
    """
    The same as `extract_event`, but for the ``status`` subresource.
    """
    return _extract_event(event, field_manager, 'status', settings=settings)


def _extract_event(
        event: Mapping[str, Any] | bodies.Body | thirdparty.KubernetesModel,
        field_manager: str,
        subresource: str,
        *,
        settings: configuration.Settings | None = None,
) -> EventApplyConfiguration:
    body = bodies.as_body(event)
    config = EventApplyConfiguration()
    descriptor = schemas.get_default_registry().type(EventApplyConfiguration.SCHEMA)
    managedfields.extract_into(body, descriptor, field_manager, config, subresource, settings=settings)
    config.with_name(body.meta.name or '')
    config.with_namespace(body.meta.namespace or '')
    config.with_kind(EventApplyConfiguration.KIND)
    config.with_api_version(EventApplyConfiguration.API_VERSION)
    return config
